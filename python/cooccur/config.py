"""
Run configuration.
Every setting is taken from the command-line flag if given, else from the environment, else the default:
    -> threshold:   --threshold   COOCCUR_THRESHOLD   50
    -> delimiter:   --delimiter   COOCCUR_DELIMITER   ","
    -> output path: --output      COOCCUR_OUTPUT_PATH "output.txt"
    -> encoding:    --encoding    COOCCUR_ENCODING    "utf-8"

Flags are passed as init kwargs, which pydantic-settings ranks above environment variables.
"""
import codecs

from pydantic import Field, PositiveInt, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cooccur.errors import UsageError

__all__ = [
    "Configuration", "DEFAULT_THRESHOLD", "DEFAULT_DELIMITER", "DEFAULT_OUTPUT", "DEFAULT_ENCODING"
]

DEFAULT_THRESHOLD = 50
DEFAULT_DELIMITER = ","
DEFAULT_OUTPUT = "output.txt"
DEFAULT_ENCODING = "utf-8"


class Configuration(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="COOCCUR_")

    input_path: str
    threshold: PositiveInt = DEFAULT_THRESHOLD
    delimiter: str = Field(default=DEFAULT_DELIMITER, min_length=1, max_length=1)
    output_path: str = DEFAULT_OUTPUT
    encoding: str = DEFAULT_ENCODING

    @field_validator("threshold", mode="before")
    @classmethod
    def reject_bool_threshold(cls, value):
        # bool is an int subclass, but True is not a threshold
        if isinstance(value, bool):
            raise ValueError("threshold must be a positive integer")
        return value

    @field_validator("encoding")
    @classmethod
    def check_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError("unknown encoding {0!r}".format(value))
        return value

    @classmethod
    def resolve(cls, input_path, threshold=None, delimiter=None, output_path=None,
                encoding=None) -> "Configuration":
        """
        Build the configuration, leaving the settings given as None to the environment or the defaults.
        :raise UsageError: when a setting does not validate.
        """
        flags = dict(threshold=threshold, delimiter=delimiter, output_path=output_path, encoding=encoding)
        try:
            return cls(input_path=str(input_path),
                       **{key: value for key, value in flags.items() if value is not None})
        except ValidationError as error:
            raise UsageError("; ".join(
                "{0}: {1}".format(".".join(str(loc) for loc in detail["loc"]), detail["msg"])
                for detail in error.errors()
            )) from error
