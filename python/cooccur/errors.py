"""
Errors raised by a co-occurrence run.
    -> UsageError: bad command-line arguments or configuration.
    -> InputUnavailable: the input file cannot be opened or read to the end.
    -> OutputWriteFailure: the output file cannot be created or written.
    -> MalformedIndexError: an internal invariant of the index is broken.
"""

__all__ = [
    "CooccurError", "UsageError", "InputUnavailable",
    "OutputWriteFailure", "MalformedIndexError"
]


class CooccurError(Exception):
    pass


class UsageError(CooccurError):
    pass


class InputUnavailable(CooccurError):
    def __init__(self, path, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__("could not read file: {0}\n{1}".format(path, cause))


class OutputWriteFailure(CooccurError):
    def __init__(self, path, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__("could not write file: {0}\n{1}".format(path, cause))


class MalformedIndexError(CooccurError):
    """
    Programming-level fault: the index handed to the matcher breaks its invariants.
    Not meant to be caught and recovered from.
    """
    pass
