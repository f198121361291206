"""
Output of the matched pairs.
    -> Format every match as "itemA,itemB".
    -> Write all lines to the output file first, through a temporary file moved into place.
    -> Print the same lines to stdout only after the file is in place,
       so a failed write leaves both sinks untouched.
"""
import logging
import os
import sys
import tempfile
from typing import Iterable, List, TextIO

from cooccur.errors import OutputWriteFailure
from cooccur.pairs import Match

__all__ = [
    "format_match", "MatchWriter"
]

logger = logging.getLogger(__name__)


def format_match(match: Match, delimiter: str=",") -> str:
    return "{0}{1}{2}".format(match.item_a, delimiter, match.item_b)


def _current_umask() -> int:
    # os.umask can only be read by setting it
    umask = os.umask(0o022)
    os.umask(umask)
    return umask


class MatchWriter(object):
    def __init__(self, output_path="output.txt", stream: TextIO=None):
        """
        :param output_path: file to create or overwrite.
        :param stream: console sink, sys.stdout when omitted.
        """
        self._output_path = output_path
        self._stream = stream

    def write(self, matches: Iterable[Match]) -> List[str]:
        lines = [format_match(match) for match in matches]
        self._write_file(lines)
        stream = self._stream if self._stream is not None else sys.stdout
        for line in lines:
            print(line, file=stream)
        return lines

    def _write_file(self, lines: List[str]) -> None:
        directory = os.path.dirname(os.path.abspath(self._output_path))
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(prefix=".cooccur-", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as file:
                for line in lines:
                    file.write(line + "\n")
            # mkstemp creates the file as 0600, open() would honour the umask
            os.chmod(tmp_path, 0o666 & ~_current_umask())
            os.replace(tmp_path, self._output_path)
        except OSError as error:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise OutputWriteFailure(self._output_path, error) from error
        logger.debug("Wrote %d matches to %s", len(lines), self._output_path)
