"""
One batch run: input file -> IndexBuilder -> PairMatcher -> MatchWriter.
The index and the matches live on the run object and are dropped with it.
"""
import logging
import time
from collections import namedtuple
from typing import TextIO

from cooccur.config import Configuration
from cooccur.output import MatchWriter
from cooccur.pairs import IndexBuilder, PairMatcher

__all__ = [
    "CooccurrenceRun", "RunResult"
]

logger = logging.getLogger(__name__)

RunResult = namedtuple("RunResult", ["matches", "elapsed_ms"])


class CooccurrenceRun(object):
    def __init__(self, config: Configuration, stream: TextIO=None):
        self._config = config
        self._stream = stream
        self.index = None
        self.matches = None

    def run(self, start_time: float=None) -> RunResult:
        """
        :param start_time: time.monotonic() at which the run started, now when omitted.
        :return: RunResult(matches, elapsed_ms)
        """
        start_time = time.monotonic() if start_time is None else start_time
        config = self._config

        self.index = IndexBuilder(threshold=config.threshold).build_from_file(
            config.input_path, delimiter=config.delimiter, encoding=config.encoding
        )
        self.matches = PairMatcher(threshold=config.threshold).match(self.index)
        MatchWriter(config.output_path, stream=self._stream).write(self.matches)

        elapsed_ms = int((time.monotonic() - start_time) * 1000)
        logger.info("Run over %s finished in %d ms", config.input_path, elapsed_ms)
        return RunResult(matches=self.matches, elapsed_ms=elapsed_ms)
