"""
Co-occurrence pair mining: find pairs of items (e.g. artists) appearing together
in at least `threshold` buckets (e.g. playlists).
"""

from .config import Configuration
from .errors import CooccurError, UsageError, InputUnavailable, OutputWriteFailure, MalformedIndexError
from .pairs import IndexBuilder, MembershipIndex, Match, PairMatcher, read_groups
from .pipeline import CooccurrenceRun

__all__ = [
    "Configuration", "CooccurrenceRun",
    "IndexBuilder", "MembershipIndex", "Match", "PairMatcher", "read_groups",
    "CooccurError", "UsageError", "InputUnavailable", "OutputWriteFailure", "MalformedIndexError"
]
