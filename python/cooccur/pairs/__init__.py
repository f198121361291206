"""
This module is to find pairs of items sharing at least `threshold` buckets.
    -> The input is like:
    [
        [itemA, itemB, ...],
        [itemA, itemC, ...],
        ...
    ]
    Each inner list is a bucket (e.g. a playlist of artists).

    -> The output is a list of Match(item_a, item_b, count), one per unordered pair.

    Stage 1: IndexBuilder maps items to bitmaps of bucket indexes and prunes rare items.
    Stage 2: PairMatcher intersects the bitmaps of every remaining pair.
"""

from .index_builder import IndexBuilder, MembershipIndex, read_groups
from .pair_matcher import Match, PairMatcher

__all__ = [
    "IndexBuilder", "MembershipIndex", "read_groups",
    "Match", "PairMatcher"
]
