"""
All-Pairs Matching:
    Compare every pair of items left in the pruned index.
    -> Fix the order of the items (the order they were first seen).
    -> Compare the item at position i only with items at positions > i,
       so each unordered pair is checked exactly once and no item meets itself.
    -> Two items match if the AND of their bitmaps has at least `threshold` set bits.

    mode="bitmap":
        -> Stack all bitmaps into a (k, ceil(G/8)) uint8 matrix.
        -> For row i, AND it with rows i+1..k-1 at once and popcount every result row.
    mode="pairwise":
        -> Intersect two bitmaps at a time. Same result, kept as the plain version.

>> from cooccur.pairs import IndexBuilder, PairMatcher
>> index = IndexBuilder(threshold=2).build([["a", "b"], ["a", "b"], ["a", "b"]])
>> PairMatcher(threshold=2).match(index)
[Match(item_a='a', item_b='b', count=3)]
"""
import logging
from collections import namedtuple
from typing import List

import numpy as np

from cooccur.errors import MalformedIndexError
from cooccur.pairs.index_builder import MembershipIndex, check_threshold
from cooccur.utils import popcount

__all__ = [
    "Match", "PairMatcher"
]

logger = logging.getLogger(__name__)

Match = namedtuple("Match", ["item_a", "item_b", "count"])


class PairMatcher(object):
    def __init__(self, threshold: int=50, mode: str="bitmap"):
        """
        :param threshold: Minimum number of shared buckets to count a pair of items as a match.
        :param mode: "bitmap" (vectorized over the stacked index) or "pairwise".
        """
        self._threshold = check_threshold(threshold)
        if mode == "bitmap":
            self._match = self._match_bitmap
        elif mode == "pairwise":
            self._match = self._match_pairwise
        else:
            raise NotImplementedError(
                "Matching mode {0!r} is not available.".format(mode)
            )
        self._mode = mode

    @property
    def threshold(self) -> int:
        return self._threshold

    def match(self, index: MembershipIndex) -> List[Match]:
        """
        :param index: MembershipIndex pruned with a threshold not above this matcher's.
        :return: list<Match>, ordered by the position of item_a, then of item_b.
        """
        self._check_index(index)
        matches = self._match(index)
        logger.info("Compared %d items, found %d matches (mode=%s)",
                    len(index), len(matches), self._mode)
        return matches

    def _check_index(self, index: MembershipIndex) -> None:
        if index.threshold > self._threshold:
            # pairs sharing fewer than index.threshold buckets may have been pruned away
            raise MalformedIndexError(
                "Index pruned with threshold {0} cannot be matched with threshold {1}.".format(
                    index.threshold, self._threshold)
            )
        for item, cardinality in index.cardinalities():
            if cardinality < index.threshold:
                raise MalformedIndexError(
                    "Item {0!r} appears in {1} groups, below the index threshold {2}.".format(
                        item, cardinality, index.threshold)
                )
            # to_matrix keeps only n_groups bits per row
            if index[item].max_index() >= index.n_groups:
                raise MalformedIndexError(
                    "Item {0!r} appears in group {1}, beyond the {2} groups of the index.".format(
                        item, index[item].max_index(), index.n_groups)
                )

    def _match_bitmap(self, index: MembershipIndex) -> List[Match]:
        items = list(index)
        matrix = index.to_matrix()
        matches = list()
        for i in range(len(items) - 1):
            overlap = popcount(matrix[i + 1:] & matrix[i])
            for offset in np.flatnonzero(overlap >= self._threshold):
                matches.append(Match(items[i], items[i + 1 + offset], int(overlap[offset])))
        return matches

    def _match_pairwise(self, index: MembershipIndex) -> List[Match]:
        items = list(index)
        matches = list()
        for i, item_a in enumerate(items[:-1]):
            bitmap_a = index[item_a]
            for item_b in items[i + 1:]:
                count = bitmap_a.intersection_cardinality(index[item_b])
                if count >= self._threshold:
                    matches.append(Match(item_a, item_b, count))
        return matches


if __name__ == '__main__':
    from cooccur.pairs.index_builder import IndexBuilder
    _index = IndexBuilder(threshold=2).build([
        ["a", "b", "c"],
        ["b", "c"],
        ["a", "d"],
        ["b", "d"],
        ["a", "b", "c", "d"]
    ])
    [print(m) for m in PairMatcher(threshold=2).match(_index)]
