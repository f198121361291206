"""
Inverted Index:
    One pass over the buckets to map each item to the buckets containing it.
    -> The input file is like:
    {
    itemA,itemB,...
    itemA,itemC,...
    ...
    }
    Each line is a bucket, and its line number (from 0) is the bucket index.

    Pass1:
        -> For each item in a bucket, set the bit of the bucket index in the item's bitmap.
        -> Duplicated items in one bucket set the same bit, so each bucket is counted once.
    Pruning:
        -> Remove items appearing in fewer than `threshold` buckets.
        -> Monotonicity: |A & B| <= |A|, so a pair containing a pruned item can never be frequent.

>> from cooccur.pairs import IndexBuilder
>> index = IndexBuilder(threshold=2).build([["a", "b"], ["a", "b"], ["a", "c"]])
>> dict(index.cardinalities())
{'a': 3, 'b': 2}
"""
import logging
from collections.abc import Mapping
from typing import Dict, Iterable, Iterator, List, Tuple

import numpy as np

from cooccur.errors import InputUnavailable
from cooccur.utils import BitMap

__all__ = [
    "MembershipIndex", "IndexBuilder", "read_groups", "split_line", "check_threshold"
]

logger = logging.getLogger(__name__)


def check_threshold(threshold) -> int:
    # bool is an int subclass, but True is not a threshold
    if isinstance(threshold, bool) or not isinstance(threshold, (int, np.integer)) or threshold < 1:
        raise ValueError("The threshold must be a positive integer, got {0!r}.".format(threshold))
    return int(threshold)


def split_line(line: str, delimiter: str=",") -> List[str]:
    """
    Split one line into items, dropping trailing empty fields:
        "a,b," -> ["a", "b"]; "a,,b" -> ["a", "", "b"]; "" -> []
    """
    items = line.split(delimiter)
    while items and not items[-1]:
        items.pop()
    return items


def read_groups(path, delimiter: str=",", encoding: str="utf-8") -> List[List[str]]:
    """
    Read the whole file into memory, one bucket per line.
    Items are split on the delimiter without trimming (see split_line); an empty line is an empty bucket.
    Any failure while opening or reading aborts the read, no partial result is returned.

    :param path: str/os.PathLike, the input file.
    :param delimiter: the single character separating items.
    :param encoding: text encoding of the file.
    :return: list<list<item>>
    """
    if not delimiter:
        raise ValueError("The delimiter must not be empty.")
    groups = list()
    try:
        with open(path, "r", encoding=encoding) as file:
            for line in file:
                groups.append(split_line(line.rstrip("\n"), delimiter))
    except (OSError, UnicodeDecodeError) as error:
        raise InputUnavailable(path, error) from error
    logger.debug("Read %d groups from %s", len(groups), path)
    return groups


class MembershipIndex(Mapping):
    """
    Read-only mapping item -> BitMap of bucket indexes.
    Iteration follows the order in which items were first seen.
    Every member appears in at least `threshold` buckets.
    """
    def __init__(self, memberships: Dict[str, BitMap], n_groups: int, threshold: int):
        self._memberships = memberships
        self._n_groups = n_groups
        self._threshold = threshold

    @property
    def n_groups(self) -> int:
        return self._n_groups

    @property
    def threshold(self) -> int:
        return self._threshold

    def __getitem__(self, item: str) -> BitMap:
        return self._memberships[item]

    def __iter__(self) -> Iterator[str]:
        return iter(self._memberships)

    def __len__(self) -> int:
        return len(self._memberships)

    def cardinalities(self) -> Iterator[Tuple[str, int]]:
        for item, bitmap in self._memberships.items():
            yield item, bitmap.cardinality()

    def to_matrix(self) -> np.ndarray:
        """
        Stack the bitmaps in iteration order.
        :return: np.ndarray<uint8> of shape (number of items, ceil(n_groups / 8))
        """
        n_bytes = (self._n_groups + 7) // 8
        if not self._memberships:
            return np.zeros((0, n_bytes), dtype=np.uint8)
        return np.vstack([
            bitmap.to_array(n_bytes) for bitmap in self._memberships.values()
        ])

    def __repr__(self):
        return "MembershipIndex(items={0}, n_groups={1}, threshold={2})".format(
            len(self), self._n_groups, self._threshold
        )


class IndexBuilder(object):
    def __init__(self, threshold: int=50):
        """
        :param threshold: Minimum number of buckets an item must appear in to be kept.
        """
        self._threshold = check_threshold(threshold)

    @property
    def threshold(self) -> int:
        return self._threshold

    def build(self, groups: Iterable[Iterable[str]]) -> MembershipIndex:
        """
        :param groups: iterable<iterable<item>>, the bucket index is the position in the iterable.
        :return: the pruned MembershipIndex.
        """
        memberships, n_groups = self._first_pass_index_items(groups)
        n_seen = len(memberships)
        memberships = self._prune(memberships, self._threshold)
        logger.info("Indexed %d items over %d groups, %d kept with threshold %d",
                    n_seen, n_groups, len(memberships), self._threshold)
        return MembershipIndex(memberships, n_groups=n_groups, threshold=self._threshold)

    def build_from_file(self, path, delimiter: str=",", encoding: str="utf-8") -> MembershipIndex:
        return self.build(read_groups(path, delimiter=delimiter, encoding=encoding))

    @staticmethod
    def _first_pass_index_items(groups: Iterable[Iterable[str]]) -> (Dict[str, BitMap], int):
        memberships = dict()
        n_groups = 0
        for group_idx, group in enumerate(groups):
            for item in group:
                if item not in memberships:
                    memberships[item] = BitMap()
                memberships[item].add(group_idx)
            n_groups = group_idx + 1
        return memberships, n_groups

    @staticmethod
    def _prune(memberships: Dict[str, BitMap], threshold: int) -> Dict[str, BitMap]:
        return {
            item: bitmap for item, bitmap in memberships.items()
            if bitmap.cardinality() >= threshold
        }


if __name__ == '__main__':
    index = IndexBuilder(threshold=2).build([["a", "b"], ["a", "b"], ["a", "c"]])
    [print(item, index[item]) for item in index]
