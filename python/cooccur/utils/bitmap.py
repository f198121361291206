"""
Bitmap
    A set of bounded non-negative integers stored as a bit-vector.
        -> Bit i lives in byte i >> 3, at position i & 7 (little bit order).
        -> Insertion sets one bit: O(1), amortized over the growth of the buffer.
        -> Intersection is a bitwise AND of the two buffers: O(n/8).
        -> Cardinality is a population count over the buffer: O(n/8).

It is used to keep the membership set of an item, i.e. the indexes of the buckets containing it.
"""
import numpy as np
from typing import Iterable

__all__ = [
    "BitMap", "popcount"
]

# number of set bits of every byte value
_POPCOUNT_TABLE = np.array([bin(i).count("1") for i in range(256)], dtype=np.uint8)


def popcount(buffer: np.ndarray) -> np.ndarray:
    """
    Count set bits along the last axis of a uint8 array.
    :param buffer: np.ndarray<uint8>, 1-d or 2-d
    :return: int64 scalar for a 1-d buffer, np.ndarray<int64> of row counts for a 2-d buffer.
    """
    return _POPCOUNT_TABLE[buffer].sum(axis=-1, dtype=np.int64)


class BitMap(object):
    def __init__(self, indices: Iterable[int]=(), n_bytes: int=8):
        self._bits = np.zeros(max(n_bytes, 1), dtype=np.uint8)
        for idx in indices:
            self.add(idx)

    def add(self, idx: int) -> None:
        if idx < 0:
            raise ValueError("Bit index must be non-negative, got {0}.".format(idx))
        byte = idx >> 3
        if byte >= self._bits.shape[0]:
            self._grow(byte + 1)
        self._bits[byte] |= np.uint8(1 << (idx & 7))

    def _grow(self, min_bytes: int) -> None:
        size = self._bits.shape[0]
        while size < min_bytes:
            size *= 2
        grown = np.zeros(size, dtype=np.uint8)
        grown[:self._bits.shape[0]] = self._bits
        self._bits = grown

    def __contains__(self, idx: int) -> bool:
        byte = idx >> 3
        if idx < 0 or byte >= self._bits.shape[0]:
            return False
        return bool((self._bits[byte] >> (idx & 7)) & 1)

    def cardinality(self) -> int:
        return int(popcount(self._bits))

    def __len__(self):
        return self.cardinality()

    def __and__(self, other: "BitMap") -> "BitMap":
        n = min(self._bits.shape[0], other._bits.shape[0])
        result = BitMap(n_bytes=n)
        result._bits[:n] = self._bits[:n] & other._bits[:n]
        return result

    def intersection_cardinality(self, other: "BitMap") -> int:
        """
        |self & other| without allocating the intersected bitmap.
        """
        n = min(self._bits.shape[0], other._bits.shape[0])
        return int(popcount(self._bits[:n] & other._bits[:n]))

    def max_index(self) -> int:
        """
        :return: the highest set bit, -1 for an empty bitmap.
        """
        nonzero = np.flatnonzero(self._bits)
        if nonzero.shape[0] == 0:
            return -1
        last = int(nonzero[-1])
        return last * 8 + int(self._bits[last]).bit_length() - 1

    def indices(self) -> np.ndarray:
        """
        :return: np.ndarray<int64>, the set bits in ascending order.
        """
        return np.flatnonzero(np.unpackbits(self._bits, bitorder="little"))

    def to_array(self, n_bytes: int) -> np.ndarray:
        """
        Copy of the buffer truncated or zero-padded to exactly n_bytes,
        so that bitmaps of one index can be stacked into a matrix.
        Truncation drops bits, the caller must pass a width covering every set bit.
        """
        array = np.zeros(n_bytes, dtype=np.uint8)
        n = min(n_bytes, self._bits.shape[0])
        array[:n] = self._bits[:n]
        return array

    def __eq__(self, other):
        if not isinstance(other, BitMap):
            return NotImplemented
        return np.array_equal(self.indices(), other.indices())

    def __repr__(self):
        return "BitMap({0})".format(self.indices().tolist())
