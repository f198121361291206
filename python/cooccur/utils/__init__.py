from .bitmap import BitMap, popcount

__all__ = [
    "BitMap", "popcount"
]
