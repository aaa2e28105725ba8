"""
Merkle - Null-Hash Table
Hashes of fully empty subtrees, indexed by subtree height.

Rules:
1. T[0] = NULL
2. T[i + 1] = merge(T[i], T[i])
3. The table has NULL_TABLE_SIZE entries, enough for trees up to
   MAX_TREE_DEPTH levels

One table exists per hasher per process. It is built on first request
and read-only afterwards; trees receive it by reference.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Iterator, Sequence

from zksmt.crypto.element import NULL, Element
from zksmt.crypto.hashing import Hasher

NULL_TABLE_SIZE: int = 128


class NullHashTable(Sequence[Element]):
    """Immutable table of empty-subtree hashes for one hasher."""

    __slots__ = ("_hasher", "_hashes")

    def __init__(self, hasher: Hasher, hashes: Sequence[Element]) -> None:
        self._hasher = hasher
        self._hashes: tuple[Element, ...] = tuple(hashes)

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    def __getitem__(self, index):
        return self._hashes[index]

    def __len__(self) -> int:
        return len(self._hashes)

    def __iter__(self) -> Iterator[Element]:
        return iter(self._hashes)

    def __repr__(self) -> str:
        return f"NullHashTable(hasher={self._hasher.name!r}, size={len(self._hashes)})"


def build_null_hash_table(hasher: Hasher, size: int = NULL_TABLE_SIZE) -> NullHashTable:
    """
    Compute the null-hash table by repeated self-merge from NULL.

    Args:
        hasher: Merge primitive to use
        size: Number of entries to compute

    Returns:
        A fully populated NullHashTable
    """
    hashes: list[Element] = []
    current = NULL
    for _ in range(size):
        hashes.append(current)
        current = hasher.merge(current, current)
    return NullHashTable(hasher, hashes)


@lru_cache(maxsize=None)
def null_hash_table(hasher: Hasher) -> NullHashTable:
    """
    Process-wide table for ``hasher``.

    A concurrent first call may build the table twice; callers only ever
    see a complete table because it is published after construction.
    """
    return build_null_hash_table(hasher)


__all__ = [
    "NULL_TABLE_SIZE",
    "NullHashTable",
    "build_null_hash_table",
    "null_hash_table",
]
