"""
Merkle - Sibling Paths
Membership and non-membership evidence for one slot of a sparse tree.

A Path carries the sibling hashes from the target leaf up to the root
(leaf-to-root order) and the target's bit-path (MSB first). Folding the
siblings onto a candidate leaf recomputes a root:
- Membership: fold the element itself; the result equals the tree root
- Non-membership: fold NULL; the result equals the tree root if and only
  if the slot was never occupied

Folding Rule (one bit per sibling, least significant bit first):
- bit 0: the accumulator is the left child  -> merge(acc, sibling)
- bit 1: the accumulator is the right child -> merge(sibling, acc)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from zksmt.crypto.element import NULL, Element
from zksmt.crypto.hashing import Hasher


def compute_root(
    siblings: Sequence[Element],
    bits: Sequence[bool],
    leaf: Element,
    hasher: Hasher,
) -> Element:
    """
    Fold ``siblings`` onto ``leaf`` and return the resulting root.

    Args:
        siblings: Sibling hashes, leaf-to-root
        bits: Bit-path of the slot, MSB first (root-to-leaf)
        leaf: Candidate leaf value (an element, or NULL)
        hasher: Merge primitive

    Raises:
        ValueError: If siblings and bits differ in length
    """
    if len(siblings) != len(bits):
        raise ValueError(
            f"Path has {len(siblings)} siblings but {len(bits)} direction bits"
        )

    root = leaf
    for is_right, sibling in zip(reversed(bits), siblings):
        if is_right:
            root = hasher.merge(sibling, root)
        else:
            root = hasher.merge(root, sibling)
    return root


@dataclass(frozen=True)
class Path:
    """
    Sibling path for one slot of a tree of depth ``len(siblings) + 1``.

    Attributes:
        siblings: Sibling hashes, leaf-to-root
        bits: The slot's bit-path, MSB first
        hasher: The merge primitive of the tree the path was taken from
    """
    siblings: tuple[Element, ...]
    bits: tuple[bool, ...]
    hasher: Hasher

    def __post_init__(self) -> None:
        if len(self.siblings) != len(self.bits):
            raise ValueError(
                f"Path has {len(self.siblings)} siblings but {len(self.bits)} direction bits"
            )

    def __len__(self) -> int:
        return len(self.siblings)

    @property
    def depth(self) -> int:
        return len(self.siblings) + 1

    def compute_root(self, element: Element) -> Element:
        """Recompute the root with ``element`` placed at this path's slot."""
        return compute_root(self.siblings, self.bits, element, self.hasher)

    def verify_membership(self, element: Element, root: Element) -> bool:
        return self.compute_root(element) == root

    def verify_non_membership(self, root: Element) -> bool:
        return self.compute_root(NULL) == root


__all__ = [
    "Path",
    "compute_root",
]
