"""
Merkle - Sparse Merkle Tree
Content-addressed, append-only set of field elements with a Merkle root.

This module provides:
- Tree: fixed-depth sparse Merkle tree over a compressed Node
- Membership and non-membership paths via Tree.path_for

Placement Rules:
1. A tree of depth N has 2**(N-1) slots; leaves sit at depth N
2. An element's slot is its lowest N-1 bits, most significant first
3. Two distinct elements sharing those bits collide; the second insert
   fails with OccupiedSlotException (set semantics, no independent key)
4. An empty tree of depth N is EmptySubtree(N-1), so its root is T[N-1]

Concurrency:
- One writer at a time; concurrent readers of a tree that is not being
  mutated are safe. The null-hash table is the only state shared between
  trees and it is read-only.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator, ValuesView

from zksmt.crypto.element import NULL, Element, bits_to_str
from zksmt.crypto.hashing import Hasher, get_hasher
from zksmt.merkle.node import (
    EmptySubtree,
    Leaf,
    Node,
    Parent,
    new_node,
    node_hash,
    node_insert,
)
from zksmt.merkle.null_hashes import NULL_TABLE_SIZE, NullHashTable, null_hash_table
from zksmt.merkle.path import Path
from zksmt.schemas.errors import (
    InvalidConfigurationException,
    OccupiedSlotException,
    ReservedElementException,
)

if TYPE_CHECKING:
    from zksmt.config.runtime import SmtConfig
    from zksmt.schemas.proof import InsertProof

logger = logging.getLogger(__name__)

DEFAULT_TREE_DEPTH: int = 64

# The root of an empty tree of depth N is T[N-1]
MAX_TREE_DEPTH: int = NULL_TABLE_SIZE


def validate_depth(depth: object) -> int:
    """
    Check a tree depth and return it.

    Raises:
        InvalidConfigurationException: If depth is not an int in
            [1, MAX_TREE_DEPTH]
    """
    if isinstance(depth, bool) or not isinstance(depth, int):
        raise InvalidConfigurationException(
            f"Tree depth must be an integer, got {type(depth).__name__}",
            field_path="tree.depth",
        )
    if depth < 1:
        raise InvalidConfigurationException(
            f"Tree depth must be positive, got {depth}",
            field_path="tree.depth",
        )
    if depth > MAX_TREE_DEPTH:
        raise InvalidConfigurationException(
            f"Tree depth {depth} exceeds the maximum of {MAX_TREE_DEPTH}",
            field_path="tree.depth",
        )
    return depth


class Tree:
    """
    A sparse Merkle tree with configurable depth.

    The compressed node structure is the source of truth for hashes; a
    flat index from bit-path to element mirrors its occupied leaves and
    answers containment, size and enumeration in O(1).

    Example:
        >>> tree = Tree(depth=64)
        >>> tree.insert(Element(123))
        >>> tree.path_for(Element(123)).compute_root(Element(123)) == tree.root_hash()
        True
    """

    def __init__(self, depth: int = DEFAULT_TREE_DEPTH, hasher: Hasher | str | None = None) -> None:
        self._depth = validate_depth(depth)
        self._hasher = self._resolve_hasher(hasher)
        self._null_hashes = null_hash_table(self._hasher)
        self._root: Node = new_node(self._depth)
        self._index: dict[tuple[bool, ...], Element] = {}

    @staticmethod
    def _resolve_hasher(hasher: Hasher | str | None) -> Hasher:
        """Resolve ``hasher`` to the instance registered under its name."""
        if not isinstance(hasher, Hasher):
            return get_hasher(hasher)
        registered = get_hasher(hasher.name)
        if registered != hasher:
            raise InvalidConfigurationException(
                f"Hasher {hasher!r} is not the one registered as {hasher.name!r}",
                field_path="tree.hasher",
            )
        return registered

    @classmethod
    def from_config(cls, config: SmtConfig | None = None) -> Tree:
        """Build an empty tree from the tree section of a runtime config (the process default when None)."""
        if config is None:
            from zksmt.config.runtime import get_default_config
            config = get_default_config()
        return cls(depth=config.tree.depth, hasher=config.tree.hasher)

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def capacity(self) -> int:
        """Number of slots, 2**(depth-1)."""
        return 1 << (self._depth - 1)

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def null_hashes(self) -> NullHashTable:
        return self._null_hashes

    @property
    def root(self) -> Node:
        """The compressed node structure (read-only by convention)."""
        return self._root

    def bits_for(self, element: Element) -> tuple[bool, ...]:
        """The bit-path of ``element``'s slot, MSB first."""
        return element.least_significant_bits(self._depth - 1)

    def __len__(self) -> int:
        return len(self._index)

    def is_empty(self) -> bool:
        return not self._index

    def root_hash(self) -> Element:
        return node_hash(self._root, self._null_hashes)

    def contains(self, element: Element) -> bool:
        """True if ``element`` itself (not merely a colliding element) is stored."""
        return self._index.get(self.bits_for(element)) == element

    def __contains__(self, element: object) -> bool:
        return isinstance(element, Element) and self.contains(element)

    def elements(self) -> ValuesView[Element]:
        """
        Stored elements, in no particular order.

        The returned view is lazy and can be iterated any number of times.
        """
        return self._index.values()

    def __iter__(self) -> Iterator[Element]:
        return iter(self._index.values())

    def insert(self, element: Element) -> None:
        """
        Insert an element into the tree.

        Raises:
            OccupiedSlotException: If the element is already present or a
                different element occupies the same slot. The tree is
                unchanged in that case.
            ReservedElementException: If the element is NULL.
        """
        if element == NULL:
            logger.warning("Rejected insert of the NULL sentinel")
            raise ReservedElementException(
                "NULL marks empty slots and cannot be inserted",
                element=element.to_hex(),
            )
        bits = self.bits_for(element)
        try:
            self._root = node_insert(self._root, bits, element, self._null_hashes)
        except OccupiedSlotException as e:
            logger.warning(
                "Rejected insert of %r at slot %s (duplicate=%s)",
                element, bits_to_str(bits), e.duplicate,
            )
            raise
        self._index[bits] = element
        logger.debug("Inserted %r at slot %s, %d elements", element, bits_to_str(bits), len(self._index))

    def path_for(self, element: Element) -> Path:
        """
        Sibling path for ``element``'s slot, whether or not it is occupied.

        Walks down from the root while nodes are expanded, recording the
        hash of the child not taken. On reaching a compressed empty subtree
        of height n, the remaining n siblings are read straight from the
        null-hash table instead of being materialized.
        """
        bits = self.bits_for(element)
        table = self._null_hashes
        siblings: list[Element] = []
        node = self._root

        for is_right in bits:
            if isinstance(node, Leaf):
                break
            if isinstance(node, EmptySubtree):
                siblings.extend(table[i] for i in reversed(range(node.height)))
                break
            if isinstance(node, Parent):
                if is_right:
                    siblings.append(node_hash(node.left, table))
                    node = node.right
                else:
                    siblings.append(node_hash(node.right, table))
                    node = node.left
                continue
            raise TypeError(f"Not a tree node: {type(node).__name__}")

        siblings.reverse()
        return Path(siblings=tuple(siblings), bits=bits, hasher=self._hasher)

    def insert_and_prove(self, element: Element, randomness: bytes | None = None) -> InsertProof:
        """
        Prove the insertion of ``element`` against the current tree, then insert it.

        Raises:
            ProofGenerationFailedException: If the slot is occupied or the
                backend fails; the tree is unchanged in that case.
        """
        from zksmt.circuits.insert.prover import prove_insert, confirm_new_root

        proof = prove_insert(self, element, randomness=randomness)
        self.insert(element)
        confirm_new_root(proof, self.root_hash())
        return proof

    def __repr__(self) -> str:
        return (
            f"Tree(depth={self._depth}, hasher={self._hasher.name!r}, "
            f"len={len(self._index)}, root={self.root_hash()!r})"
        )


__all__ = [
    "DEFAULT_TREE_DEPTH",
    "MAX_TREE_DEPTH",
    "Tree",
    "validate_depth",
]
