"""
Merkle - Sparse Node Representation
Recursive, compressed representation of a sparse Merkle subtree.

A Node is exactly one of:
- Leaf(element): an occupied slot at the bottom of the tree
- EmptySubtree(height): a fully empty subtree with ``height`` levels of
  merges above its leaves (0 = a single empty leaf); its children are
  never materialized and its hash comes from the null-hash table
- Parent(left, right, hash): an expanded node whose ``hash`` always
  equals merge(hash(left), hash(right))

Every operation below handles all three cases explicitly.

Invariants:
1. Both children of a Parent have the same depth
2. depth(EmptySubtree(h)) == h + 1, depth(Leaf) == 1,
   depth(Parent) == depth(left) + 1
3. A Parent's hash is recomputed on every insertion that passes through it
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from zksmt.crypto.element import Element, bits_to_str
from zksmt.merkle.null_hashes import NullHashTable
from zksmt.schemas.errors import OccupiedSlotException


@dataclass(frozen=True)
class Leaf:
    element: Element


@dataclass(frozen=True)
class EmptySubtree:
    height: int


@dataclass
class Parent:
    left: Node
    right: Node
    hash: Element


Node = Union[Leaf, EmptySubtree, Parent]


def _unknown_node(node: object) -> TypeError:
    return TypeError(f"Not a tree node: {type(node).__name__}")


def new_node(depth: int) -> Node:
    """
    Create an empty subtree with ``depth`` levels.

    A depth of 1 is a single empty leaf.
    """
    if depth < 1:
        raise ValueError(f"Node depth must be positive, got {depth}")
    return EmptySubtree(depth - 1)


def node_hash(node: Node, table: NullHashTable) -> Element:
    """The hash of a node: the element, the cached parent hash, or T[height]."""
    if isinstance(node, Leaf):
        return node.element
    if isinstance(node, Parent):
        return node.hash
    if isinstance(node, EmptySubtree):
        return table[node.height]
    raise _unknown_node(node)


def node_depth(node: Node) -> int:
    if isinstance(node, Leaf):
        return 1
    if isinstance(node, EmptySubtree):
        return node.height + 1
    if isinstance(node, Parent):
        left_depth = node_depth(node.left)
        right_depth = node_depth(node.right)
        if left_depth != right_depth:
            raise ValueError(f"Unbalanced parent: left depth {left_depth}, right depth {right_depth}")
        return left_depth + 1
    raise _unknown_node(node)


def node_insert(
    node: Node,
    bits: tuple[bool, ...],
    element: Element,
    table: NullHashTable,
    offset: int = 0,
) -> Node:
    """
    Insert ``element`` below ``node`` following ``bits[offset:]``.

    Returns the node that replaces ``node`` in its parent: a new Leaf for
    an empty leaf, a freshly expanded Parent for a compressed subtree, or
    ``node`` itself (mutated) for an existing Parent.

    Raises:
        OccupiedSlotException: If the slot already holds an element. The
            tree is left untouched, since no parent hash is rewritten
            until the recursive call below it has returned.
    """
    if isinstance(node, Leaf):
        raise OccupiedSlotException(
            f"Slot {bits_to_str(bits) or '<root>'} is already occupied by {node.element!r}",
            bits=bits_to_str(bits),
            existing=node.element.to_hex(),
            duplicate=node.element == element,
        )

    if isinstance(node, EmptySubtree):
        if node.height == 0:
            return Leaf(element)
        # Expand one level and retry against the new parent
        expanded = Parent(
            left=EmptySubtree(node.height - 1),
            right=EmptySubtree(node.height - 1),
            hash=table[node.height],
        )
        return node_insert(expanded, bits, element, table, offset)

    if isinstance(node, Parent):
        if bits[offset]:
            node.right = node_insert(node.right, bits, element, table, offset + 1)
        else:
            node.left = node_insert(node.left, bits, element, table, offset + 1)
        node.hash = table.hasher.merge(
            node_hash(node.left, table), node_hash(node.right, table)
        )
        return node

    raise _unknown_node(node)


def collect_leaves(node: Node) -> list[Element]:
    """Collect the occupied leaves under ``node``, left to right."""
    if isinstance(node, Leaf):
        return [node.element]
    if isinstance(node, EmptySubtree):
        return []
    if isinstance(node, Parent):
        return collect_leaves(node.left) + collect_leaves(node.right)
    raise _unknown_node(node)


__all__ = [
    "Leaf",
    "EmptySubtree",
    "Parent",
    "Node",
    "new_node",
    "node_hash",
    "node_depth",
    "node_insert",
    "collect_leaves",
]
