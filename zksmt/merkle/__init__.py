"""
Sparse Merkle Tree

Compressed sparse Merkle tree with membership and non-membership paths.

This module provides:
- Tree: content-addressed, append-only set with a Merkle root
- Path: sibling path for one slot, with compute_root()
- Node algebra: Leaf | EmptySubtree | Parent
- NullHashTable: hashes of empty subtrees, shared per hasher

Usage:
    from zksmt.crypto import Element, NULL
    from zksmt.merkle import Tree

    tree = Tree(depth=64)
    tree.insert(Element(123))

    # Membership
    assert tree.path_for(Element(123)).compute_root(Element(123)) == tree.root_hash()

    # Non-membership
    assert tree.path_for(Element(7)).compute_root(NULL) == tree.root_hash()
"""
from .null_hashes import (
    NULL_TABLE_SIZE,
    NullHashTable,
    build_null_hash_table,
    null_hash_table,
)
from .node import (
    EmptySubtree,
    Leaf,
    Node,
    Parent,
    collect_leaves,
    new_node,
    node_depth,
    node_hash,
    node_insert,
)
from .path import Path, compute_root
from .tree import DEFAULT_TREE_DEPTH, MAX_TREE_DEPTH, Tree, validate_depth

__all__ = [
    "NULL_TABLE_SIZE",
    "NullHashTable",
    "build_null_hash_table",
    "null_hash_table",
    "EmptySubtree",
    "Leaf",
    "Node",
    "Parent",
    "collect_leaves",
    "new_node",
    "node_depth",
    "node_hash",
    "node_insert",
    "Path",
    "compute_root",
    "DEFAULT_TREE_DEPTH",
    "MAX_TREE_DEPTH",
    "Tree",
    "validate_depth",
]
