"""
Test fixtures package for zksmt tests.

Usage:
    from fixtures import make_tree, make_random_elements

    def test_something():
        tree = make_tree(make_random_elements(10))
"""

from .common import (
    FIXED_RANDOMNESS,
    make_elements,
    make_random_elements,
    make_tree,
)

__all__ = [
    "FIXED_RANDOMNESS",
    "make_elements",
    "make_random_elements",
    "make_tree",
]
