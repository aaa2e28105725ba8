"""
Common test fixtures shared by all modules.

Provides factory functions for:
- Elements (sequential or seeded-random)
- Trees pre-populated with elements
- Deterministic proof randomness
"""

import random
from typing import Iterable, Optional

from zksmt.crypto.element import Element
from zksmt.merkle.tree import Tree


# Fixed blinding so proofs are reproducible across runs
FIXED_RANDOMNESS: bytes = bytes(range(32))


# =============================================================================
# Element Factories
# =============================================================================

def make_elements(values: Iterable[int]) -> list[Element]:
    """Elements with the given canonical values."""
    return [Element(v) for v in values]


def make_random_elements(count: int, seed: int = 0, depth: int = 64) -> list[Element]:
    """
    Seeded random elements with pairwise distinct slots in a tree of ``depth``.

    Elements whose low-order bits collide with an earlier one are skipped,
    so every returned element can be inserted into the same tree.
    """
    rng = random.Random(seed)
    elements: list[Element] = []
    slots: set[tuple[bool, ...]] = set()
    while len(elements) < count:
        element = Element.from_uniform_bytes(rng.randbytes(64))
        slot = element.least_significant_bits(depth - 1)
        if slot in slots:
            continue
        slots.add(slot)
        elements.append(element)
    return elements


# =============================================================================
# Tree Factories
# =============================================================================

def make_tree(
    elements: Iterable[Element] = (),
    depth: int = 64,
    hasher: Optional[str] = None,
) -> Tree:
    """A tree of ``depth`` with ``elements`` inserted in order."""
    tree = Tree(depth=depth, hasher=hasher)
    for element in elements:
        tree.insert(element)
    return tree
