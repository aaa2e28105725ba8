"""
Insertion Relation
The statement a proving backend has to enforce for an insertion proof.

Public inputs:  old_root, new_root, hash (plus the tree depth)
Private witness: the sibling path of hash's slot in the tree BEFORE the
                 insertion, and the canonical bit decomposition of hash

Constraints:
- SHAPE:      depth-1 siblings and exactly FIELD_BITS boolean bits
- DECOMPOSE:  sum(bit_i * 2**i) == hash, so the left/right selectors are
              the canonical bits of hash and not a path of the prover's
              choosing
- NOT_NULL:   hash != NULL, so a filled slot never folds like an empty one
- R1 (prior absence):   fold(siblings, NULL) == old_root
- R2 (post insertion):  fold(siblings, hash) == new_root

R1 and R2 share one witnessed path. Inserting into an empty slot changes
that leaf and its ancestors but no sibling on the way up, so the same
siblings are valid against both trees, and new_root can only differ from
old_root at the claimed slot.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from zksmt.crypto.element import FIELD_BITS, FIELD_MODULUS, NULL, Element
from zksmt.crypto.hashing import Hasher
from zksmt.merkle.path import Path, compute_root
from zksmt.schemas.proof import InsertStatement
from zksmt.schemas.versioning import PROTOCOL_VERSION

RELATION_NAME: str = "smt-insert"

CHECK_SHAPE = "shape"
CHECK_DECOMPOSE = "bit_decomposition"
CHECK_NOT_NULL = "not_null"
CHECK_PRIOR_ABSENCE = "prior_absence"
CHECK_POST_INSERTION = "post_insertion"


@dataclass(frozen=True)
class InsertWitness:
    """
    Private witness for one insertion.

    Attributes:
        siblings: Sibling hashes of the slot in the old tree, leaf-to-root
        hash_bits: Canonical decomposition of the inserted element, LSB first
    """
    siblings: tuple[Element, ...]
    hash_bits: tuple[bool, ...]

    @classmethod
    def from_path(cls, path: Path, element: Element) -> InsertWitness:
        return cls(siblings=path.siblings, hash_bits=element.to_bits())


@dataclass(frozen=True)
class InsertRelation:
    """R1 and R2 over one witnessed path, for trees of a given depth and hasher."""
    depth: int
    hasher: Hasher

    def describe(self) -> dict[str, Any]:
        """Parameters that identify the compiled circuit."""
        return {
            "relation": RELATION_NAME,
            "protocol_version": PROTOCOL_VERSION,
            "depth": self.depth,
            "hasher": self.hasher.name,
            "field_modulus": hex(FIELD_MODULUS),
        }

    def path_bits(self, hash_bits: tuple[bool, ...]) -> tuple[bool, ...]:
        """Left/right selectors for the slot, MSB first, taken from the decomposition."""
        return tuple(reversed(hash_bits[: self.depth - 1]))

    def check(self, statement: InsertStatement, witness: InsertWitness) -> str | None:
        """
        Evaluate every constraint.

        Returns:
            None if the witness satisfies the relation, otherwise the name
            of the first failing check
        """
        if (
            statement.depth != self.depth
            or len(witness.siblings) != self.depth - 1
            or len(witness.hash_bits) != FIELD_BITS
            or not all(isinstance(bit, bool) for bit in witness.hash_bits)
        ):
            return CHECK_SHAPE

        recomposed = sum(1 << i for i, bit in enumerate(witness.hash_bits) if bit)
        if recomposed != statement.hash.value:
            return CHECK_DECOMPOSE
        if statement.hash == NULL:
            return CHECK_NOT_NULL

        bits = self.path_bits(witness.hash_bits)
        if compute_root(witness.siblings, bits, NULL, self.hasher) != statement.old_root:
            return CHECK_PRIOR_ABSENCE
        if compute_root(witness.siblings, bits, statement.hash, self.hasher) != statement.new_root:
            return CHECK_POST_INSERTION
        return None

    def is_satisfied(self, statement: InsertStatement, witness: InsertWitness) -> bool:
        return self.check(statement, witness) is None


__all__ = [
    "RELATION_NAME",
    "CHECK_SHAPE",
    "CHECK_DECOMPOSE",
    "CHECK_NOT_NULL",
    "CHECK_PRIOR_ABSENCE",
    "CHECK_POST_INSERTION",
    "InsertWitness",
    "InsertRelation",
]
