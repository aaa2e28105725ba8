"""
Insertion-proof protocol.

Proves the following for a private sparse Merkle tree: prior to the
insert, ``hash`` was not present in the tree with root ``old_root``, and
inserting it yields root ``new_root``. ``old_root``, ``new_root`` and
``hash`` are public inputs; the tree contents stay private.

Usage:
    from zksmt.circuits.insert import prove_insert, verify_insert

    proof = prove_insert(tree, Element(123))
    assert verify_insert(proof)
"""
from .relation import (
    CHECK_DECOMPOSE,
    CHECK_NOT_NULL,
    CHECK_POST_INSERTION,
    CHECK_PRIOR_ABSENCE,
    CHECK_SHAPE,
    RELATION_NAME,
    InsertRelation,
    InsertWitness,
)
from .backend import (
    BACKENDS,
    DEFAULT_BACKEND,
    MIN_RANDOMNESS_BYTES,
    CompiledCircuit,
    ProvingBackend,
    TranscriptBackend,
    get_backend,
)
from .prover import (
    build_witness,
    confirm_new_root,
    prove_insert,
    verify_insert,
)

__all__ = [
    "CHECK_DECOMPOSE",
    "CHECK_NOT_NULL",
    "CHECK_POST_INSERTION",
    "CHECK_PRIOR_ABSENCE",
    "CHECK_SHAPE",
    "RELATION_NAME",
    "InsertRelation",
    "InsertWitness",
    "BACKENDS",
    "DEFAULT_BACKEND",
    "MIN_RANDOMNESS_BYTES",
    "CompiledCircuit",
    "ProvingBackend",
    "TranscriptBackend",
    "get_backend",
    "build_witness",
    "confirm_new_root",
    "prove_insert",
    "verify_insert",
]
