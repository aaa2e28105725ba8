"""
zksmt - sparse Merkle trees with zero-knowledge insertion proofs.

A prover keeps a private sparse Merkle tree and shows a verifier that an
element was absent before an update and that inserting it turns a public
old root into a public new root, without revealing the tree.
"""
from zksmt.crypto import NULL, Element, Hasher, get_hasher, merge
from zksmt.merkle import Path, Tree
from zksmt.schemas import (
    InsertProof,
    InsertStatement,
    InvalidConfigurationException,
    OccupiedSlotException,
    ReservedElementException,
    ProofGenerationFailedException,
    SmtException,
)
from zksmt.circuits.insert import prove_insert, verify_insert
from zksmt.config import SmtConfig, get_default_config, setup_logging

__version__ = "0.1.0"

__all__ = [
    "NULL",
    "Element",
    "Hasher",
    "get_hasher",
    "merge",
    "Path",
    "Tree",
    "InsertProof",
    "InsertStatement",
    "InvalidConfigurationException",
    "OccupiedSlotException",
    "ReservedElementException",
    "ProofGenerationFailedException",
    "SmtException",
    "prove_insert",
    "verify_insert",
    "SmtConfig",
    "get_default_config",
    "setup_logging",
]
