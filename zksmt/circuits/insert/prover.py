"""
Insertion Proofs
Prove that inserting an element turns one committed root into another.

Given a tree with root ``old_root``, inserting ``hash`` produces root
``new_root``, and ``hash`` was absent before. ``old_root``, ``new_root``
and ``hash`` are public; the rest of the tree stays private.

Proving is a pure function of (tree snapshot, element, randomness) and
can be CPU heavy depending on the backend. Callers should keep it off
latency-sensitive paths.
"""
from __future__ import annotations

import logging
import secrets

from zksmt.crypto.element import Element
from zksmt.crypto.hashing import get_hasher
from zksmt.merkle.tree import Tree
from zksmt.schemas.errors import InvalidConfigurationException, ProofGenerationFailedException
from zksmt.schemas.proof import InsertProof, InsertStatement

from .backend import ProvingBackend, get_backend
from .relation import InsertRelation, InsertWitness

logger = logging.getLogger(__name__)


def _resolve_backend(backend: ProvingBackend | str | None) -> ProvingBackend:
    if isinstance(backend, ProvingBackend):
        return backend
    if backend is None:
        from zksmt.config.runtime import get_default_config
        backend = get_default_config().prover.backend
    return get_backend(backend)


def build_witness(tree: Tree, element: Element) -> tuple[InsertStatement, InsertWitness]:
    """
    Assemble public inputs and witness for inserting ``element`` into ``tree``.

    The tree is not modified. The new root is folded from the same path
    the witness carries, which is exactly the root the tree reaches once
    the slot is filled.
    """
    path = tree.path_for(element)
    statement = InsertStatement(
        old_root=tree.root_hash(),
        new_root=path.compute_root(element),
        hash=element,
        depth=tree.depth,
    )
    return statement, InsertWitness.from_path(path, element)


def prove_insert(
    tree: Tree,
    new_element: Element,
    randomness: bytes | None = None,
    backend: ProvingBackend | str | None = None,
) -> InsertProof:
    """
    Prove that ``new_element`` is absent from ``tree`` and that inserting
    it yields the proof's ``new_root``.

    Args:
        tree: Tree snapshot before the insertion (not modified)
        new_element: Element to be inserted
        randomness: Blinding randomness; fresh OS randomness when None
        backend: Backend instance or name; the configured default when None

    Returns:
        InsertProof carrying the public inputs and the backend payload

    Raises:
        ProofGenerationFailedException: If the slot is already occupied or
            the backend cannot produce a proof. Not retried.
    """
    prover = _resolve_backend(backend)
    if randomness is None:
        from zksmt.config.runtime import get_default_config
        randomness = secrets.token_bytes(get_default_config().prover.randomness_bytes)

    statement, witness = build_witness(tree, new_element)
    circuit = prover.compile(InsertRelation(depth=tree.depth, hasher=tree.hasher))

    try:
        payload = prover.prove(circuit, statement, witness, randomness)
    except ProofGenerationFailedException as e:
        logger.error(
            "Insertion proof for %r failed (%s): %s",
            new_element, e.details.get("check"), e.message,
        )
        raise

    logger.info(
        "Proved insertion of %r: %s -> %s (backend=%s)",
        new_element, statement.old_root, statement.new_root, prover.name,
    )
    return InsertProof(
        depth=tree.depth,
        hasher=tree.hasher.name,
        backend=prover.name,
        circuit_id=circuit.circuit_id_hex,
        old_root=statement.old_root.to_hex(),
        new_root=statement.new_root.to_hex(),
        hash=statement.hash.to_hex(),
        payload="0x" + payload.hex(),
    )


def verify_insert(proof: InsertProof, backend: ProvingBackend | str | None = None) -> bool:
    """
    Check an insertion proof against its own public inputs.

    Args:
        proof: The proof to check
        backend: Backend instance or name; the one named in the proof when None

    Returns:
        True if the backend accepts the payload for this circuit and
        statement, False otherwise
    """
    try:
        verifier = get_backend(proof.backend) if backend is None else _resolve_backend(backend)
        hasher = get_hasher(proof.hasher)
    except InvalidConfigurationException as e:
        logger.warning("Rejecting proof with unusable metadata: %s", e.message)
        return False
    if verifier.name != proof.backend:
        logger.warning("Proof made by %r cannot be checked by %r", proof.backend, verifier.name)
        return False

    relation = InsertRelation(depth=proof.depth, hasher=hasher)
    circuit = verifier.compile(relation)
    if circuit.circuit_id_hex != proof.circuit_id:
        logger.warning("Proof circuit %s does not match %s", proof.circuit_id, circuit.circuit_id_hex)
        return False

    return verifier.verify(circuit, proof.statement(), proof.payload_bytes)


def confirm_new_root(proof: InsertProof, root: Element) -> None:
    """
    Check that a tree's root after insertion matches the proof.

    Raises:
        ProofGenerationFailedException: If the roots differ, which means the
            local tree state is inconsistent
    """
    if root.to_hex() != proof.new_root:
        logger.error("Tree root %s after insert does not match proof root %s", root, proof.new_root)
        raise ProofGenerationFailedException(
            "Tree root after insertion does not match the proven new root",
            check="post_insertion",
            details={"tree_root": root.to_hex(), "proof_root": proof.new_root},
        )


__all__ = [
    "build_witness",
    "prove_insert",
    "verify_insert",
    "confirm_new_root",
]
