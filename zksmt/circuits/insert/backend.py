"""
Proving Backends
The boundary between the insertion relation and a succinct-proof system.

A backend offers exactly two capabilities:
- compile(relation): turn the relation into a provable circuit
- prove(...) / verify(...): produce and check a proof for given public
  inputs against a compiled circuit

TranscriptBackend is the in-repo development backend. It enforces the
relation at proving time and emits a blinded commitment to the public
inputs, which reveals nothing about the witness. It is NOT sound: anyone
can produce an accepted payload without a witness. A SNARK backend plugs
in behind the same interface.
"""
from __future__ import annotations

import hmac
from abc import ABC, abstractmethod
from dataclasses import dataclass

from zksmt.crypto.hashing import sha256, to_hex
from zksmt.schemas.canonical import dumps_canonical
from zksmt.schemas.errors import InvalidConfigurationException, ProofGenerationFailedException
from zksmt.schemas.proof import InsertStatement

from .relation import InsertRelation, InsertWitness

# Minimum amount of blinding randomness accepted by the transcript backend
MIN_RANDOMNESS_BYTES: int = 16

TAG_BYTES: int = 32


@dataclass(frozen=True)
class CompiledCircuit:
    """
    A relation compiled by a specific backend.

    Attributes:
        relation: The relation the circuit enforces
        circuit_id: Digest identifying relation parameters and backend
        backend: Name of the backend that compiled it
    """
    relation: InsertRelation
    circuit_id: bytes
    backend: str

    @property
    def circuit_id_hex(self) -> str:
        return to_hex(self.circuit_id)


class ProvingBackend(ABC):
    """Abstract succinct-proof backend for the insertion relation."""

    name: str = "abstract"

    def compile(self, relation: InsertRelation) -> CompiledCircuit:
        """Compile ``relation``; the default identifies it by a canonical digest."""
        description = dict(relation.describe(), backend=self.name)
        return CompiledCircuit(
            relation=relation,
            circuit_id=sha256(dumps_canonical(description).encode("utf-8")),
            backend=self.name,
        )

    @abstractmethod
    def prove(
        self,
        circuit: CompiledCircuit,
        statement: InsertStatement,
        witness: InsertWitness,
        randomness: bytes,
    ) -> bytes:
        """
        Produce a proof payload.

        Raises:
            ProofGenerationFailedException: If the witness does not satisfy
                the relation or the backend fails
        """

    @abstractmethod
    def verify(self, circuit: CompiledCircuit, statement: InsertStatement, payload: bytes) -> bool:
        """Check a payload against the public inputs. Never raises on bad proofs."""


class TranscriptBackend(ProvingBackend):
    """
    Development backend: relation check plus a blinded transcript commitment.

    Payload layout: blinding || sha256(canonical(circuit_id, public inputs, blinding))
    """

    name = "transcript"

    def _tag(self, circuit: CompiledCircuit, statement: InsertStatement, blinding: bytes) -> bytes:
        transcript = {
            "circuit_id": circuit.circuit_id,
            "statement": statement.to_public_inputs(),
            "blinding": blinding,
        }
        return sha256(dumps_canonical(transcript).encode("utf-8"))

    def prove(
        self,
        circuit: CompiledCircuit,
        statement: InsertStatement,
        witness: InsertWitness,
        randomness: bytes,
    ) -> bytes:
        if len(randomness) < MIN_RANDOMNESS_BYTES:
            raise ProofGenerationFailedException(
                f"Need at least {MIN_RANDOMNESS_BYTES} bytes of randomness, got {len(randomness)}",
                check="randomness",
            )
        failed = circuit.relation.check(statement, witness)
        if failed is not None:
            raise ProofGenerationFailedException(
                f"Witness does not satisfy the insertion relation: {failed} check failed",
                check=failed,
                details=statement.to_public_inputs(),
            )
        return randomness + self._tag(circuit, statement, randomness)

    def verify(self, circuit: CompiledCircuit, statement: InsertStatement, payload: bytes) -> bool:
        if len(payload) < MIN_RANDOMNESS_BYTES + TAG_BYTES:
            return False
        blinding, tag = payload[:-TAG_BYTES], payload[-TAG_BYTES:]
        return hmac.compare_digest(tag, self._tag(circuit, statement, blinding))


BACKENDS: dict[str, type[ProvingBackend]] = {
    TranscriptBackend.name: TranscriptBackend,
}

DEFAULT_BACKEND: str = TranscriptBackend.name


def get_backend(name: str | None = None) -> ProvingBackend:
    """
    Instantiate a proving backend by name.

    Raises:
        InvalidConfigurationException: If no backend is registered under name
    """
    key = name or DEFAULT_BACKEND
    try:
        return BACKENDS[key]()
    except KeyError:
        raise InvalidConfigurationException(
            f"Unknown proving backend: {key!r}",
            field_path="prover.backend",
            details={"supported": sorted(BACKENDS)},
        ) from None


__all__ = [
    "MIN_RANDOMNESS_BYTES",
    "CompiledCircuit",
    "ProvingBackend",
    "TranscriptBackend",
    "BACKENDS",
    "DEFAULT_BACKEND",
    "get_backend",
]
