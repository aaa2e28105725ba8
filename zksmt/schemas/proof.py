"""
Schemas - Insertion Proofs
File: proof.py

Purpose: Public inputs of the insertion relation and the proof object
handed from prover to verifier.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from zksmt.crypto.element import Element

from .canonical import dumps_canonical, loads_canonical
from .versioning import (
    PROTOCOL_VERSION,
    SCHEMA_VERSION,
    assert_supported_protocol_version,
    assert_supported_schema_version,
)


@dataclass(frozen=True)
class InsertStatement:
    """
    Public inputs of the insertion relation.

    Attributes:
        old_root: Root of the tree before the insertion
        new_root: Root of the tree after the insertion
        hash: The inserted element
        depth: Depth of the tree both roots belong to
    """
    old_root: Element
    new_root: Element
    hash: Element
    depth: int

    def to_public_inputs(self) -> dict[str, Any]:
        """Public inputs in the canonical form committed to by backends."""
        return {
            "old_root": self.old_root.to_hex(),
            "new_root": self.new_root.to_hex(),
            "hash": self.hash.to_hex(),
            "depth": self.depth,
        }


class InsertProof(BaseModel):
    """
    Proof that inserting ``hash`` into a tree with root ``old_root`` yields
    a tree with root ``new_root``, and that ``hash`` was absent before.

    Only the three roots/element are public; the payload is opaque to
    everything but the backend that produced it.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=SCHEMA_VERSION)
    protocol_version: str = Field(default=PROTOCOL_VERSION)
    depth: int = Field(..., description="Tree depth", ge=1)
    hasher: str = Field(..., description="Merge primitive the roots were computed with", min_length=1)
    backend: str = Field(..., description="Proving backend that produced the payload", min_length=1)
    circuit_id: str = Field(..., description="Identifier of the compiled relation")

    old_root: str = Field(..., description="Root before insertion (0x hex)")
    new_root: str = Field(..., description="Root after insertion (0x hex)")
    hash: str = Field(..., description="Inserted element (0x hex)")

    payload: str = Field(..., description="Opaque backend proof bytes (0x hex)")

    @field_validator("old_root", "new_root", "hash")
    @classmethod
    def _validate_element_hex(cls, v: str) -> str:
        return Element.from_hex(v).to_hex()

    @field_validator("payload", "circuit_id")
    @classmethod
    def _validate_hex_bytes(cls, v: str) -> str:
        if not v.startswith("0x") or len(v) % 2 != 0:
            raise ValueError("must be 0x-prefixed hex of whole bytes")
        bytes.fromhex(v[2:])
        return v

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, v: str) -> str:
        assert_supported_schema_version(v)
        return v

    @field_validator("protocol_version")
    @classmethod
    def _validate_protocol_version(cls, v: str) -> str:
        assert_supported_protocol_version(v)
        return v

    @property
    def payload_bytes(self) -> bytes:
        return bytes.fromhex(self.payload[2:])

    def statement(self) -> InsertStatement:
        """Rebuild the public inputs this proof claims."""
        return InsertStatement(
            old_root=Element.from_hex(self.old_root),
            new_root=Element.from_hex(self.new_root),
            hash=Element.from_hex(self.hash),
            depth=self.depth,
        )

    def to_json(self) -> str:
        return dumps_canonical(self)

    @classmethod
    def from_json(cls, data: str) -> InsertProof:
        return cls.model_validate(loads_canonical(data))
