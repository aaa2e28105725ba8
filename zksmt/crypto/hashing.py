"""
Crypto - Hashing Utilities
Byte hashing helpers and the two-to-one merge primitive of the tree.

This module provides:
- SHA-256 hashing for raw bytes
- Hex encoding with 0x prefix
- Hasher: the merge (hash-compression) primitive, with a Poseidon and a
  SHA-256 implementation selectable by name

Security/Determinism Notes:
- merge() is pure and deterministic, with no failure mode
- Every tree, path and relation that must agree on a root has to use the
  same hasher; proofs record the hasher name for that reason
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass

from poseidon_py.poseidon_hash import poseidon_perm

from zksmt.crypto.element import FIELD_MODULUS, Element
from zksmt.schemas.errors import InvalidConfigurationException


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def to_hex(data: bytes) -> str:
    """Convert bytes to hexadecimal string with 0x prefix."""
    return "0x" + data.hex()


@dataclass(frozen=True)
class Hasher:
    """
    A two-to-one compression function over field elements.

    Hashers are immutable values registered by name in HASHERS. Trees,
    proofs and null-hash tables refer to a hasher through that name.
    """
    name: str

    def merge(self, left: Element, right: Element) -> Element:
        raise NotImplementedError


@dataclass(frozen=True)
class PoseidonHasher(Hasher):
    """Cairo Poseidon over the STARK field: hades(left, right, 2)[0]."""
    name: str = "poseidon"

    def merge(self, left: Element, right: Element) -> Element:
        return Element(poseidon_perm(left.value, right.value, 2)[0])


@dataclass(frozen=True)
class Sha256Hasher(Hasher):
    """sha256(left || right) reduced into the field."""
    name: str = "sha256"

    def merge(self, left: Element, right: Element) -> Element:
        digest = sha256(left.to_bytes() + right.to_bytes())
        return Element(int.from_bytes(digest, "big") % FIELD_MODULUS)


DEFAULT_HASHER: str = "poseidon"

HASHERS: dict[str, Hasher] = {
    "poseidon": PoseidonHasher(),
    "sha256": Sha256Hasher(),
}


def get_hasher(name: str | None = None) -> Hasher:
    """
    Resolve a hasher by name.

    Args:
        name: Registered hasher name, or None for the default (poseidon)

    Raises:
        InvalidConfigurationException: If no hasher is registered under name
    """
    key = name or DEFAULT_HASHER
    try:
        return HASHERS[key]
    except KeyError:
        raise InvalidConfigurationException(
            f"Unknown hasher: {key!r}",
            field_path="tree.hasher",
            details={"supported": sorted(HASHERS)},
        ) from None


def merge(left: Element, right: Element) -> Element:
    """Merge two elements with the default hasher."""
    return HASHERS[DEFAULT_HASHER].merge(left, right)


__all__ = [
    "sha256",
    "to_hex",
    "Hasher",
    "PoseidonHasher",
    "Sha256Hasher",
    "DEFAULT_HASHER",
    "HASHERS",
    "get_hasher",
    "merge",
]
