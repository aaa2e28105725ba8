"""
Crypto - Field Elements
Values of the prime field every hash and leaf lives in.

This module provides:
- FIELD_MODULUS: the STARK prime p = 2**251 + 17 * 2**192 + 1
- Element: immutable, totally ordered wrapper over a canonical field value
- NULL: the sentinel meaning "no value at this slot", sha256(NULL_TAG) mod p

Canonical Representation Rules:
1. The canonical value is the integer in [0, p)
2. Byte encoding is 32 bytes, big-endian
3. Hex encoding is the byte encoding with a 0x prefix
4. Bit decomposition is FIELD_BITS bits, little-endian (witness form)
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass

# STARK-friendly prime shared with the Poseidon permutation
FIELD_MODULUS: int = 2**251 + 17 * 2**192 + 1

# Number of bits in a canonical decomposition
FIELD_BITS: int = FIELD_MODULUS.bit_length()

ELEMENT_BYTES: int = 32


@dataclass(frozen=True, order=True)
class Element:
    """
    A field element in canonical form.

    Equality, ordering and hashing are all defined over the canonical
    integer, so two Elements compare equal exactly when their canonical
    bit representations do.

    Attributes:
        value: Canonical integer in [0, FIELD_MODULUS)
    """
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Element value must be an int, got {type(self.value).__name__}")
        if not 0 <= self.value < FIELD_MODULUS:
            raise ValueError(f"Element value out of field range: {self.value}")

    @classmethod
    def from_int(cls, value: int) -> Element:
        """Build an element from an unsigned integer already below the modulus."""
        return cls(value)

    @classmethod
    def from_bytes(cls, data: bytes) -> Element:
        """Decode a 32-byte big-endian canonical encoding."""
        if len(data) != ELEMENT_BYTES:
            raise ValueError(f"Expected {ELEMENT_BYTES} bytes, got {len(data)}")
        return cls(int.from_bytes(data, "big"))

    @classmethod
    def from_hex(cls, hex_string: str) -> Element:
        """Decode a 0x-prefixed hex string (shorter strings are left-padded)."""
        if not hex_string.startswith("0x"):
            raise ValueError(
                f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
            )
        hex_content = hex_string[2:]
        if not hex_content or len(hex_content) > 2 * ELEMENT_BYTES:
            raise ValueError(f"Invalid element hex length: {len(hex_content)}")
        return cls(int(hex_content, 16))

    @classmethod
    def from_uniform_bytes(cls, data: bytes) -> Element:
        """
        Map 64 uniformly random bytes onto the field.

        Reducing 512 bits mod p leaves a negligible bias, which makes this
        suitable for random test elements and hash-to-field.
        """
        if len(data) != 2 * ELEMENT_BYTES:
            raise ValueError(f"Expected {2 * ELEMENT_BYTES} bytes, got {len(data)}")
        return cls(int.from_bytes(data, "big") % FIELD_MODULUS)

    def to_bytes(self) -> bytes:
        return self.value.to_bytes(ELEMENT_BYTES, "big")

    def to_hex(self) -> str:
        return "0x" + self.to_bytes().hex()

    def to_bits(self) -> tuple[bool, ...]:
        """Full canonical decomposition, least significant bit first."""
        return tuple(bool((self.value >> i) & 1) for i in range(FIELD_BITS))

    def least_significant_bits(self, count: int) -> tuple[bool, ...]:
        """
        The lowest ``count`` bits of the canonical value, most significant first.

        Example:
            >>> Element(3).least_significant_bits(4)
            (False, False, True, True)
        """
        if not 0 <= count <= FIELD_BITS:
            raise ValueError(f"Bit count must be in [0, {FIELD_BITS}], got {count}")
        return tuple(bool((self.value >> i) & 1) for i in reversed(range(count)))

    def __repr__(self) -> str:
        return f"Element({self.value:#x})"


# Public tag hashed into the field to produce NULL
NULL_TAG: bytes = b"zksmt/NULL/v1"

# Marks an empty slot. Fixed and public, and never a legal tree element.
NULL: Element = Element(int.from_bytes(hashlib.sha256(NULL_TAG).digest(), "big") % FIELD_MODULUS)


def bits_to_str(bits: tuple[bool, ...]) -> str:
    """Render a bit-path as a 0/1 string, MSB first."""
    return "".join("1" if bit else "0" for bit in bits)


__all__ = [
    "FIELD_MODULUS",
    "FIELD_BITS",
    "ELEMENT_BYTES",
    "Element",
    "NULL_TAG",
    "NULL",
    "bits_to_str",
]
