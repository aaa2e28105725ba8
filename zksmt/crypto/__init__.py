"""
Core cryptographic primitives: field elements and the merge function.
"""
from .element import (
    ELEMENT_BYTES,
    FIELD_BITS,
    FIELD_MODULUS,
    NULL,
    Element,
    bits_to_str,
)
from .hashing import (
    DEFAULT_HASHER,
    HASHERS,
    Hasher,
    PoseidonHasher,
    Sha256Hasher,
    get_hasher,
    merge,
    sha256,
    to_hex,
)

__all__ = [
    "ELEMENT_BYTES",
    "FIELD_BITS",
    "FIELD_MODULUS",
    "NULL",
    "Element",
    "bits_to_str",
    "DEFAULT_HASHER",
    "HASHERS",
    "Hasher",
    "PoseidonHasher",
    "Sha256Hasher",
    "get_hasher",
    "merge",
    "sha256",
    "to_hex",
]
