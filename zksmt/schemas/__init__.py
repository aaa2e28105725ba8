"""
Schemas - Public API

Error taxonomy, canonical serialization and proof schemas.
"""

# Version constants
from .versioning import (
    PROTOCOL_VERSION,
    SCHEMA_VERSION,
    SUPPORTED_PROTOCOL_VERSIONS,
    SUPPORTED_SCHEMA_VERSIONS,
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
    assert_supported_protocol_version,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    ErrorCodes,
    InvalidConfigurationException,
    OccupiedSlotException,
    ReservedElementException,
    ProofGenerationFailedException,
    SmtError,
    SmtException,
)

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    loads_canonical,
)

# Proof schemas
from .proof import (
    InsertProof,
    InsertStatement,
)

__all__ = [
    # Versioning
    "PROTOCOL_VERSION",
    "SCHEMA_VERSION",
    "SUPPORTED_PROTOCOL_VERSIONS",
    "SUPPORTED_SCHEMA_VERSIONS",
    "UnsupportedSchemaVersionError",
    "assert_supported_schema_version",
    "assert_supported_protocol_version",
    # Errors
    "CanonicalizationException",
    "ErrorCodes",
    "InvalidConfigurationException",
    "OccupiedSlotException",
    "ReservedElementException",
    "ProofGenerationFailedException",
    "SmtError",
    "SmtException",
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "loads_canonical",
    # Proofs
    "InsertProof",
    "InsertStatement",
]
