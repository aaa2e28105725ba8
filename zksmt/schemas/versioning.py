"""
Schemas - Versioning
File: versioning.py

Purpose: Centralize proof schema/protocol version constants.
This file must stay tiny and have no imports from other schema files
to avoid circular dependencies.
"""

# Current schema version of serialized proof objects
SCHEMA_VERSION: str = "v1"

# Version of the insertion relation (R1 + R2 + canonical bit decomposition)
PROTOCOL_VERSION: str = "v1"

SUPPORTED_SCHEMA_VERSIONS: frozenset[str] = frozenset({"v1"})
SUPPORTED_PROTOCOL_VERSIONS: frozenset[str] = frozenset({"v1"})


class UnsupportedSchemaVersionError(ValueError):
    """Raised when an unsupported schema or protocol version is encountered."""

    def __init__(
        self,
        version: str,
        supported: frozenset[str] | None = None,
        kind: str = "schema",
    ) -> None:
        self.version = version
        self.kind = kind
        self.supported = supported or SUPPORTED_SCHEMA_VERSIONS
        super().__init__(
            f"Unsupported {kind} version: '{version}'. "
            f"Supported versions: {sorted(self.supported)}"
        )


def assert_supported_schema_version(version: str) -> None:
    """
    Validate that the given schema version is supported.

    Args:
        version: The schema version string to validate.

    Raises:
        UnsupportedSchemaVersionError: If the version is not supported.
    """
    if version not in SUPPORTED_SCHEMA_VERSIONS:
        raise UnsupportedSchemaVersionError(version)


def assert_supported_protocol_version(version: str) -> None:
    """Validate that proofs of this relation version can be checked."""
    if version not in SUPPORTED_PROTOCOL_VERSIONS:
        raise UnsupportedSchemaVersionError(version, SUPPORTED_PROTOCOL_VERSIONS, kind="protocol")
