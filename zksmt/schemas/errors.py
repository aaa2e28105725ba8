"""
Schemas - Errors
File: errors.py

Purpose: Error taxonomy for the sparse Merkle tree engine and the
insertion-proof protocol. Defines both Pydantic models for structured
error reporting and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Construction & Configuration Errors
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"

    # Tree Mutation Errors
    OCCUPIED_SLOT = "OCCUPIED_SLOT"
    RESERVED_ELEMENT = "RESERVED_ELEMENT"

    # Proof Errors
    PROOF_GENERATION_FAILED = "PROOF_GENERATION_FAILED"

    # Serialization Errors
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class SmtError(BaseModel):
    """
    Base error model for structured error reporting.

    Used when an error has to cross a boundary as data (logs, responses)
    rather than as a raised exception.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.OCCUPIED_SLOT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class SmtException(Exception):
    """
    Base exception for all tree and protocol errors.

    Carries structured error information and can be converted to an
    SmtError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "SMT_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> SmtError:
        """Convert this exception to an SmtError model."""
        return SmtError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidConfigurationException(SmtException):
    """Raised when a tree, hasher or backend is configured with invalid values."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_CONFIGURATION,
            details=full_details,
            retryable=False,
        )


class OccupiedSlotException(SmtException):
    """
    Raised when an insertion targets a slot that already holds an element.

    ``duplicate`` is True when the occupant is the element being inserted,
    False when a different element collides on the same low-order bits.
    """

    def __init__(
        self,
        message: str,
        bits: str | None = None,
        existing: str | None = None,
        duplicate: bool | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if bits is not None:
            full_details["bits"] = bits
        if existing is not None:
            full_details["existing"] = existing
        if duplicate is not None:
            full_details["duplicate"] = duplicate
        super().__init__(
            message=message,
            code=ErrorCodes.OCCUPIED_SLOT,
            details=full_details,
            retryable=False,
        )

    @property
    def duplicate(self) -> bool | None:
        return self.details.get("duplicate")


class ReservedElementException(SmtException):
    """Raised when inserting the NULL sentinel, which marks empty slots."""

    def __init__(
        self,
        message: str,
        element: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if element is not None:
            full_details["element"] = element
        super().__init__(
            message=message,
            code=ErrorCodes.RESERVED_ELEMENT,
            details=full_details,
            retryable=False,
        )


class ProofGenerationFailedException(SmtException):
    """
    Raised when the witness does not satisfy the insertion relation,
    or the proving backend cannot produce a proof.

    Never retryable: the same witness always fails the same way.
    """

    def __init__(
        self,
        message: str,
        check: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if check:
            full_details["check"] = check
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_GENERATION_FAILED,
            details=full_details,
            retryable=False,
        )


class CanonicalizationException(SmtException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )
