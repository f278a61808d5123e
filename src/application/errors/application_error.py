"""Application layer error types.

Application-level errors wrap domain errors and add the step of the callback
flow that failed.

Exports:
    ApplicationErrorCode: Application-level error code enum
    ApplicationError: Application layer error dataclass
"""

from dataclasses import dataclass
from enum import Enum

from src.core.errors.domain_error import DomainError


class ApplicationErrorCode(Enum):
    """Application-level error codes.

    Examples:
        >>> error = ApplicationError(
        ...     code=ApplicationErrorCode.PROVIDER_FAILED,
        ...     message="Token exchange failed",
        ...     step="exchange_code",
        ... )
    """

    COMMAND_VALIDATION_FAILED = "command_validation_failed"
    COMMAND_EXECUTION_FAILED = "command_execution_failed"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    PROVIDER_FAILED = "provider_failed"


@dataclass(frozen=True, slots=True, kw_only=True)
class ApplicationError:
    """Application layer error.

    Attributes:
        code: Application error code (from ApplicationErrorCode enum)
        message: Human-readable error message
        step: Flow step that failed (e.g. "get_balances")
        domain_error: Original domain error (if error originated from domain layer)
        details: Additional context as key-value pairs
    """

    code: ApplicationErrorCode
    message: str
    step: str | None = None
    domain_error: DomainError | None = None
    details: dict[str, str] | None = None
