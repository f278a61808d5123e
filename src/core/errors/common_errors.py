"""Common error classes used across layers.

Error Types:
- ValidationError: Input validation failures
- NotFoundError: Resource not found (e.g. no balance in the requested currency)

Usage:
    from src.core.errors import NotFoundError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(error=NotFoundError(
        code=ErrorCode.BALANCE_NOT_FOUND,
        message="No USD balance",
        resource_type="balance",
        resource_id="USD",
    ))
"""

from dataclasses import dataclass

from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (balance, session, etc.).
        resource_id: Identifier that was looked up.
    """

    resource_type: str
    resource_id: str
