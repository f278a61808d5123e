"""Validation helpers for callback and debit inputs.

All validation functions return Result types for consistent error handling.

Usage:
    from src.core.validation import validate_not_empty, validate_response_path
    from src.core.result import Success, Failure

    result = validate_response_path(request.query_params.get("response_path"))
    match result:
        case Success(value=path):
            ...
        case Failure(error=error):
            print(error.message)
"""

from typing import Any

from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Result, Success


def validate_not_empty(value: Any, field_name: str) -> Result[Any, ValidationError]:
    """Validate that a value is not empty.

    Args:
        value: Value to validate.
        field_name: Name of the field being validated.

    Returns:
        Success with value if not empty, Failure with ValidationError otherwise.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return Failure(
            error=ValidationError(
                code=ErrorCode.VALIDATION_FAILED,
                message=f"{field_name} cannot be empty",
                field=field_name,
            )
        )
    return Success(value=value)


def validate_max_length(
    value: str, max_length: int, field_name: str
) -> Result[str, ValidationError]:
    """Validate maximum string length.

    Args:
        value: String to validate.
        max_length: Maximum allowed length.
        field_name: Name of the field being validated.

    Returns:
        Success with value if valid, Failure with ValidationError otherwise.
    """
    if len(value) > max_length:
        return Failure(
            error=ValidationError(
                code=ErrorCode.VALIDATION_FAILED,
                message=f"{field_name} must be at most {max_length} characters",
                field=field_name,
            )
        )
    return Success(value=value)


def validate_response_path(value: str | None) -> Result[str, ValidationError]:
    """Validate the challenge `response_path` callback parameter.

    The path is appended to the API base URL, so it must be a relative path
    that cannot climb out of the versioned prefix or switch hosts.

    Args:
        value: Raw `response_path` query parameter.

    Returns:
        Success with the path (leading slashes removed), Failure otherwise.
    """
    match validate_not_empty(value, "response_path"):
        case Failure() as failure:
            return failure
        case Success():
            pass

    path = str(value).strip().lstrip("/")
    if "://" in path or ".." in path.split("/") or "\\" in path:
        return Failure(
            error=ValidationError(
                code=ErrorCode.VALIDATION_FAILED,
                message="response_path must be a relative API path",
                field="response_path",
            )
        )
    return Success(value=path)


def mask_identifier(value: str | None, visible: int = 4) -> str:
    """Mask an identifier for logging, keeping the last characters.

    Args:
        value: Identifier such as an account id.
        visible: Number of trailing characters left readable.

    Returns:
        str: Masked identifier (e.g. "****1234"), empty string for None.

    Example:
        >>> mask_identifier("4366181865108056")
        '****8056'
    """
    if not value:
        return ""
    if len(value) <= visible:
        return "*" * len(value)
    return f"****{value[-visible:]}"
