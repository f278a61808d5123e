"""Result types for railway-oriented programming.

Operations that talk to Payoneer can fail in expected ways (expired tokens,
MFA challenges, timeouts). Instead of raising, they return a Result so the
caller has to decide what each failure means.

Usage:
    result = await provider.get_balances(account_id, token)
    match result:
        case Success(value=balances):
            ...
        case Failure(error=error):
            logger.warning("balances_failed", error=error.message)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
