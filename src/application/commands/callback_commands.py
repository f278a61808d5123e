"""Callback commands (CQRS write operations).

All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute the flow
- Handlers return Result types
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class HandleAuthorizationCode:
    """Run the charge flow for a freshly delivered authorization code.

    Flow: exchange code → decode id_token → (refresh) → balances → debit
    → disclosure → commit → status.

    Attributes:
        code: One-time authorization code from the consent callback.
        session_id: Session from the cookie or OAuth `state`, if any.

    Example:
        >>> command = HandleAuthorizationCode(code="abc123", session_id=state)
        >>> result = await handler.handle(command)
    """

    code: str
    session_id: str | None = None


@dataclass(frozen=True, kw_only=True)
class ResumeAfterChallenge:
    """Resume a commit after the account holder completed an MFA challenge.

    Attributes:
        session_id: Session holding the bearer token and charge.
        response_path: `response_path` from the challenge callback.
    """

    session_id: str | None
    response_path: str | None
