"""MFA challenge returned with a `challenge_required` error.

Example payload:
    {
        "error": "challenge_required",
        "challenge": {
            "type": "mfa",
            "expires_at": "2023-05-03T19:20:18.637Z",
            "session_id": "79dd07b9b1a1430e94b32e42bce617cc",
            "url": "https://auth.sandbox.payoneer.com/#?t=79dd...&v=a"
        }
    }

The account holder is redirected to `url`; Payoneer then calls back with
`type=response&response_path=...` to resume the pending decision.
"""

from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass(frozen=True, kw_only=True)
class Challenge:
    """Secondary verification the account holder must complete.

    Attributes:
        type: Challenge type (e.g. "mfa").
        url: Where to send the account holder.
        session_id: Payoneer challenge session identifier.
        expires_at: When the challenge stops being valid.
    """

    type: str
    url: str
    session_id: str | None = None
    expires_at: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the challenge has expired.

        Args:
            now: Reference time (defaults to current UTC time).

        Returns:
            bool: True if expires_at is set and in the past.
        """
        if self.expires_at is None:
            return False
        return (now or datetime.now(UTC)) >= self.expires_at
