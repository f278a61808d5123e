"""Remote charge status codes.

Payoneer reports the state of a debit as an integer code on the commit and
status endpoints:

    0     unknown
    1     in progress (check back later)
    2     completed (success)
    3     cancelled (failure, no retry)
    1000  pending commit (debit created, not committed yet)

Usage:
    from src.domain.enums import ChargeStatus

    status = ChargeStatus.from_code(payload["status"])
    if status.is_terminal():
        ...
"""

from enum import IntEnum
from typing import Any


class ChargeStatus(IntEnum):
    """Charge status as reported by the Payoneer API.

    Integer Enum:
        Values match the API codes so they compare equal to raw payload values.
        Codes the API may add later map to UNKNOWN via from_code().
    """

    UNKNOWN = 0
    IN_PROGRESS = 1
    COMPLETED = 2
    CANCELLED = 3
    PENDING_COMMIT = 1000

    @classmethod
    def from_code(cls, value: Any) -> "ChargeStatus":
        """Map a raw status value to a ChargeStatus.

        Accepts ints and numeric strings. Anything unrecognized is UNKNOWN.

        Args:
            value: Raw `status` field from a response payload.

        Returns:
            ChargeStatus: Matching status, UNKNOWN otherwise.
        """
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return cls.UNKNOWN

    @classmethod
    def terminal_states(cls) -> list["ChargeStatus"]:
        """Get statuses after which polling stops.

        Returns:
            list[ChargeStatus]: Terminal statuses.
        """
        return [cls.COMPLETED, cls.CANCELLED]

    def is_terminal(self) -> bool:
        """Check whether this status ends the charge lifecycle."""
        return self in self.terminal_states()
