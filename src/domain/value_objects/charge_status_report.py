"""Structured answer of the commit and status endpoints.

Example payload:
    {
        "result": {
            "status": 2,
            "status_description": "completed",
            "payment_id": "4366181902103355"
        }
    }
"""

from dataclasses import dataclass

from src.domain.enums import ChargeStatus


@dataclass(frozen=True, kw_only=True)
class ChargeStatusReport:
    """Latest known status of a charge.

    Attributes:
        status: Mapped status (UNKNOWN for unrecognized codes).
        status_description: Payoneer's description (e.g. "completed").
        payment_id: Payment identifier once committed.
        client_reference_id: Caller-supplied reference, when echoed back.
        raw_status: Raw status value from the payload.
    """

    status: ChargeStatus
    status_description: str | None = None
    payment_id: str | None = None
    client_reference_id: str | None = None
    raw_status: int | str | None = None

    def is_terminal(self) -> bool:
        """Check whether polling can stop."""
        return self.status.is_terminal()
