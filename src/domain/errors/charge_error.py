"""Charge domain errors.

Error value constants for charge state transitions. Never raised.

Usage:
    result = charge.apply_status(report)
    match result:
        case Failure(error=ChargeError.ALREADY_TERMINAL):
            ...
"""


class ChargeError:
    """Charge error constants."""

    ALREADY_TERMINAL = "Charge already reached a terminal status"
    MISSING_COMMIT_ID = "Charge has no commit id"
    MISSING_CLIENT_REFERENCE_ID = "Charge has no client reference id"
    NO_AMOUNTS = "Charge has no amounts to disclose"
