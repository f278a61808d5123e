"""Payment session domain errors.

Error value constants for session operations. Never raised.
"""


class SessionError:
    """Payment session error constants."""

    SESSION_NOT_FOUND = "Payment session not found or expired"
    NOT_AUTHENTICATED = "Payment session has no bearer token"
    NO_ACCOUNT = "Payment session has no account id"
    NO_PENDING_CHARGE = "Payment session has no pending charge"
    NO_PENDING_CHALLENGE = "Payment session has no pending challenge"
    INVALID_ACCOUNT_ID = "Account id cannot be empty"
