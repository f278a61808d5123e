"""Kinds of request arriving on the OAuth callback endpoint.

The single `/oauth/authorize` endpoint receives both the consent redirect and
the MFA challenge redirect. Query parameters decide which one it is:

    - ERROR: `error` present (consent denied or failed)
    - CHALLENGE_RESPONSE: `type=response` (MFA completed, resume the commit)
    - AUTHORIZATION_CODE: anything else (one-time code from consent)
"""

from enum import Enum


class CallbackKind(str, Enum):
    """Callback request classification."""

    ERROR = "error"
    CHALLENGE_RESPONSE = "challenge_response"
    AUTHORIZATION_CODE = "authorization_code"

    @classmethod
    def classify(cls, *, error: str | None, type_: str | None) -> "CallbackKind":
        """Classify a callback from its query parameters.

        Args:
            error: `error` query parameter.
            type_: `type` query parameter.

        Returns:
            CallbackKind: The kind of callback.
        """
        if error:
            return cls.ERROR
        if type_ == "response":
            return cls.CHALLENGE_RESPONSE
        return cls.AUTHORIZATION_CODE
