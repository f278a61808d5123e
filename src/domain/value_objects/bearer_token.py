"""OAuth bearer token issued by the Payoneer token endpoint.

Obtained once per session and replaced wholesale on refresh. Never persisted.
Field values are copied verbatim from the token response.
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class BearerToken:
    """Bearer token and its metadata.

    Attributes:
        access_token: Token sent as `Authorization: Bearer ...`.
        expires_in: Seconds until access_token expires.
        refresh_token: Token for obtaining a new access token (None for
            client-credentials tokens).
        scope: Granted scope (e.g. "read write openid").
        id_token: OpenID Connect JWT carrying `account_id`.
        token_type: Token type, typically "Bearer".
        consented_on: Unix time the account holder consented.
        refresh_token_expires_in: Seconds until refresh_token expires.
    """

    access_token: str
    expires_in: int | None = None
    refresh_token: str | None = None
    scope: str | None = None
    id_token: str | None = None
    token_type: str = "Bearer"
    consented_on: int | None = None
    refresh_token_expires_in: int | None = None

    def __repr__(self) -> str:
        """Hide token material from reprs that end up in logs."""
        return (
            f"BearerToken(token_type={self.token_type!r}, expires_in={self.expires_in!r}, "
            f"scope={self.scope!r}, has_refresh_token={self.refresh_token is not None}, "
            f"has_id_token={self.id_token is not None})"
        )
