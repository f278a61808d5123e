"""Payment session domain entity.

Holds one account holder's state between the consent callback and the MFA
challenge callback: bearer token, account id, the pending charge and any
outstanding challenge. Replaces process-wide globals so several account
holders can go through the flow at once.

State:
    created → authenticated (token + account id) → charge attached
    → [challenge pending → challenge consumed]

Usage:
    session = PaymentSession(session_id=secrets.token_urlsafe(16))
    session.authenticate(token, account_id="42")
    session.attach_charge(charge)
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from src.core.result import Failure, Result, Success
from src.domain.entities.charge import Charge
from src.domain.errors.session_error import SessionError
from src.domain.value_objects.bearer_token import BearerToken
from src.domain.value_objects.challenge import Challenge


@dataclass
class PaymentSession:
    """Transient per-user session.

    Attributes:
        session_id: Opaque session identifier (cookie / OAuth state).
        bearer_token: Current bearer token (replaced wholesale on refresh).
        account_id: Account holder id decoded from the id_token.
        client_reference_id: Reference id of the current debit.
        charge: Current charge.
        challenge: Outstanding MFA challenge, consumed once.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
    """

    session_id: str
    bearer_token: BearerToken | None = None
    account_id: str | None = None
    client_reference_id: str | None = None
    charge: Charge | None = None
    challenge: Challenge | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    def is_authenticated(self) -> bool:
        """Check whether the session holds a token and an account id."""
        return self.bearer_token is not None and self.account_id is not None

    def has_pending_challenge(self) -> bool:
        """Check whether an MFA challenge is waiting to be resumed."""
        return self.challenge is not None

    @property
    def access_token(self) -> str | None:
        """Current access token, if any."""
        return self.bearer_token.access_token if self.bearer_token else None

    # -------------------------------------------------------------------------
    # State Transition Methods
    # -------------------------------------------------------------------------

    def authenticate(self, token: BearerToken, account_id: str) -> Result[None, str]:
        """Store the token and account id obtained from the code exchange.

        Args:
            token: Bearer token from the token endpoint.
            account_id: Account holder id from the id_token claims.

        Returns:
            Success(None): Session authenticated.
            Failure(error): Empty account id.
        """
        if not account_id:
            return Failure(error=SessionError.INVALID_ACCOUNT_ID)
        self.bearer_token = token
        self.account_id = account_id
        self._touch()
        return Success(value=None)

    def replace_token(self, token: BearerToken) -> None:
        """Swap in a refreshed token (wholesale replacement)."""
        self.bearer_token = token
        self._touch()

    def attach_charge(self, charge: Charge) -> None:
        """Track a newly created debit and its reference id."""
        self.charge = charge
        self.client_reference_id = charge.client_reference_id
        self._touch()

    def require_challenge(self, challenge: Challenge) -> None:
        """Remember the challenge the account holder was sent to."""
        self.challenge = challenge
        self._touch()

    def consume_challenge(self) -> Result[Challenge, str]:
        """Take the pending challenge (exactly once).

        Returns:
            Success(Challenge): The challenge, now cleared from the session.
            Failure(error): No challenge pending.
        """
        if self.challenge is None:
            return Failure(error=SessionError.NO_PENDING_CHALLENGE)
        challenge = self.challenge
        self.challenge = None
        self._touch()
        return Success(value=challenge)

    def _touch(self) -> None:
        self.updated_at = datetime.now(UTC)
