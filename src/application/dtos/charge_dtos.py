"""Charge flow DTOs.

DTOs:
    - ChargeFlowResult: Result of the authorization-code and challenge-resume flows
"""

from dataclasses import dataclass

from src.domain.entities import Charge
from src.domain.enums import CommitState
from src.domain.value_objects import Challenge, ChargeDisclosure, ChargeStatusReport


@dataclass
class ChargeFlowResult:
    """Outcome of a callback flow, rendered by the callback router.

    Attributes:
        session_id: Session the flow ran in (set as cookie).
        state: Terminal commit state, None if the commit did not run.
        charge: Charge created by the flow.
        status: Latest status report.
        challenge: Challenge to redirect the account holder to.
        disclosure: Disclosure of the pending charge.
        attempts: Commit calls made.
    """

    session_id: str
    state: CommitState | None = None
    charge: Charge | None = None
    status: ChargeStatusReport | None = None
    challenge: Challenge | None = None
    disclosure: ChargeDisclosure | None = None
    attempts: int = 0

    @property
    def requires_challenge(self) -> bool:
        """Whether the account holder must be redirected to an MFA challenge."""
        return self.challenge is not None
