"""Charge domain entity.

A pending debit created against an account holder's balance. Created from
the debit response, updated by commit and status calls, never deleted.

Status Lifecycle:
    PENDING_COMMIT → IN_PROGRESS → COMPLETED | CANCELLED
    (UNKNOWN may appear at any point until a terminal status is reached)

Usage:
    charge = Charge(commit_id="C1", client_reference_id=str(uuid4()))
    result = charge.apply_status(report)
    match result:
        case Success(_):
            ...
        case Failure(error):
            ...
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from src.core.result import Failure, Result, Success
from src.domain.enums import ChargeStatus
from src.domain.errors.charge_error import ChargeError
from src.domain.value_objects.charge_amounts import ChargeAmounts, Fee, FxQuote
from src.domain.value_objects.charge_disclosure import ChargeDisclosure
from src.domain.value_objects.charge_status_report import ChargeStatusReport


@dataclass
class Charge:
    """Pending or finalized debit.

    Attributes:
        commit_id: Identifier used to commit the debit.
        client_reference_id: Caller-supplied reference used for status lookups.
        amounts: Charged and target amounts.
        fees: Fees applied to the debit.
        fx: FX quote, when the balance currency differs from the target.
        status: Latest known status.
        status_description: Payoneer's description of the status.
        payment_id: Payment identifier, set once committed.
        expires_at: When the pending debit expires if not committed.
        created_at: Record creation timestamp.
        updated_at: Last modification timestamp.
    """

    commit_id: str
    client_reference_id: str
    amounts: ChargeAmounts | None = None
    fees: list[Fee] = field(default_factory=list)
    fx: FxQuote | None = None
    status: ChargeStatus = ChargeStatus.PENDING_COMMIT
    status_description: str | None = None
    payment_id: str | None = None
    expires_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Validate identifiers.

        Raises:
            ValueError: If commit_id or client_reference_id is empty.
        """
        if not self.commit_id:
            raise ValueError(ChargeError.MISSING_COMMIT_ID)
        if not self.client_reference_id:
            raise ValueError(ChargeError.MISSING_CLIENT_REFERENCE_ID)

    def is_terminal(self) -> bool:
        """Check whether the charge reached COMPLETED or CANCELLED."""
        return self.status.is_terminal()

    def disclosure(self) -> Result[ChargeDisclosure, str]:
        """Build the disclosure shown before commit.

        Returns:
            Success(ChargeDisclosure): Order/payment amounts, FX and fees.
            Failure(error): The debit response carried no amounts.
        """
        if self.amounts is None:
            return Failure(error=ChargeError.NO_AMOUNTS)
        return Success(
            value=ChargeDisclosure(
                order_amount=self.amounts.charged,
                payment_amount=self.amounts.target,
                fx=self.fx,
                fees=tuple(self.fees),
            )
        )

    def apply_status(self, report: ChargeStatusReport) -> Result[None, str]:
        """Record the latest status reported by Payoneer.

        A terminal status is final: reports that would move the charge to a
        different status afterwards are rejected.

        Args:
            report: Status from the commit or status endpoint.

        Returns:
            Success(None): Status recorded.
            Failure(error): Charge already terminal with a different status.
        """
        if self.is_terminal() and report.status != self.status:
            return Failure(error=ChargeError.ALREADY_TERMINAL)

        self.status = report.status
        if report.status_description is not None:
            self.status_description = report.status_description
        if report.payment_id is not None:
            self.payment_id = report.payment_id
        self.updated_at = datetime.now(UTC)
        return Success(value=None)
