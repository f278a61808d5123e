"""Charge committer service.

Finalizes a pending debit. A single commit call can time out without telling
whether Payoneer applied it, so the commit runs as an explicit state machine:

    REQUESTED ──commit ok, status COMPLETED/CANCELLED──▶ COMPLETED / CANCELLED
        │ ──commit ok, other status──▶ ACCEPTED (no recommit)
        │ ──challenge_required──▶ CHALLENGE_REQUIRED
        │ ──first timeout──▶ TIMED_OUT ──status check──▶ POLLING
        │ ──timeout on a retry──▶ FAILED
        │ ──any other error──▶ FAILED
    POLLING ──COMPLETED/CANCELLED──▶ terminal, no retry
        │ ──IN_PROGRESS──▶ wait backoff, then as below
        │ ──attempts left──▶ REQUESTED
        │ ──no attempts left──▶ FAILED

Only a timeout is recovered. A challenge is never retried: the account
holder has to pass MFA first. Retry state lives in the current call only.

Usage:
    committer = ChargeCommitter(provider, logger=logger)
    outcome = await committer.commit(
        charge=charge, account_id="42", access_token=token.access_token
    )
    if outcome.state is CommitState.CHALLENGE_REQUIRED:
        redirect(outcome.challenge.url)
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from src.core.constants import (
    COMMIT_BACKOFF_DEFAULT,
    COMMIT_MAX_ATTEMPTS_DEFAULT,
    COMMIT_TIMEOUT_DEFAULT,
)
from src.core.errors import DomainError
from src.core.result import Failure, Success
from src.domain.entities import Charge
from src.domain.enums import ChargeStatus, CommitState
from src.domain.errors import ChallengeRequiredError, ProviderUnavailableError
from src.domain.protocols import LoggerProtocol, PaymentsProviderProtocol
from src.domain.value_objects import Challenge, ChargeStatusReport

_TERMINAL_STATUS_STATES = {
    ChargeStatus.COMPLETED: CommitState.COMPLETED,
    ChargeStatus.CANCELLED: CommitState.CANCELLED,
}


@dataclass(frozen=True, kw_only=True)
class CommitOutcome:
    """Result of a commit run.

    Attributes:
        state: Terminal CommitState reached.
        charge: The charge, with its latest recorded status.
        status: Last status report seen (commit response or status check).
        challenge: Challenge to send the account holder to, if any.
        error: Error that ended the run, if any.
        attempts: Commit calls made.
        transitions: Every state visited, in order.
    """

    state: CommitState
    charge: Charge
    status: ChargeStatusReport | None = None
    challenge: Challenge | None = None
    error: DomainError | None = None
    attempts: int = 0
    transitions: tuple[CommitState, ...] = ()

    @property
    def succeeded(self) -> bool:
        """Whether the charge was completed."""
        return self.state is CommitState.COMPLETED


class ChargeCommitter:
    """Runs the commit state machine for one charge at a time.

    Dependencies (injected via constructor):
        - PaymentsProviderProtocol: Commit and status calls
        - LoggerProtocol: Transition logging
    """

    def __init__(
        self,
        provider: PaymentsProviderProtocol,
        *,
        logger: LoggerProtocol,
        timeout: float = COMMIT_TIMEOUT_DEFAULT,
        backoff: float = COMMIT_BACKOFF_DEFAULT,
        max_attempts: int = COMMIT_MAX_ATTEMPTS_DEFAULT,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize committer.

        Args:
            provider: Payments provider adapter.
            logger: Logger protocol implementation from container.
            timeout: Timeout for each commit call in seconds.
            backoff: Wait before retrying while the charge is in progress.
            max_attempts: Commit calls allowed, including the first.
            sleep: Awaitable sleep (replaced in tests).

        Raises:
            ValueError: If max_attempts is less than 1.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._provider = provider
        self._logger = logger
        self._timeout = timeout
        self._backoff = backoff
        self._max_attempts = max_attempts
        self._sleep = sleep

    async def commit(
        self,
        *,
        charge: Charge,
        account_id: str,
        access_token: str,
    ) -> CommitOutcome:
        """Commit a pending charge.

        Args:
            charge: Pending charge (commit_id and client_reference_id set).
            account_id: Account holder id.
            access_token: Bearer token.

        Returns:
            CommitOutcome: Terminal state, last status and attempts made.
        """
        log = self._logger.bind(
            commit_id=charge.commit_id,
            client_reference_id=charge.client_reference_id,
        )

        state = CommitState.REQUESTED
        transitions = [state]
        attempts = 0
        report: ChargeStatusReport | None = None
        challenge: Challenge | None = None
        error: DomainError | None = None

        while not state.is_terminal():
            previous = state
            match state:
                case CommitState.REQUESTED:
                    attempts += 1
                    log.info("charge_commit_attempt", attempt=attempts)
                    result = await self._provider.commit_charge(
                        account_id=account_id,
                        commit_id=charge.commit_id,
                        access_token=access_token,
                        timeout=self._timeout,
                    )
                    match result:
                        case Success(value=commit_report):
                            report = commit_report
                            self._record(charge, report, log)
                            state = _TERMINAL_STATUS_STATES.get(
                                report.status, CommitState.ACCEPTED
                            )
                        case Failure(error=ChallengeRequiredError() as challenge_error):
                            challenge = challenge_error.challenge
                            error = challenge_error
                            state = CommitState.CHALLENGE_REQUIRED
                        case Failure(
                            error=ProviderUnavailableError(is_timeout=True) as timeout_error
                        ):
                            error = timeout_error
                            # A timeout on a retry is final.
                            if attempts > 1 and attempts >= self._max_attempts:
                                state = CommitState.FAILED
                            else:
                                state = CommitState.TIMED_OUT
                        case Failure(error=other_error):
                            error = other_error
                            state = CommitState.FAILED

                case CommitState.TIMED_OUT:
                    status_result = await self._provider.get_charge_status(
                        account_id, charge.client_reference_id, access_token
                    )
                    match status_result:
                        case Success(value=status_report):
                            report = status_report
                            self._record(charge, report, log)
                        case Failure(error=status_error):
                            log.warning(
                                "charge_status_check_failed",
                                error_code=status_error.code.value,
                                error_message=status_error.message,
                            )
                            report = ChargeStatusReport(status=ChargeStatus.UNKNOWN)
                    state = CommitState.POLLING

                case CommitState.POLLING:
                    status = report.status if report else ChargeStatus.UNKNOWN
                    terminal = _TERMINAL_STATUS_STATES.get(status)
                    if terminal is not None:
                        state = terminal
                    else:
                        if status is ChargeStatus.IN_PROGRESS:
                            log.info("charge_commit_backoff", seconds=self._backoff)
                            await self._sleep(self._backoff)
                        if attempts < self._max_attempts:
                            state = CommitState.REQUESTED
                        else:
                            state = CommitState.FAILED

            transitions.append(state)
            log.info(
                "charge_commit_transition",
                from_state=previous.value,
                to_state=state.value,
                attempt=attempts,
            )

        if state is CommitState.FAILED:
            log.warning(
                "charge_commit_failed",
                attempts=attempts,
                error_code=error.code.value if error else None,
            )
        else:
            log.info("charge_commit_finished", state=state.value, attempts=attempts)

        return CommitOutcome(
            state=state,
            charge=charge,
            status=report,
            challenge=challenge,
            error=None if state in _TERMINAL_STATUS_STATES.values() else error,
            attempts=attempts,
            transitions=tuple(transitions),
        )

    @staticmethod
    def _record(charge: Charge, report: ChargeStatusReport, log: LoggerProtocol) -> None:
        match charge.apply_status(report):
            case Failure(error=reason):
                log.warning(
                    "charge_status_ignored",
                    reason=reason,
                    current=charge.status.name,
                    reported=report.status.name,
                )
            case Success():
                log.debug("charge_status_recorded", status=report.status.name)
