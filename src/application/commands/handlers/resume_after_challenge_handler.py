"""ResumeAfterChallenge command handler.

Runs when Payoneer redirects back with `type=response` after the account
holder completed an MFA challenge:

    1. Find the session (cookie / state / session_id)
    2. Consume the pending challenge (exactly once)
    3. Replay the pending decision via `response_path`
    4. Query the charge status once and record it

Architecture:
- Application layer handler
- Depends on domain protocols only
- Uses Result types for error handling
"""

from src.application.commands.callback_commands import ResumeAfterChallenge
from src.application.dtos import ChargeFlowResult
from src.application.errors import ApplicationError, ApplicationErrorCode
from src.core.result import Failure, Result, Success
from src.core.validation import validate_response_path
from src.domain.enums import ChargeStatus, CommitState
from src.domain.errors import ChallengeRequiredError, SessionError
from src.domain.protocols import (
    LoggerProtocol,
    PaymentsProviderProtocol,
    SessionStoreProtocol,
)


class ResumeAfterChallengeHandler:
    """Handler for ResumeAfterChallenge command.

    Dependencies (injected via constructor):
        - PaymentsProviderProtocol: Challenge replay and status calls
        - SessionStoreProtocol: Session lookup
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        provider: PaymentsProviderProtocol,
        session_store: SessionStoreProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            provider: Payments provider adapter.
            session_store: Payment session store.
            logger: Logger protocol implementation from container.
        """
        self._provider = provider
        self._sessions = session_store
        self._logger = logger

    async def handle(
        self, cmd: ResumeAfterChallenge
    ) -> Result[ChargeFlowResult, ApplicationError]:
        """Handle ResumeAfterChallenge command.

        Args:
            cmd: Command with session id and response path.

        Returns:
            Success(ChargeFlowResult): Latest status after the replay, or a
                new challenge to redirect to.
            Failure(ApplicationError): Session missing, no pending challenge,
                invalid path, or status unavailable.
        """
        session = await self._sessions.get(cmd.session_id) if cmd.session_id else None
        if session is None:
            self._logger.warning("challenge_response_without_session")
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.NOT_FOUND,
                    message=SessionError.SESSION_NOT_FOUND,
                    step="find_session",
                )
            )

        log = self._logger.bind(session_id=session.session_id)
        log.info("challenge_response_received")

        match validate_response_path(cmd.response_path):
            case Failure(error=validation_error):
                log.warning("challenge_response_invalid", reason=validation_error.message)
                return Failure(
                    error=ApplicationError(
                        code=ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
                        message=validation_error.message,
                        step="validate",
                        domain_error=validation_error,
                    )
                )
            case Success(value=response_path):
                pass

        if not session.is_authenticated():
            return self._reject(
                ApplicationErrorCode.UNAUTHORIZED, SessionError.NOT_AUTHENTICATED, log
            )
        if session.client_reference_id is None:
            return self._reject(
                ApplicationErrorCode.COMMAND_EXECUTION_FAILED,
                SessionError.NO_PENDING_CHARGE,
                log,
            )

        match session.consume_challenge():
            case Failure(error=reason):
                return self._reject(
                    ApplicationErrorCode.COMMAND_EXECUTION_FAILED, reason, log
                )
            case Success(value=challenge):
                if challenge.is_expired():
                    log.warning(
                        "challenge_expired",
                        expires_at=challenge.expires_at.isoformat()
                        if challenge.expires_at
                        else None,
                    )

        account_id = session.account_id
        access_token = session.access_token
        flow = ChargeFlowResult(
            session_id=session.session_id,
            charge=session.charge,
        )

        # Replay the pending decision. Its body is informational; the status
        # endpoint is the source of truth.
        match await self._provider.commit_after_challenge(response_path, access_token):
            case Failure(error=ChallengeRequiredError(challenge=new_challenge)):
                session.require_challenge(new_challenge)
                await self._sessions.save(session)
                flow.challenge = new_challenge
                log.info("challenge_repeated", challenge_type=new_challenge.type)
                return Success(value=flow)
            case Failure(error=error):
                log.warning(
                    "commit_after_challenge_failed",
                    error_code=error.code.value,
                    error_message=error.message,
                )
            case Success(value=data):
                log.info("commit_after_challenge_succeeded", keys=sorted(data.keys()))

        match await self._provider.get_charge_status(
            account_id, session.client_reference_id, access_token
        ):
            case Failure(error=error):
                await self._sessions.save(session)
                log.warning(
                    "charge_status_unavailable",
                    error_code=error.code.value,
                    error_message=error.message,
                )
                return Failure(
                    error=ApplicationError(
                        code=ApplicationErrorCode.PROVIDER_FAILED,
                        message=error.message,
                        step="get_charge_status",
                        domain_error=error,
                    )
                )
            case Success(value=report):
                flow.status = report

        if session.charge is not None:
            match session.charge.apply_status(report):
                case Failure(error=reason):
                    log.warning("charge_status_ignored", reason=reason)
                case Success():
                    pass

        if report.status is ChargeStatus.COMPLETED:
            flow.state = CommitState.COMPLETED
        elif report.status is ChargeStatus.CANCELLED:
            flow.state = CommitState.CANCELLED

        await self._sessions.save(session)
        log.info("challenge_flow_finished", status=report.status.name)
        return Success(value=flow)

    @staticmethod
    def _reject(
        code: ApplicationErrorCode, reason: str, log: LoggerProtocol
    ) -> Failure[ApplicationError]:
        log.warning("challenge_response_rejected", reason=reason)
        return Failure(
            error=ApplicationError(code=code, message=reason, step="resume_challenge")
        )
