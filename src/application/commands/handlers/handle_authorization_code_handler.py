"""HandleAuthorizationCode command handler.

Runs the charge flow after the account holder consented:

    1. Exchange the one-time code for a bearer token
    2. Decode the id_token to get the account holder id
    3. Refresh the token (optional, on by default)
    4. Fetch balances and pick the one in the configured currency
    5. Create a pending debit with a fresh client reference id
    6. Build the disclosure and commit (ChargeCommitter state machine)
    7. Query the status once and record it (settles an ACCEPTED commit)

A challenge at step 5 or 6 stops the flow: the challenge is stored on the
session and returned so the router can redirect the account holder.

Architecture:
- Application layer handler (orchestrates the flow)
- Depends on domain protocols only (provider, session store, logger)
- Uses Result types for error handling
"""

from uuid import uuid4

from src.application.commands.callback_commands import HandleAuthorizationCode
from src.application.dtos import ChargeFlowResult
from src.application.errors import ApplicationError, ApplicationErrorCode
from src.application.services.charge_committer import ChargeCommitter
from src.core.constants import DESCRIPTION_MAX_LENGTH
from src.core.enums import ErrorCode
from src.core.errors import DomainError, NotFoundError
from src.core.result import Failure, Result, Success
from src.core.validation import (
    mask_identifier,
    validate_max_length,
    validate_not_empty,
)
from src.domain.entities import PaymentSession
from src.domain.enums import ChargeStatus, CommitState
from src.domain.errors import ChallengeRequiredError
from src.domain.protocols import (
    LoggerProtocol,
    PaymentsProviderProtocol,
    SessionStoreProtocol,
)
from src.domain.value_objects import Challenge, ChargeDisclosure, Money

_SETTLED_STATES = {
    ChargeStatus.COMPLETED: CommitState.COMPLETED,
    ChargeStatus.CANCELLED: CommitState.CANCELLED,
}


class HandleAuthorizationCodeHandler:
    """Handler for HandleAuthorizationCode command.

    Dependencies (injected via constructor):
        - PaymentsProviderProtocol: Payoneer calls
        - SessionStoreProtocol: Session lookup and persistence
        - ChargeCommitter: Commit state machine
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        provider: PaymentsProviderProtocol,
        session_store: SessionStoreProtocol,
        committer: ChargeCommitter,
        logger: LoggerProtocol,
        *,
        charge_amount: Money,
        description: str,
        target_amount: bool = True,
        refresh_on_connect: bool = True,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            provider: Payments provider adapter.
            session_store: Payment session store.
            committer: Charge committer.
            logger: Logger protocol implementation from container.
            charge_amount: Amount and currency to debit.
            description: Debit description shown to the account holder.
            target_amount: True if the partner receives exactly charge_amount.
            refresh_on_connect: Refresh the token right after the exchange.
        """
        self._provider = provider
        self._sessions = session_store
        self._committer = committer
        self._logger = logger
        self._charge_amount = charge_amount
        self._description = description
        self._target_amount = target_amount
        self._refresh_on_connect = refresh_on_connect

    async def handle(
        self, cmd: HandleAuthorizationCode
    ) -> Result[ChargeFlowResult, ApplicationError]:
        """Handle HandleAuthorizationCode command.

        Args:
            cmd: Command with the authorization code and optional session id.

        Returns:
            Success(ChargeFlowResult): Flow finished (any commit state) or
                stopped on a challenge (`challenge` set).
            Failure(ApplicationError): A step failed; the flow was aborted.

        Side Effects:
            - Creates the session if the id is unknown
            - Stores token, account id, charge and challenge on the session
        """
        match validate_not_empty(cmd.code, "code"):
            case Success():
                validation = validate_max_length(
                    self._description, DESCRIPTION_MAX_LENGTH, "description"
                )
            case Failure() as failure:
                validation = failure

        match validation:
            case Failure(error=validation_error):
                return Failure(
                    error=ApplicationError(
                        code=ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
                        message=validation_error.message,
                        step="validate",
                        domain_error=validation_error,
                    )
                )
            case Success():
                pass

        session = await self._sessions.get_or_create(cmd.session_id)
        log = self._logger.bind(session_id=session.session_id)
        log.info("authorization_code_received")

        # Step 1: Exchange code for token
        match await self._provider.exchange_code_for_token(cmd.code):
            case Failure(error=error):
                return self._fail("exchange_code", error, log)
            case Success(value=token):
                pass

        # Step 2: Decode id_token for the account holder id
        if not token.id_token:
            return self._fail(
                "decode_id_token",
                DomainError(
                    code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                    message="Token response has no id_token",
                ),
                log,
            )
        match self._provider.decode_id_token(token.id_token):
            case Failure(error=error):
                return self._fail("decode_id_token", error, log)
            case Success(value=claims):
                pass

        account_id = claims.get("account_id")
        match session.authenticate(token, str(account_id) if account_id is not None else ""):
            case Failure(error=reason):
                return self._fail(
                    "decode_id_token",
                    DomainError(code=ErrorCode.PROVIDER_INVALID_RESPONSE, message=reason),
                    log,
                )
            case Success():
                pass
        account_id = session.account_id
        log.info("account_holder_identified", account_id=mask_identifier(account_id))

        # Step 3: Refresh token
        if self._refresh_on_connect and token.refresh_token:
            match await self._provider.refresh_access_token(token.refresh_token):
                case Failure(error=error):
                    await self._sessions.save(session)
                    return self._fail("refresh_token", error, log)
                case Success(value=refreshed):
                    session.replace_token(refreshed)
                    log.info("bearer_token_refreshed", expires_in=refreshed.expires_in)
        access_token = session.access_token

        # Step 4: Pick a balance in the configured currency
        match await self._provider.get_balances(account_id, access_token):
            case Failure(error=error):
                await self._sessions.save(session)
                return self._fail("get_balances", error, log)
            case Success(value=balances):
                pass

        currency = self._charge_amount.currency
        balance = next((b for b in balances if b.currency == currency), None)
        if balance is None:
            await self._sessions.save(session)
            log.warning(
                "balance_not_found",
                currency=currency,
                available=[b.currency for b in balances],
            )
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.NOT_FOUND,
                    message=f"No {currency} balance on the account",
                    step="select_balance",
                    domain_error=NotFoundError(
                        code=ErrorCode.BALANCE_NOT_FOUND,
                        message=f"No {currency} balance on the account",
                        resource_type="balance",
                        resource_id=currency,
                    ),
                )
            )

        # Step 5: Create the pending debit
        client_reference_id = str(uuid4())
        session.client_reference_id = client_reference_id
        debit_result = await self._provider.create_debit(
            account_id=account_id,
            balance_id=balance.balance_id,
            amount=self._charge_amount,
            target_amount=self._target_amount,
            client_reference_id=client_reference_id,
            description=self._description,
            access_token=access_token,
        )
        match debit_result:
            case Failure(error=ChallengeRequiredError(challenge=challenge)):
                return await self._stop_on_challenge(
                    session, ChargeFlowResult(session_id=session.session_id), challenge, log
                )
            case Failure(error=error):
                await self._sessions.save(session)
                return self._fail("create_debit", error, log)
            case Success(value=charge):
                session.attach_charge(charge)

        disclosure: ChargeDisclosure | None = None
        match charge.disclosure():
            case Success(value=disclosure):
                log.info("charge_disclosure", **disclosure.to_display())
            case Failure(error=reason):
                log.warning("charge_disclosure_unavailable", reason=reason)

        # Step 6: Commit
        outcome = await self._committer.commit(
            charge=charge,
            account_id=account_id,
            access_token=access_token,
        )
        flow = ChargeFlowResult(
            session_id=session.session_id,
            state=outcome.state,
            charge=charge,
            status=outcome.status,
            disclosure=disclosure,
            attempts=outcome.attempts,
        )
        if outcome.state is CommitState.CHALLENGE_REQUIRED and outcome.challenge:
            return await self._stop_on_challenge(session, flow, outcome.challenge, log)

        # Step 7: Status
        match await self._provider.get_charge_status(
            account_id, charge.client_reference_id, access_token
        ):
            case Success(value=report):
                flow.status = report
                match charge.apply_status(report):
                    case Failure(error=reason):
                        log.warning("charge_status_ignored", reason=reason)
                    case Success():
                        pass
                if outcome.state is CommitState.ACCEPTED:
                    flow.state = _SETTLED_STATES.get(report.status, flow.state)
            case Failure(error=error):
                log.warning(
                    "charge_status_unavailable",
                    error_code=error.code.value,
                    error_message=error.message,
                )

        await self._sessions.save(session)
        log.info(
            "charge_flow_finished",
            state=flow.state.value,
            status=flow.status.status.name if flow.status else None,
            attempts=outcome.attempts,
        )
        return Success(value=flow)

    async def _stop_on_challenge(
        self,
        session: PaymentSession,
        flow: ChargeFlowResult,
        challenge: Challenge,
        log: LoggerProtocol,
    ) -> Result[ChargeFlowResult, ApplicationError]:
        session.require_challenge(challenge)
        await self._sessions.save(session)
        flow.challenge = challenge
        log.info(
            "challenge_redirect_required",
            challenge_type=challenge.type,
            challenge_session_id=challenge.session_id,
        )
        return Success(value=flow)

    @staticmethod
    def _fail(
        step: str, error: DomainError, log: LoggerProtocol
    ) -> Failure[ApplicationError]:
        log.warning(
            "charge_flow_aborted",
            step=step,
            error_code=error.code.value,
            error_message=error.message,
        )
        code = (
            ApplicationErrorCode.UNAUTHORIZED
            if error.code is ErrorCode.PROVIDER_AUTHENTICATION_FAILED
            else ApplicationErrorCode.PROVIDER_FAILED
        )
        return Failure(
            error=ApplicationError(
                code=code,
                message=error.message,
                step=step,
                domain_error=error,
            )
        )
