"""OAuth callback router for the Payoneer consent and MFA challenge redirects.

These endpoints are external-facing (dictated by the redirect URL registered
with Payoneer) and not part of a versioned API.

Flow:
    1. GET /oauth/consent creates a payment session and redirects the account
       holder to the Payoneer consent page with state=<session id>
    2. Payoneer redirects to GET /oauth/authorize with a one-time code
       → charge flow (token, balances, debit, commit, status)
    3. If the commit needs MFA, the account holder is redirected to the
       challenge URL; Payoneer then calls GET /oauth/authorize?type=response
       → the pending commit is resumed

Session affinity:
    The session id travels as OAuth `state` and in an HTTP-only cookie so the
    challenge callback finds the same session.
"""

import html
from typing import Annotated

from fastapi import APIRouter, Cookie, Depends, Query, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from src.application.commands import HandleAuthorizationCode, ResumeAfterChallenge
from src.application.commands.handlers.handle_authorization_code_handler import (
    HandleAuthorizationCodeHandler,
)
from src.application.commands.handlers.resume_after_challenge_handler import (
    ResumeAfterChallengeHandler,
)
from src.application.dtos import ChargeFlowResult
from src.application.errors import ApplicationError, ApplicationErrorCode
from src.core.constants import SESSION_COOKIE_NAME, SESSION_TTL_DEFAULT
from src.core.container import (
    get_handle_authorization_code_handler,
    get_logger,
    get_payments_provider,
    get_resume_after_challenge_handler,
    get_session_store,
)
from src.core.result import Failure, Success
from src.domain.enums import CallbackKind, ChargeStatus
from src.domain.protocols import (
    LoggerProtocol,
    PaymentsProviderProtocol,
    SessionStoreProtocol,
)

oauth_router = APIRouter(tags=["OAuth Callbacks"])

_ERROR_STATUS = {
    ApplicationErrorCode.COMMAND_VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ApplicationErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ApplicationErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ApplicationErrorCode.COMMAND_EXECUTION_FAILED: status.HTTP_409_CONFLICT,
    ApplicationErrorCode.PROVIDER_FAILED: status.HTTP_502_BAD_GATEWAY,
}


def _render_page(title: str, body: str, accent: str) -> str:
    """Wrap page content in the shared layout.

    Args:
        title: Page title (escaped by the caller).
        body: Inner HTML (escaped by the caller).
        accent: CSS color of the card border.

    Returns:
        HTML string.
    """
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <title>{title}</title>
        <style>
            body {{
                font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
                background: #f4f5f7;
                margin: 0;
                padding: 60px 20px;
            }}
            .card {{
                background: white;
                border-top: 6px solid {accent};
                border-radius: 8px;
                box-shadow: 0 2px 8px rgba(0, 0, 0, 0.08);
                margin: 0 auto;
                max-width: 480px;
                padding: 32px;
            }}
            h1 {{ color: #222; font-size: 22px; margin-top: 0; }}
            table {{ border-collapse: collapse; width: 100%; }}
            th {{ color: #666; font-weight: 500; text-align: left; padding: 6px 0; }}
            td {{ color: #222; font-family: monospace; text-align: right; padding: 6px 0; }}
            .detail {{
                background: #f8f8f8;
                border-radius: 6px;
                color: #c0392b;
                font-family: monospace;
                padding: 12px;
            }}
        </style>
    </head>
    <body>
        <div class="card">
            <h1>{title}</h1>
            {body}
        </div>
    </body>
    </html>
    """


def _create_result_html(flow: ChargeFlowResult) -> str:
    """Create the charge result page.

    Args:
        flow: Result of the charge flow.

    Returns:
        HTML string with disclosure and status.
    """
    rows: list[tuple[str, str]] = []
    if flow.disclosure is not None:
        for label, value in flow.disclosure.to_display().items():
            rows.append((label, value))
        for fee in flow.disclosure.fees:
            rows.append((f"Fee ({fee.type})", str(fee.amount)))
    if flow.state is not None:
        rows.append(("Commit", flow.state.value))
    if flow.status is not None:
        rows.append(("Status", flow.status.status.name))
        if flow.status.status_description:
            rows.append(("Description", flow.status.status_description))
        if flow.status.payment_id:
            rows.append(("Payment ID", flow.status.payment_id))
    if flow.charge is not None:
        rows.append(("Reference", flow.charge.client_reference_id))

    table = "".join(
        f"<tr><th>{html.escape(label)}</th><td>{html.escape(value)}</td></tr>"
        for label, value in rows
    )
    succeeded = flow.status is not None and flow.status.status is ChargeStatus.COMPLETED
    title = "Charge Completed" if succeeded else "Charge Processed"
    return _render_page(
        title,
        f"<table>{table}</table>",
        accent="#27ae60" if succeeded else "#f39c12",
    )


def _create_error_html(error_title: str, error_message: str) -> str:
    """Create error HTML response for OAuth callback.

    Args:
        error_title: Error title.
        error_message: Error description.

    Returns:
        HTML string with error message (escaped).
    """
    return _render_page(
        html.escape(error_title),
        f'<p>The charge could not be completed.</p>'
        f'<div class="detail">{html.escape(error_message)}</div>',
        accent="#e74c3c",
    )


def _error_response(error: ApplicationError) -> HTMLResponse:
    title = f"Charge Failed ({error.step})" if error.step else "Charge Failed"
    return HTMLResponse(
        content=_create_error_html(title, error.message),
        status_code=_ERROR_STATUS.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
    )


def _set_session_cookie(response: Response, session_id: str) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session_id,
        max_age=int(SESSION_TTL_DEFAULT),
        httponly=True,
        samesite="lax",
    )


def _flow_response(flow: ChargeFlowResult) -> Response:
    """Redirect to a pending challenge, else render the result page."""
    response: Response
    if flow.challenge is not None:
        response = RedirectResponse(
            url=flow.challenge.url,
            status_code=status.HTTP_307_TEMPORARY_REDIRECT,
        )
    else:
        response = HTMLResponse(content=_create_result_html(flow))
    _set_session_cookie(response, flow.session_id)
    return response


@oauth_router.get(
    "/oauth/consent",
    summary="Start Payoneer consent",
    description="Create a payment session and redirect to the Payoneer consent page.",
    responses={307: {"description": "Redirect to Payoneer consent page"}},
)
async def start_consent(
    provider: PaymentsProviderProtocol = Depends(get_payments_provider),
    session_store: SessionStoreProtocol = Depends(get_session_store),
    logger: LoggerProtocol = Depends(get_logger),
) -> RedirectResponse:
    """Redirect the account holder to the consent page.

    Returns:
        RedirectResponse: 307 to the consent URL with state=<session id>.
    """
    session = await session_store.create()
    consent_url = provider.build_consent_url(state=session.session_id)
    logger.info("consent_redirect", session_id=session.session_id)

    response = RedirectResponse(
        url=consent_url,
        status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    )
    _set_session_cookie(response, session.session_id)
    return response


@oauth_router.get(
    "/oauth/authorize",
    response_class=HTMLResponse,
    summary="Payoneer OAuth callback",
    description="Handle consent (authorization code) and MFA challenge callbacks.",
    responses={
        200: {"description": "Charge processed"},
        307: {"description": "Redirect to MFA challenge"},
        400: {"description": "OAuth error or missing parameters"},
        404: {"description": "Session or balance not found"},
        502: {"description": "Payoneer call failed"},
    },
)
async def oauth_authorize_callback(
    type_: Annotated[
        str | None, Query(alias="type", description="'response' for MFA callbacks")
    ] = None,
    code: Annotated[str | None, Query(description="Authorization code")] = None,
    state: Annotated[str | None, Query(description="Session id echoed by Payoneer")] = None,
    response_path: Annotated[
        str | None, Query(description="Path replaying the pending decision")
    ] = None,
    session_id: Annotated[str | None, Query(description="Explicit session id")] = None,
    error: Annotated[str | None, Query(description="OAuth error code")] = None,
    error_description: Annotated[
        str | None, Query(description="OAuth error description")
    ] = None,
    session_cookie: Annotated[str | None, Cookie(alias=SESSION_COOKIE_NAME)] = None,
    code_handler: HandleAuthorizationCodeHandler = Depends(
        get_handle_authorization_code_handler
    ),
    challenge_handler: ResumeAfterChallengeHandler = Depends(
        get_resume_after_challenge_handler
    ),
    logger: LoggerProtocol = Depends(get_logger),
) -> Response:
    """Handle the Payoneer redirect.

    Query Parameters:
        type: "response" when returning from an MFA challenge.
        code: One-time authorization code (consent callback).
        state: Session id set by /oauth/consent.
        response_path: Path to replay after MFA.
        session_id: Explicit session id (fallback when cookies are absent).
        error / error_description: Consent failure details.

    Returns:
        Response: Result page, error page, or 307 redirect to a challenge.
    """
    kind = CallbackKind.classify(error=error, type_=type_)
    logger.info("oauth_callback_received", kind=kind.value)

    match kind:
        case CallbackKind.ERROR:
            logger.warning(
                "oauth_callback_error",
                error=error,
                error_description=error_description,
                state=state,
            )
            return HTMLResponse(
                content=_create_error_html(
                    error_title="Authorization Denied",
                    error_message=error_description or error or "",
                ),
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        case CallbackKind.CHALLENGE_RESPONSE:
            result = await challenge_handler.handle(
                ResumeAfterChallenge(
                    session_id=session_cookie or session_id or state,
                    response_path=response_path,
                )
            )

        case CallbackKind.AUTHORIZATION_CODE:
            if not code:
                return HTMLResponse(
                    content=_create_error_html(
                        error_title="Missing Authorization Code",
                        error_message="No authorization code received from Payoneer.",
                    ),
                    status_code=status.HTTP_400_BAD_REQUEST,
                )
            result = await code_handler.handle(
                HandleAuthorizationCode(
                    code=code,
                    session_id=session_cookie or state or session_id,
                )
            )

    match result:
        case Failure(error=app_error):
            return _error_response(app_error)
        case Success(value=flow):
            return _flow_response(flow)
