"""Payoneer charge mapper.

Converts debit, commit/status and challenge payloads to domain types.

Debit response:
    {
        "result": {
            "type": "debit",
            "commit_id": "<guid>",
            "client_reference_id": "...",
            "fees": [{"type": "charge_fee", "amount": 1, "currency": "USD"}],
            "fx": {"quote": "...", "rate": 0.72, "source_currency": "CAD", "target_currency": "USD"},
            "amounts": {
                "charged": {"amount": 109.01, "currency": "USD"},
                "target": {"amount": 109.01, "currency": "USD"}
            },
            "expires_at": "2022-03-07T15:30:41.406397Z"
        }
    }

Commit/status response:
    {"result": {"status": 2, "status_description": "completed", "payment_id": "..."}}
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

import structlog

from src.domain.entities import Charge
from src.domain.enums import ChargeStatus
from src.domain.value_objects import (
    Challenge,
    ChargeAmounts,
    ChargeStatusReport,
    Fee,
    FxQuote,
    Money,
)

logger = structlog.get_logger(__name__)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a Payoneer ISO 8601 timestamp (trailing `Z` allowed).

    Args:
        value: Raw timestamp.

    Returns:
        Timezone-aware datetime, or None if missing or unparseable.
    """
    if not isinstance(value, str) or not value:
        return None
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


class PayoneerChargeMapper:
    """Mapper for Payoneer charge payloads.

    Thread-safe: No mutable state, can be shared across requests.
    """

    def map_debit(
        self, data: dict[str, Any], client_reference_id: str
    ) -> Charge | None:
        """Map a debit response to a pending Charge.

        Args:
            data: Raw debit response.
            client_reference_id: Reference id sent with the debit, used when
                the response does not echo it back.

        Returns:
            Charge, or None when `result.commit_id` is missing.
        """
        result = data.get("result")
        if not isinstance(result, dict) or not result.get("commit_id"):
            logger.warning(
                "payoneer_debit_missing_commit_id",
                keys=list(data.keys()),
            )
            return None

        try:
            return Charge(
                commit_id=str(result["commit_id"]),
                client_reference_id=str(
                    result.get("client_reference_id") or client_reference_id
                ),
                amounts=self._map_amounts(result.get("amounts")),
                fees=self._map_fees(result.get("fees")),
                fx=self._map_fx(result.get("fx")),
                expires_at=parse_timestamp(result.get("expires_at")),
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(
                "payoneer_debit_mapping_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

    def map_status(self, data: dict[str, Any]) -> ChargeStatusReport | None:
        """Map a commit or status response to a ChargeStatusReport.

        Args:
            data: Raw response (`{"result": {...}}` or the bare result object).

        Returns:
            ChargeStatusReport, or None when no `status` field is present.
        """
        result = data.get("result", data)
        if not isinstance(result, dict) or "status" not in result:
            return None

        raw_status = result.get("status")
        status = ChargeStatus.from_code(raw_status)
        if status == ChargeStatus.UNKNOWN and raw_status not in (0, "0"):
            logger.info(
                "payoneer_charge_status_unrecognized",
                raw_status=raw_status,
            )

        payment_id = result.get("payment_id")
        return ChargeStatusReport(
            status=status,
            status_description=result.get("status_description"),
            payment_id=str(payment_id) if payment_id is not None else None,
            client_reference_id=result.get("client_reference_id"),
            raw_status=raw_status,
        )

    def map_challenge(self, data: Any) -> Challenge | None:
        """Map the `challenge` object of a challenge_required response.

        Args:
            data: Raw challenge object.

        Returns:
            Challenge, or None when `url` is missing.
        """
        if not isinstance(data, dict) or not data.get("url"):
            return None
        session_id = data.get("session_id")
        return Challenge(
            type=str(data.get("type") or "mfa"),
            url=str(data["url"]),
            session_id=str(session_id) if session_id else None,
            expires_at=parse_timestamp(data.get("expires_at")),
        )

    def _map_amounts(self, data: Any) -> ChargeAmounts | None:
        if not isinstance(data, dict):
            return None
        charged = self._map_money(data.get("charged"))
        target = self._map_money(data.get("target"))
        if charged is None or target is None:
            return None
        return ChargeAmounts(charged=charged, target=target)

    def _map_fees(self, data: Any) -> list[Fee]:
        if not isinstance(data, list):
            return []
        fees: list[Fee] = []
        for item in data:
            if not isinstance(item, dict):
                continue
            amount = self._map_money(item)
            if amount is not None:
                fees.append(Fee(type=str(item.get("type", "fee")), amount=amount))
        return fees

    def _map_fx(self, data: Any) -> FxQuote | None:
        if not isinstance(data, dict) or data.get("rate") is None:
            return None
        try:
            rate = Decimal(str(data["rate"]))
        except InvalidOperation:
            return None
        return FxQuote(
            rate=rate,
            source_currency=str(data.get("source_currency", "")),
            target_currency=str(data.get("target_currency", "")),
            quote=data.get("quote"),
        )

    @staticmethod
    def _map_money(data: Any) -> Money | None:
        if not isinstance(data, dict) or data.get("amount") is None:
            return None
        try:
            return Money(data["amount"], data.get("currency", ""))
        except ValueError:
            return None
