"""Payoneer balance mapper.

Converts balances responses to BalanceData. Two shapes are in use:

Documented API shape:
    {"result": {"items": [{"id": "4366181865108056", "currency": "GBP", ...}], "total": 3}}

Sandbox shape:
    {"result": {"balances": {"items": [...]}}}

Item fields:
    {
        "id": "4366181865108056",
        "type": "BALANCE",
        "currency": "GBP",
        "status": "2",
        "status_name": "Active",
        "available_balance": "20.00",
        "update_time": "2018-03-30T19:28:17Z"
    }
"""

from decimal import Decimal, InvalidOperation
from typing import Any

import structlog

from src.domain.protocols import BalanceData

logger = structlog.get_logger(__name__)


class PayoneerBalanceMapper:
    """Mapper for converting Payoneer balances to BalanceData.

    Thread-safe: No mutable state, can be shared across requests.

    Example:
        >>> mapper = PayoneerBalanceMapper()
        >>> balances = mapper.map_balances({"result": {"items": [...]}})
    """

    def map_balances(self, data: dict[str, Any]) -> list[BalanceData]:
        """Map a balances response to BalanceData items.

        Args:
            data: Raw balances response.

        Returns:
            List of balances. Empty when the shape is not recognized.
        """
        items = self._extract_items(data)
        if items is None:
            logger.warning(
                "payoneer_balances_unrecognized_shape",
                keys=list(data.keys()) if isinstance(data, dict) else None,
            )
            return []

        balances: list[BalanceData] = []
        for item in items:
            balance = self.map_balance(item)
            if balance is not None:
                balances.append(balance)
        return balances

    def map_balance(self, item: Any) -> BalanceData | None:
        """Map a single balance item.

        Args:
            item: Balance object from `items`.

        Returns:
            BalanceData, or None when `id` or `currency` is missing.
        """
        if not isinstance(item, dict):
            logger.debug("payoneer_balance_not_an_object")
            return None

        balance_id = item.get("id")
        currency = item.get("currency")
        if balance_id is None or not currency:
            logger.debug(
                "payoneer_balance_missing_field",
                has_id=balance_id is not None,
                has_currency=bool(currency),
            )
            return None

        return BalanceData(
            balance_id=str(balance_id),
            currency=str(currency).upper(),
            available_balance=self._parse_decimal(item.get("available_balance")),
            balance_type=item.get("type"),
            status_name=item.get("status_name"),
            raw_data=item,
        )

    @staticmethod
    def _extract_items(data: Any) -> list[Any] | None:
        if not isinstance(data, dict):
            return None
        result = data.get("result")
        if not isinstance(result, dict):
            return None

        balances = result.get("balances")
        if isinstance(balances, dict) and isinstance(balances.get("items"), list):
            return balances["items"]
        if isinstance(result.get("items"), list):
            return result["items"]
        return None

    @staticmethod
    def _parse_decimal(value: Any) -> Decimal | None:
        if value is None:
            return None
        try:
            return Decimal(str(value))
        except InvalidOperation:
            return None
