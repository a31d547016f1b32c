"""Ledger store backed by a JSON snapshot file."""

from decimal import Decimal, InvalidOperation
import json
from pathlib import Path
from typing import Any

from moneyflow.application.ports.ledger_store import LedgerStorePort
from moneyflow.domain.exceptions import InvalidSettlementStateError
from moneyflow.domain.models import (
    Expense,
    FundingSource,
    Ledger,
    Member,
    Participant,
)
from moneyflow.infrastructure.logging.logger import get_app_logger
from moneyflow.utils.decimal_utils import coerce_decimal, coerce_share_ratio


class JsonLedgerStore(LedgerStorePort):
    """Read-only ledger store for exported ledger snapshots."""

    def __init__(self, snapshot_path: Path | str, logger=None) -> None:
        """Load the snapshot file.

        Args:
            snapshot_path: Path to a JSON snapshot with a ``ledgers`` list.
            logger: Optional logger compatible with logging.Logger-like API.

        Raises:
            RuntimeError: If the file is missing or is not valid JSON.
        """
        self._logger = logger or get_app_logger()
        self._snapshot_path = Path(snapshot_path)
        if not self._snapshot_path.is_file():
            raise RuntimeError(
                f"Ledger snapshot not found: {self._snapshot_path}"
            )
        try:
            payload = json.loads(
                self._snapshot_path.read_text(encoding="utf-8"),
                parse_float=Decimal,
                parse_constant=Decimal,
            )
        except json.JSONDecodeError as exc:
            raise RuntimeError(
                f"Ledger snapshot is not valid JSON: {self._snapshot_path}"
            ) from exc
        self._ledgers: dict[str, dict[str, Any]] = {}
        for raw_ledger in payload.get("ledgers", []):
            self._ledgers[str(raw_ledger["id"])] = raw_ledger
        self._logger.info(
            f"Loaded {len(self._ledgers)} ledgers from {self._snapshot_path}"
        )

    def fetch_ledger(self, ledger_id: str) -> Ledger | None:
        raw_ledger = self._ledgers.get(str(ledger_id))
        if raw_ledger is None:
            return None
        return Ledger(
            ledger_id=str(raw_ledger["id"]),
            name=raw_ledger.get("name", ""),
            members=tuple(
                Member(member_id=str(raw["id"]), name=raw.get("name", ""))
                for raw in raw_ledger.get("members", [])
            ),
        )

    def fetch_expenses(self, ledger_id: str) -> list[Expense]:
        raw_ledger = self._ledgers.get(str(ledger_id))
        if raw_ledger is None:
            return []
        expenses = []
        for raw in raw_ledger.get("expenses", []):
            try:
                expenses.append(self._parse_expense(raw))
            except InvalidOperation as exc:
                raise InvalidSettlementStateError(
                    f"Expense {raw.get('id')} has a malformed amount "
                    "or share ratio"
                ) from exc
        return expenses

    def is_member(self, ledger_id: str, member_id: str) -> bool:
        raw_ledger = self._ledgers.get(str(ledger_id))
        if raw_ledger is None:
            return False
        return any(
            str(raw["id"]) == str(member_id)
            for raw in raw_ledger.get("members", [])
        )

    @staticmethod
    def _parse_expense(raw: dict[str, Any]) -> Expense:
        paid_by = raw.get("paidBy")
        return Expense(
            expense_id=str(raw["id"]),
            amount=coerce_decimal(raw["amount"]),
            owner_id=str(raw["ownerId"]),
            paid_by=str(paid_by) if paid_by is not None else None,
            funding_source=FundingSource.parse(raw.get("fundingSource")),
            participants=tuple(
                Participant(
                    member_id=str(item["memberId"]),
                    share_ratio=coerce_share_ratio(item.get("shareRatio")),
                )
                for item in raw.get("participants", [])
            ),
        )


__all__ = ["JsonLedgerStore"]
