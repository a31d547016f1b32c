"""Application port for ledger snapshots."""

from typing import Protocol

from moneyflow.domain.models import Expense, Ledger


class LedgerStorePort(Protocol):
    """Port exposing read access to ledgers, members and expenses."""

    def fetch_ledger(self, ledger_id: str) -> Ledger | None:
        """Return the ledger with its members, or None when it is missing."""

    def fetch_expenses(self, ledger_id: str) -> list[Expense]:
        """Return every expense of the ledger, shared and personal."""

    def is_member(self, ledger_id: str, member_id: str) -> bool:
        """Return True when the member belongs to the ledger."""


__all__ = ["LedgerStorePort"]
