"""Use case computing the settlement of a shared ledger."""

from decimal import Decimal

from moneyflow.application.ports.ledger_store import LedgerStorePort
from moneyflow.domain.exceptions import (
    InvalidSettlementStateError,
    LedgerAccessDeniedError,
    LedgerNotFoundError,
)
from moneyflow.domain.models import SettlementResult
from moneyflow.domain.services.settlement import (
    compute_member_balances,
    compute_settlement_transactions,
    validate_zero_sum,
)
from moneyflow.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from moneyflow.utils.decimal_utils import quantize_money


class SettlementEngine:
    """Split shared-pool expenses and compute the transfers settling them.

    The engine only reads a snapshot from the ledger store; it never writes.
    """

    def __init__(
        self,
        ledger_store: LedgerStorePort,
        logger=None,
        usage_logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_store: Port providing ledgers, members and expenses.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger recording settlement requests.
        """
        self._ledger_store = ledger_store
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()

    def calculate(
        self,
        ledger_id: str,
        requesting_member_id: str,
    ) -> SettlementResult:
        """Return balances and settlement transfers for a ledger.

        Args:
            ledger_id: Identifier of the shared ledger.
            requesting_member_id: Member asking for the settlement.

        Returns:
            SettlementResult: Per-member balances and the transfer list.

        Raises:
            LedgerNotFoundError: If the ledger does not exist.
            LedgerAccessDeniedError: If the requester is not a member.
            InvalidSettlementStateError: If the snapshot is inconsistent.
        """
        self._usage_logger.info(
            f"settlement requested ledger={ledger_id} "
            f"member={requesting_member_id}"
        )
        ledger = self._ledger_store.fetch_ledger(ledger_id)
        if ledger is None:
            raise LedgerNotFoundError(f"Account book not found: {ledger_id}")
        if not self._ledger_store.is_member(ledger_id, requesting_member_id):
            raise LedgerAccessDeniedError(
                f"Member {requesting_member_id} has no access to "
                f"account book {ledger_id}"
            )

        expenses = self._ledger_store.fetch_expenses(ledger_id)
        for expense in expenses:
            if not expense.amount.is_finite():
                raise InvalidSettlementStateError(
                    f"Expense {expense.expense_id} has a non-finite amount: "
                    f"{expense.amount}"
                )
        shared_expenses = [expense for expense in expenses if expense.is_shared]
        personal_expenses = [
            expense for expense in expenses if not expense.is_shared
        ]
        total_shared = sum(
            (expense.amount for expense in shared_expenses),
            start=Decimal("0"),
        )
        total_personal = sum(
            (expense.amount for expense in personal_expenses),
            start=Decimal("0"),
        )

        balances = compute_member_balances(ledger.members, shared_expenses)
        validate_zero_sum(balances, logger=self._logger)
        transactions = compute_settlement_transactions(balances)

        self._logger.info(
            f"Settlement computed for ledger={ledger_id}: "
            f"shared_total={total_shared}, members={len(ledger.members)}, "
            f"transactions={len(transactions)}"
        )
        return SettlementResult(
            ledger_id=ledger.ledger_id,
            ledger_name=ledger.name,
            total_shared_expense=quantize_money(total_shared),
            total_personal_expense=quantize_money(total_personal),
            members=balances,
            transactions=transactions,
        )


__all__ = ["SettlementEngine", "SettlementResult"]
