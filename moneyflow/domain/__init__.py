"""Domain package for settlement rules and core models."""

from .exceptions import (
    InvalidSettlementStateError,
    LedgerAccessDeniedError,
    LedgerNotFoundError,
    SettlementError,
)
from .models import (
    Expense,
    FundingSource,
    Ledger,
    Member,
    MemberBalance,
    Participant,
    SettlementResult,
    SettlementTransaction,
)
from .services import (
    compute_expense_shares,
    compute_member_balances,
    compute_settlement_transactions,
    validate_zero_sum,
)

__all__ = [
    "Expense",
    "FundingSource",
    "Ledger",
    "Member",
    "MemberBalance",
    "Participant",
    "SettlementResult",
    "SettlementTransaction",
    "SettlementError",
    "LedgerNotFoundError",
    "LedgerAccessDeniedError",
    "InvalidSettlementStateError",
    "compute_expense_shares",
    "compute_member_balances",
    "compute_settlement_transactions",
    "validate_zero_sum",
]
