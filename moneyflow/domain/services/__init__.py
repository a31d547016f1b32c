"""Domain services package."""

from .settlement import (
    compute_expense_shares,
    compute_member_balances,
    compute_settlement_transactions,
    validate_zero_sum,
)

__all__ = [
    "compute_expense_shares",
    "compute_member_balances",
    "compute_settlement_transactions",
    "validate_zero_sum",
]
