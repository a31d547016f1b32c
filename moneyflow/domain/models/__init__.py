"""Domain models package."""

from .ledger import Expense, FundingSource, Ledger, Member, Participant
from .settlement import MemberBalance, SettlementResult, SettlementTransaction

__all__ = [
    "Expense",
    "FundingSource",
    "Ledger",
    "Member",
    "Participant",
    "MemberBalance",
    "SettlementResult",
    "SettlementTransaction",
]
