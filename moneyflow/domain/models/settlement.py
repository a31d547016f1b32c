"""Domain models for settlement results."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any


def _money(value: Decimal) -> str:
    return f"{value:.2f}"


@dataclass(frozen=True)
class MemberBalance:
    """Paid versus owed amounts of one member.

    Attributes:
        member_id: Member identifier.
        name: Member display name.
        paid_amount: Shared expenses the member fronted.
        should_pay_amount: Sum of the member's computed shares.
        balance: paid_amount minus should_pay_amount; positive means the
            group owes the member.
    """

    member_id: str
    name: str
    paid_amount: Decimal
    should_pay_amount: Decimal
    balance: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "memberId": self.member_id,
            "name": self.name,
            "paidAmount": _money(self.paid_amount),
            "shouldPayAmount": _money(self.should_pay_amount),
            "balance": _money(self.balance),
        }


@dataclass(frozen=True)
class SettlementTransaction:
    """Recommended transfer from a debtor to a creditor."""

    from_member_id: str
    from_name: str
    to_member_id: str
    to_name: str
    amount: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "fromMemberId": self.from_member_id,
            "fromName": self.from_name,
            "toMemberId": self.to_member_id,
            "toName": self.to_name,
            "amount": _money(self.amount),
        }


@dataclass(frozen=True)
class SettlementResult:
    """Settlement of a ledger's shared expenses."""

    ledger_id: str
    ledger_name: str
    total_shared_expense: Decimal
    total_personal_expense: Decimal
    members: list[MemberBalance]
    transactions: list[SettlementTransaction]

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping with amounts as strings."""
        return {
            "ledgerId": self.ledger_id,
            "ledgerName": self.ledger_name,
            "totalSharedExpense": _money(self.total_shared_expense),
            "totalPersonalExpense": _money(self.total_personal_expense),
            "members": [member.to_dict() for member in self.members],
            "transactions": [
                transaction.to_dict() for transaction in self.transactions
            ],
        }


__all__ = ["MemberBalance", "SettlementTransaction", "SettlementResult"]
