"""Domain models for shared ledgers and their expenses."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class FundingSource(str, Enum):
    """Where the money of an expense came from."""

    PERSONAL = "PERSONAL"
    SHARED_POOL = "SHARED_POOL"

    @classmethod
    def parse(cls, raw: str | None) -> "FundingSource":
        """Parse a stored value, defaulting to PERSONAL."""
        if not raw:
            return cls.PERSONAL
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return cls.PERSONAL


@dataclass(frozen=True)
class Member:
    """Participant of a shared ledger."""

    member_id: str
    name: str


@dataclass(frozen=True)
class Participant:
    """Member owing a weighted part of an expense."""

    member_id: str
    share_ratio: Decimal = Decimal("1")


@dataclass(frozen=True)
class Expense:
    """Expense recorded in a ledger.

    Attributes:
        expense_id: Identifier of the expense.
        amount: Expense amount with two fractional digits.
        owner_id: Member who recorded the expense.
        paid_by: Member who fronted the money, when distinct from the owner.
        funding_source: Shared pool or personal wallet.
        participants: Members owing this expense; empty means everyone.
    """

    expense_id: str
    amount: Decimal
    owner_id: str
    paid_by: str | None = None
    funding_source: FundingSource = FundingSource.PERSONAL
    participants: tuple[Participant, ...] = field(default_factory=tuple)

    @property
    def payer_id(self) -> str:
        """Return the member credited with paying the expense."""
        return self.paid_by or self.owner_id

    @property
    def is_shared(self) -> bool:
        return self.funding_source is FundingSource.SHARED_POOL


@dataclass(frozen=True)
class Ledger:
    """Shared account book with its members in membership order."""

    ledger_id: str
    name: str
    members: tuple[Member, ...] = field(default_factory=tuple)


__all__ = ["FundingSource", "Member", "Participant", "Expense", "Ledger"]
