"""SQLAlchemy-backed ledger store reading the MoneyFlow schema."""

from collections import defaultdict

from sqlalchemy import text

from moneyflow.application.ports.database import DatabaseEnginePort
from moneyflow.application.ports.ledger_store import LedgerStorePort
from moneyflow.domain.models import (
    Expense,
    FundingSource,
    Ledger,
    Member,
    Participant,
)
from moneyflow.utils.decimal_utils import coerce_decimal, coerce_share_ratio

SELECT_LEDGER_SQL = text(
    """
    SELECT account_book_id, name
    FROM account_books
    WHERE account_book_id = :ledger_id
    """
)

SELECT_MEMBERS_SQL = text(
    """
    SELECT m.user_id AS member_id, u.nickname AS name
    FROM account_book_members m
    JOIN users u ON u.user_id = m.user_id
    WHERE m.account_book_id = :ledger_id
    ORDER BY m.joined_at, m.user_id
    """
)

SELECT_EXPENSES_SQL = text(
    """
    SELECT expense_id,
           amount,
           user_id AS owner_id,
           paid_by_user_id AS paid_by,
           funding_source
    FROM expenses
    WHERE account_book_id = :ledger_id
    ORDER BY expense_id
    """
)

SELECT_PARTICIPANTS_SQL = text(
    """
    SELECT p.expense_id AS expense_id,
           p.user_id AS member_id,
           p.share_ratio AS share_ratio
    FROM expense_participants p
    JOIN expenses e ON e.expense_id = p.expense_id
    WHERE e.account_book_id = :ledger_id
    ORDER BY p.expense_id, p.user_id
    """
)

SELECT_MEMBERSHIP_SQL = text(
    """
    SELECT 1
    FROM account_book_members
    WHERE account_book_id = :ledger_id AND user_id = :member_id
    LIMIT 1
    """
)


class SqlAlchemyLedgerStore(LedgerStorePort):
    """Read-only ledger store backed by SQLAlchemy."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    def fetch_ledger(self, ledger_id: str) -> Ledger | None:
        params = {"ledger_id": ledger_id}
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            ledger_row = conn.execute(SELECT_LEDGER_SQL, params).first()
            if not ledger_row:
                return None
            member_rows = conn.execute(SELECT_MEMBERS_SQL, params).all()
        return Ledger(
            ledger_id=str(ledger_row.account_book_id),
            name=ledger_row.name,
            members=tuple(
                Member(member_id=str(row.member_id), name=row.name or "")
                for row in member_rows
            ),
        )

    def fetch_expenses(self, ledger_id: str) -> list[Expense]:
        params = {"ledger_id": ledger_id}
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            expense_rows = conn.execute(SELECT_EXPENSES_SQL, params).all()
            participant_rows = conn.execute(
                SELECT_PARTICIPANTS_SQL,
                params,
            ).all()

        participants: dict[str, list[Participant]] = defaultdict(list)
        for row in participant_rows:
            participants[str(row.expense_id)].append(
                Participant(
                    member_id=str(row.member_id),
                    share_ratio=coerce_share_ratio(row.share_ratio),
                )
            )
        return [
            Expense(
                expense_id=str(row.expense_id),
                amount=coerce_decimal(row.amount),
                owner_id=str(row.owner_id),
                paid_by=str(row.paid_by) if row.paid_by is not None else None,
                funding_source=FundingSource.parse(row.funding_source),
                participants=tuple(participants.get(str(row.expense_id), ())),
            )
            for row in expense_rows
        ]

    def is_member(self, ledger_id: str, member_id: str) -> bool:
        params = {"ledger_id": ledger_id, "member_id": member_id}
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            result = conn.execute(SELECT_MEMBERSHIP_SQL, params).first()
        return result is not None


__all__ = ["SqlAlchemyLedgerStore"]
