"""Tests for the SqlAlchemyLedgerStore adapter against SQLite."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, text

from moneyflow.domain.models import FundingSource
from moneyflow.infrastructure.ledger_store import SqlAlchemyLedgerStore

SCHEMA = [
    """
    CREATE TABLE users (
        user_id TEXT PRIMARY KEY,
        nickname TEXT
    )
    """,
    """
    CREATE TABLE account_books (
        account_book_id TEXT PRIMARY KEY,
        name TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE account_book_members (
        account_book_id TEXT,
        user_id TEXT,
        joined_at TEXT,
        PRIMARY KEY (account_book_id, user_id)
    )
    """,
    """
    CREATE TABLE expenses (
        expense_id TEXT PRIMARY KEY,
        account_book_id TEXT,
        user_id TEXT,
        paid_by_user_id TEXT,
        funding_source TEXT,
        amount NUMERIC
    )
    """,
    """
    CREATE TABLE expense_participants (
        expense_id TEXT,
        user_id TEXT,
        share_ratio NUMERIC,
        PRIMARY KEY (expense_id, user_id)
    )
    """,
]

FIXTURES = [
    "INSERT INTO users VALUES ('u-alice', 'Alice'), ('u-bob', 'Bob'), "
    "('u-carol', 'Carol')",
    "INSERT INTO account_books VALUES ('book-1', 'Jeju trip'), "
    "('book-2', 'Other')",
    "INSERT INTO account_book_members VALUES "
    "('book-1', 'u-bob', '2024-01-02'), "
    "('book-1', 'u-alice', '2024-01-01'), "
    "('book-2', 'u-carol', '2024-01-01')",
    "INSERT INTO expenses VALUES "
    "('e-1', 'book-1', 'u-alice', NULL, 'SHARED_POOL', 120), "
    "('e-2', 'book-1', 'u-alice', 'u-bob', 'SHARED_POOL', 45.5), "
    "('e-3', 'book-1', 'u-bob', NULL, 'PERSONAL', 12), "
    "('e-4', 'book-2', 'u-carol', NULL, 'SHARED_POOL', 99)",
    "INSERT INTO expense_participants VALUES "
    "('e-2', 'u-alice', 2), ('e-2', 'u-bob', NULL), ('e-4', 'u-carol', 1)",
]


@pytest.fixture()
def store(tmp_path) -> SqlAlchemyLedgerStore:
    engine = create_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
    with engine.begin() as conn:
        for statement in SCHEMA + FIXTURES:
            conn.execute(text(statement))
    db_port = MagicMock()
    db_port.get_ledger_engine.return_value = engine
    yield SqlAlchemyLedgerStore(db_port)
    engine.dispose()


def test_fetch_ledger_returns_members_in_join_order(store) -> None:
    """Members are ordered by the date they joined the ledger."""
    ledger = store.fetch_ledger("book-1")

    assert ledger is not None
    assert ledger.ledger_id == "book-1"
    assert ledger.name == "Jeju trip"
    assert [(m.member_id, m.name) for m in ledger.members] == [
        ("u-alice", "Alice"),
        ("u-bob", "Bob"),
    ]


def test_fetch_ledger_returns_none_when_missing(store) -> None:
    """Unknown ledgers are reported as None."""
    assert store.fetch_ledger("book-404") is None


def test_fetch_expenses_groups_participants(store) -> None:
    """Expenses carry their participants and funding source."""
    expenses = store.fetch_expenses("book-1")

    assert [expense.expense_id for expense in expenses] == ["e-1", "e-2", "e-3"]
    first, second, third = expenses
    assert first.amount == Decimal("120")
    assert first.funding_source is FundingSource.SHARED_POOL
    assert first.participants == ()
    assert first.payer_id == "u-alice"
    assert second.amount == Decimal("45.5")
    assert second.payer_id == "u-bob"
    assert [(p.member_id, p.share_ratio) for p in second.participants] == [
        ("u-alice", Decimal("2")),
        ("u-bob", Decimal("1")),
    ]
    assert third.funding_source is FundingSource.PERSONAL


def test_is_member_checks_membership(store) -> None:
    """Only listed members belong to a ledger."""
    assert store.is_member("book-1", "u-alice") is True
    assert store.is_member("book-1", "u-carol") is False
    assert store.is_member("book-404", "u-alice") is False
