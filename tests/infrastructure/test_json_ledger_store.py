"""Tests for the JsonLedgerStore adapter."""

from decimal import Decimal
import json
from unittest.mock import MagicMock

import pytest

from moneyflow.application.use_cases.calculate_settlement import (
    SettlementEngine,
)
from moneyflow.domain.exceptions import InvalidSettlementStateError
from moneyflow.domain.models import FundingSource
from moneyflow.infrastructure.json_ledger_store import JsonLedgerStore

SNAPSHOT = {
    "ledgers": [
        {
            "id": "book-1",
            "name": "Couple living",
            "members": [
                {"id": "alice", "name": "Alice"},
                {"id": "bob", "name": "Bob"},
            ],
            "expenses": [
                {
                    "id": "e-1",
                    "amount": "10000.00",
                    "ownerId": "alice",
                    "fundingSource": "SHARED_POOL",
                },
                {
                    "id": "e-2",
                    "amount": 19.99,
                    "ownerId": "bob",
                    "paidBy": "alice",
                    "fundingSource": "SHARED_POOL",
                    "participants": [
                        {"memberId": "bob", "shareRatio": "1.5"},
                        {"memberId": "alice"},
                    ],
                },
                {"id": "e-3", "amount": "7", "ownerId": "bob"},
            ],
        }
    ]
}


@pytest.fixture()
def snapshot_path(tmp_path):
    path = tmp_path / "ledgers.json"
    path.write_text(json.dumps(SNAPSHOT), encoding="utf-8")
    return path


def test_fetch_ledger_reads_members(snapshot_path) -> None:
    """Members keep the order of the snapshot."""
    store = JsonLedgerStore(snapshot_path, logger=MagicMock())

    ledger = store.fetch_ledger("book-1")

    assert ledger.name == "Couple living"
    assert [member.member_id for member in ledger.members] == ["alice", "bob"]
    assert store.fetch_ledger("book-2") is None


def test_fetch_expenses_parses_amounts_as_decimals(snapshot_path) -> None:
    """Amounts never go through binary floats."""
    store = JsonLedgerStore(snapshot_path, logger=MagicMock())

    first, second, third = store.fetch_expenses("book-1")

    assert first.amount == Decimal("10000.00")
    assert first.is_shared is True
    assert second.amount == Decimal("19.99")
    assert second.payer_id == "alice"
    assert [(p.member_id, p.share_ratio) for p in second.participants] == [
        ("bob", Decimal("1.5")),
        ("alice", Decimal("1")),
    ]
    assert third.funding_source is FundingSource.PERSONAL
    assert store.fetch_expenses("book-2") == []


def test_is_member_checks_listed_members(snapshot_path) -> None:
    store = JsonLedgerStore(snapshot_path, logger=MagicMock())

    assert store.is_member("book-1", "bob") is True
    assert store.is_member("book-1", "carol") is False
    assert store.is_member("book-2", "bob") is False


def test_missing_snapshot_raises(tmp_path) -> None:
    """A missing snapshot file is a configuration error."""
    with pytest.raises(RuntimeError, match="not found"):
        JsonLedgerStore(tmp_path / "missing.json", logger=MagicMock())


def test_invalid_json_raises(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(RuntimeError, match="not valid JSON"):
        JsonLedgerStore(path, logger=MagicMock())


def _write_single_expense(tmp_path, expense_json: str):
    path = tmp_path / "ledgers.json"
    path.write_text(
        '{"ledgers": [{"id": "book-1", "name": "Trip", "members": ['
        '{"id": "alice", "name": "Alice"}, {"id": "bob", "name": "Bob"}],'
        f' "expenses": [{expense_json}]}}]}}',
        encoding="utf-8",
    )
    return JsonLedgerStore(path, logger=MagicMock())


def test_null_share_ratio_defaults_to_one(tmp_path) -> None:
    """A null ratio is read the same way the SQL store reads NULL."""
    store = _write_single_expense(
        tmp_path,
        '{"id": "e", "amount": "10.00", "ownerId": "alice",'
        ' "fundingSource": "SHARED_POOL", "participants": ['
        '{"memberId": "alice", "shareRatio": null},'
        ' {"memberId": "bob", "shareRatio": null}]}',
    )
    engine = SettlementEngine(
        store,
        logger=MagicMock(),
        usage_logger=MagicMock(),
    )

    (expense,) = store.fetch_expenses("book-1")
    result = engine.calculate("book-1", "alice")

    assert [p.share_ratio for p in expense.participants] == [
        Decimal("1"),
        Decimal("1"),
    ]
    assert [m.should_pay_amount for m in result.members] == [
        Decimal("5.00"),
        Decimal("5.00"),
    ]
    assert len(result.transactions) == 1
    assert result.transactions[0].amount == Decimal("5.00")


def test_nan_amount_surfaces_as_invalid_state(tmp_path) -> None:
    store = _write_single_expense(
        tmp_path,
        '{"id": "e", "amount": NaN, "ownerId": "alice",'
        ' "fundingSource": "SHARED_POOL"}',
    )
    engine = SettlementEngine(
        store,
        logger=MagicMock(),
        usage_logger=MagicMock(),
    )

    with pytest.raises(InvalidSettlementStateError) as exc_info:
        engine.calculate("book-1", "alice")

    assert exc_info.value.code == "S500"


def test_malformed_amount_surfaces_as_invalid_state(tmp_path) -> None:
    store = _write_single_expense(
        tmp_path,
        '{"id": "e", "amount": "ten", "ownerId": "alice"}',
    )

    with pytest.raises(InvalidSettlementStateError):
        store.fetch_expenses("book-1")
