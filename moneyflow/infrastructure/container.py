"""Composition root for wiring infrastructure adapters."""

from moneyflow.application.ports.database import DatabaseEnginePort
from moneyflow.application.ports.ledger_store import LedgerStorePort
from moneyflow.application.use_cases.calculate_settlement import (
    SettlementEngine,
)
from moneyflow.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from moneyflow.infrastructure.ledger_store_factory import create_ledger_store
from moneyflow.infrastructure.logging.logger import get_app_logger
from moneyflow.infrastructure.settings import LedgerSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_store(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerStorePort:
    """Return the configured ledger store."""
    resolved_db = db_port or build_database_adapter()
    return create_ledger_store(
        resolved_db,
        logger=get_app_logger(),
        settings=LedgerSettings.from_env(),
    )


def build_settlement_engine(
    ledger_store: LedgerStorePort | None = None,
) -> SettlementEngine:
    """Return a settlement engine wired to the configured store."""
    return SettlementEngine(
        ledger_store=ledger_store or build_ledger_store(),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_ledger_store",
    "build_settlement_engine",
]
