"""Factory helpers to select the ledger store backend."""

from moneyflow.application.ports.database import DatabaseEnginePort
from moneyflow.application.ports.ledger_store import LedgerStorePort
from moneyflow.infrastructure.json_ledger_store import JsonLedgerStore
from moneyflow.infrastructure.ledger_store import SqlAlchemyLedgerStore
from moneyflow.infrastructure.logging.logger import get_app_logger
from moneyflow.infrastructure.settings import (
    JSON_BACKEND,
    SQLALCHEMY_BACKEND,
    LedgerSettings,
)


def create_ledger_store(
    db_port: DatabaseEnginePort,
    logger=None,
    settings: LedgerSettings | None = None,
) -> LedgerStorePort:
    """Return a ledger store implementation based on configuration.

    Args:
        db_port: Port providing access to the ledger engine (SQL backend).
        logger: Optional logger compatible with logging.Logger-like API.
        settings: Optional settings override; read from the environment
            when omitted.

    Returns:
        LedgerStorePort: Concrete ledger store.
    """
    resolved_logger = logger or get_app_logger()
    resolved_settings = settings or LedgerSettings.from_env()
    backend = resolved_settings.backend.strip().lower()

    if backend == SQLALCHEMY_BACKEND:
        return SqlAlchemyLedgerStore(db_port)

    if backend == JSON_BACKEND:
        if resolved_settings.snapshot_file is None:
            resolved_logger.warning(
                "Missing ledger snapshot; set LEDGER_SNAPSHOT_FILE to enable "
                "the json backend"
            )
            raise RuntimeError(
                "JSON backend requires a LEDGER_SNAPSHOT_FILE path."
            )
        return JsonLedgerStore(
            resolved_settings.snapshot_file,
            logger=resolved_logger,
        )

    raise ValueError(
        f"Unsupported ledger backend: {backend}. Expected sqlalchemy or json."
    )


__all__ = ["create_ledger_store"]
