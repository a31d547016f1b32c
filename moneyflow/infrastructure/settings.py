"""Ledger backend settings read from the environment."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

from moneyflow.infrastructure.logging.logger import get_app_logger

SQLALCHEMY_BACKEND = "sqlalchemy"
JSON_BACKEND = "json"


def resolve_snapshot_path(raw: str) -> Path:
    """Turn a filesystem path or ``file://`` URI into an absolute path."""
    parsed = urlparse(raw)
    if parsed.scheme == "file":
        raw = unquote(parsed.path)
    return Path(raw).expanduser().resolve()


@dataclass(frozen=True)
class LedgerSettings:
    """Which ledger store to build and where its snapshot lives.

    Attributes:
        backend: ``sqlalchemy`` or ``json``.
        snapshot_file: JSON snapshot read by the ``json`` backend.
    """

    backend: str = SQLALCHEMY_BACKEND
    snapshot_file: Optional[Path] = None

    @classmethod
    def from_env(cls, logger=None) -> "LedgerSettings":
        """Read LEDGER_BACKEND and LEDGER_SNAPSHOT_FILE.

        A snapshot path that does not point to a file is still returned so
        the store reports it when opened; it is only logged here.
        """
        logger = logger or get_app_logger()
        backend = os.getenv("LEDGER_BACKEND", SQLALCHEMY_BACKEND)
        raw_snapshot = os.getenv("LEDGER_SNAPSHOT_FILE", "").strip()
        snapshot_file = None
        if raw_snapshot:
            snapshot_file = resolve_snapshot_path(raw_snapshot)
            if not snapshot_file.is_file():
                logger.warning(f"Ledger snapshot not found at {snapshot_file}")
        return cls(
            backend=backend.strip().lower() or SQLALCHEMY_BACKEND,
            snapshot_file=snapshot_file,
        )


__all__ = [
    "JSON_BACKEND",
    "LedgerSettings",
    "SQLALCHEMY_BACKEND",
    "resolve_snapshot_path",
]
