"""Infrastructure adapters: database, ledger stores, settings, logging."""
