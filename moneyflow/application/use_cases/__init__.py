"""Application use cases package."""

from .calculate_settlement import SettlementEngine, SettlementResult

__all__ = ["SettlementEngine", "SettlementResult"]
