"""MoneyFlow settlement: bill splitting for shared account books."""

__version__ = "0.1.0"
