"""Domain exceptions for settlement errors.

Codes follow the MoneyFlow error table so that an API layer can map them to
responses without inspecting messages.
"""


class SettlementError(Exception):
    """Base exception for settlement errors."""

    code = "S000"
    status = 500
    default_message = "Settlement failed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class LedgerNotFoundError(SettlementError):
    """Ledger does not exist."""

    code = "AB001"
    status = 404
    default_message = "Account book not found."


class LedgerAccessDeniedError(SettlementError):
    """Requesting member does not belong to the ledger."""

    code = "AB003"
    status = 403
    default_message = "You do not have access to this account book."


class InvalidSettlementStateError(SettlementError):
    """Ledger snapshot violates a data-integrity rule."""

    code = "S500"
    status = 500
    default_message = "Settlement data is inconsistent."


__all__ = [
    "SettlementError",
    "LedgerNotFoundError",
    "LedgerAccessDeniedError",
    "InvalidSettlementStateError",
]
