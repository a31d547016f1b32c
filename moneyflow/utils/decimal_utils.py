"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, JSON snapshots or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def coerce_share_ratio(value) -> Decimal:
    """Normalize a participant share ratio; a missing ratio counts as 1."""
    if value is None:
        return Decimal("1")
    return coerce_decimal(value)


def quantize_money(value: Decimal) -> Decimal:
    """Round a monetary amount to cents using half-up rounding."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


__all__ = ["CENT", "coerce_decimal", "coerce_share_ratio", "quantize_money"]
