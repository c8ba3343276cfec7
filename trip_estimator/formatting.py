"""Display helper for plan amounts."""
from __future__ import annotations

from trip_estimator.pricing import round_half_up

_SYMBOLS = {"EUR": "€", "USD": "$", "GBP": "£"}


def format_currency(amount: float, currency: str = "EUR") -> str:
    """Whole-unit amount with thousands separators, e.g. ``€1,250``."""
    code = (currency or "EUR").upper()
    prefix = _SYMBOLS.get(code, f"{code} ")
    value = round_half_up(abs(amount))
    sign = "-" if amount < 0 and value else ""
    return f"{sign}{prefix}{value:,}"
