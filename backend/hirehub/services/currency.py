from __future__ import annotations

from typing import Any

EXCHANGE_RATES: dict[str, dict[str, float]] = {
    "USD": {"INR": 83.0, "USD": 1.0},
    "INR": {"USD": 0.012, "INR": 1.0},
}


def get_exchange_rate(from_currency: str, to_currency: str) -> float:
    """Static rate lookup; unknown pairs convert 1:1."""
    return EXCHANGE_RATES.get(from_currency.upper(), {}).get(to_currency.upper(), 1.0)


def convert_currency(amount: float, from_currency: str, to_currency: str) -> dict[str, Any]:
    rate = get_exchange_rate(from_currency, to_currency)
    return {
        "original_amount": amount,
        "converted_amount": round(amount * rate),
        "from_currency": from_currency.upper(),
        "to_currency": to_currency.upper(),
        "exchange_rate": rate,
    }
