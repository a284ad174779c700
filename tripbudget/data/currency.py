"""Approximate currency multipliers relative to USD."""

from __future__ import annotations

DEFAULT_CURRENCY = "USD"

CURRENCY_MULTIPLIERS = {
    "USD": 1.0, "EUR": 0.92, "GBP": 0.79, "INR": 83.0, "JPY": 149.0, "AUD": 1.55,
    "CAD": 1.37, "SGD": 1.35, "THB": 35.0, "MYR": 4.7, "KRW": 1330.0,
    "BRL": 5.0, "ZAR": 18.0, "AED": 3.67, "SAR": 3.75, "CHF": 0.88,
    "NZD": 1.67, "SEK": 10.5, "NOK": 10.8, "DKK": 6.9, "MXN": 17.0,
    "PHP": 56.0, "VND": 24500.0, "IDR": 15600.0, "TWD": 31.5, "HKD": 7.8,
    "CNY": 7.2, "RUB": 92.0, "TRY": 30.0, "PLN": 4.0, "CZK": 23.0,
    "HUF": 360.0, "ILS": 3.7, "EGP": 31.0, "PKR": 280.0, "LKR": 320.0,
    "BDT": 110.0, "NPR": 133.0, "MMK": 2100.0, "KHR": 4100.0, "LAK": 20500.0,
}


def currency_multiplier(currency: str | None) -> float:
    """Unknown or empty codes price at parity with USD."""
    code = str(currency or "").strip().upper()
    return CURRENCY_MULTIPLIERS.get(code, 1.0)
