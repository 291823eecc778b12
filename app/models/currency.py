"""
WorkforceOne Pricing - Currency Model
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class CurrencyInfo:
    """A display currency and its exchange rate from USD."""
    code: str
    symbol: str
    name: str
    exchange_rate: Decimal  # units of this currency per 1 USD
    minor_unit_digits: int = 2
