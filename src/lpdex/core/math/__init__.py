"""
Core math modules для lpdex

Целочисленные примитивы пропорциональной математики пула.
"""

from lpdex.core.math.proportional import (
    DepositQuote,
    WithdrawalQuote,
    mul_div_floor,
    quote_deposit,
    quote_withdrawal,
)

__all__ = [
    # Types
    "DepositQuote",
    "WithdrawalQuote",
    # Functions
    "mul_div_floor",
    "quote_deposit",
    "quote_withdrawal",
]
