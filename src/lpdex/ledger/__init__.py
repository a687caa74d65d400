"""
Ledger collaborators.

Интерфейс внешнего токена и его реализация в памяти.
"""

from lpdex.ledger.token_ledger import InMemoryTokenLedger, TokenLedger

__all__ = [
    "TokenLedger",
    "InMemoryTokenLedger",
]
