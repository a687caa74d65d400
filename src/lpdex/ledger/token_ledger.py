"""
TokenLedger — интерфейс внешнего fungible-токена

Пул не реализует токен, а обращается к нему через TokenLedger:
transfer_from (по allowance), transfer, balance_of, increase_allowance.
Тот же интерфейс обслуживает и base asset (нативный актив).

TokenLedger считается потенциально враждебным: во время transfer/transfer_from
он может синхронно вызвать движок повторно.

InMemoryTokenLedger — эталонная реализация для тестов и симуляций.
"""

import logging
from typing import Dict, Protocol, Tuple, runtime_checkable

from lpdex.core.domain.units import Amount, validate_amount

logger = logging.getLogger(__name__)


# =============================================================================
# PROTOCOL
# =============================================================================


@runtime_checkable
class TokenLedger(Protocol):
    """Минимальная поверхность fungible-токена, нужная пулу."""

    @property
    def address(self) -> str: ...

    def transfer_from(self, spender: str, sender: str, recipient: str, amount: Amount) -> bool:
        """Перевод amount от sender к recipient по allowance, выданному spender."""
        ...

    def transfer(self, sender: str, recipient: str, amount: Amount) -> bool:
        """Прямой перевод amount от sender к recipient."""
        ...

    def balance_of(self, address: str) -> Amount: ...

    def increase_allowance(self, owner: str, spender: str, amount: Amount) -> bool: ...


# =============================================================================
# IN-MEMORY IMPLEMENTATION
# =============================================================================


class InMemoryTokenLedger:
    """
    ERC20-подобный ledger в памяти.

    Переводы не бросают исключений при нехватке средств: как и ERC20 с
    возвратом bool, они возвращают False и ничего не меняют.
    """

    def __init__(self, address: str, symbol: str = "TKN", decimals: int = 18):
        self._address = address
        self.symbol = symbol
        self.decimals = decimals
        self._balances: Dict[str, Amount] = {}
        self._allowances: Dict[Tuple[str, str], Amount] = {}
        self.total_supply: Amount = 0

    @property
    def address(self) -> str:
        return self._address

    def mint(self, recipient: str, amount: Amount) -> None:
        """Выпуск токенов (аналог начального выпуска при деплое)."""
        validate_amount("amount", amount)
        self._balances[recipient] = self.balance_of(recipient) + amount
        self.total_supply += amount

    def balance_of(self, address: str) -> Amount:
        return self._balances.get(address, 0)

    def allowance(self, owner: str, spender: str) -> Amount:
        return self._allowances.get((owner, spender), 0)

    def increase_allowance(self, owner: str, spender: str, amount: Amount) -> bool:
        validate_amount("amount", amount)
        self._allowances[(owner, spender)] = self.allowance(owner, spender) + amount
        return True

    def approve(self, owner: str, spender: str, amount: Amount) -> bool:
        validate_amount("amount", amount)
        self._allowances[(owner, spender)] = amount
        return True

    def transfer(self, sender: str, recipient: str, amount: Amount) -> bool:
        validate_amount("amount", amount)
        if self.balance_of(sender) < amount:
            logger.debug(
                f"{self.symbol} transfer rejected: {sender} has {self.balance_of(sender)} < {amount}"
            )
            return False
        self._move(sender, recipient, amount)
        return True

    def transfer_from(self, spender: str, sender: str, recipient: str, amount: Amount) -> bool:
        validate_amount("amount", amount)
        allowed = self.allowance(sender, spender)
        if allowed < amount:
            logger.debug(
                f"{self.symbol} transfer_from rejected: allowance {allowed} < {amount} "
                f"({sender} -> {spender})"
            )
            return False
        if self.balance_of(sender) < amount:
            logger.debug(
                f"{self.symbol} transfer_from rejected: {sender} has {self.balance_of(sender)} < {amount}"
            )
            return False
        self._allowances[(sender, spender)] = allowed - amount
        self._move(sender, recipient, amount)
        return True

    def _move(self, sender: str, recipient: str, amount: Amount) -> None:
        self._balances[sender] = self.balance_of(sender) - amount
        self._balances[recipient] = self.balance_of(recipient) + amount

    def __repr__(self) -> str:
        return f"InMemoryTokenLedger(symbol={self.symbol!r}, address={self._address!r})"
