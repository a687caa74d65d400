"""
ClaimLedger — учёт балансов claim-токенов

Небольшая композиционная fungible-balance структура: чтение баланса,
mint, burn, transfer и allowance. Движок держит её внутри PoolState,
а не наследует от неё.

Инварианты:
- Балансы всегда неотрицательные
- Нулевые балансы не хранятся (таблица разреженная)
- sum(balances) == total_supply после любой операции
"""

from typing import Dict, Tuple

from lpdex.core.domain.errors import InsufficientAllowance, InsufficientClaim
from lpdex.core.domain.units import Amount, validate_amount


class ClaimLedger:
    """Детерминированная таблица holder -> claim amount."""

    def __init__(self) -> None:
        self._balances: Dict[str, Amount] = {}
        self._allowances: Dict[Tuple[str, str], Amount] = {}
        self._total_supply: Amount = 0

    # -------------------------------------------------------------------------
    # Чтение
    # -------------------------------------------------------------------------

    @property
    def total_supply(self) -> Amount:
        return self._total_supply

    def balance_of(self, holder: str) -> Amount:
        """Баланс holder. Возвращает 0 если holder неизвестен."""
        return self._balances.get(holder, 0)

    def allowance(self, owner: str, spender: str) -> Amount:
        return self._allowances.get((owner, spender), 0)

    def balances(self) -> Dict[str, Amount]:
        """Копия всех ненулевых балансов."""
        return dict(self._balances)

    def allowances(self) -> Dict[Tuple[str, str], Amount]:
        return dict(self._allowances)

    # -------------------------------------------------------------------------
    # Изменение
    # -------------------------------------------------------------------------

    def mint(self, holder: str, amount: Amount) -> None:
        """Выпуск amount claim-токенов на баланс holder."""
        validate_amount("amount", amount)
        self._set_balance(holder, self.balance_of(holder) + amount)
        self._total_supply += amount

    def burn(self, holder: str, amount: Amount) -> None:
        """
        Сжигание amount claim-токенов с баланса holder.

        Raises:
            InsufficientClaim: Если баланс holder меньше amount
        """
        validate_amount("amount", amount)
        balance = self.balance_of(holder)
        if balance < amount:
            raise InsufficientClaim(
                f"Claim balance {balance} of {holder} is below {amount}",
                details={"holder": holder, "balance": balance, "requested": amount},
            )
        self._set_balance(holder, balance - amount)
        self._total_supply -= amount

    def transfer(self, sender: str, recipient: str, amount: Amount) -> None:
        """
        Перевод claim-токенов между владельцами. total_supply не меняется.

        Raises:
            InsufficientClaim: Если баланс sender меньше amount
        """
        validate_amount("amount", amount)
        balance = self.balance_of(sender)
        if balance < amount:
            raise InsufficientClaim(
                f"Claim balance {balance} of {sender} is below {amount}",
                details={"holder": sender, "balance": balance, "requested": amount},
            )
        self._set_balance(sender, balance - amount)
        self._set_balance(recipient, self.balance_of(recipient) + amount)

    def approve(self, owner: str, spender: str, amount: Amount) -> None:
        """Установка allowance (перезаписывает предыдущее значение)."""
        validate_amount("amount", amount)
        if amount == 0:
            self._allowances.pop((owner, spender), None)
        else:
            self._allowances[(owner, spender)] = amount

    def spend_allowance(self, owner: str, spender: str, amount: Amount) -> None:
        """
        Списание allowance при transfer_from.

        Raises:
            InsufficientAllowance: Если allowance меньше amount
        """
        current = self.allowance(owner, spender)
        if current < amount:
            raise InsufficientAllowance(
                f"Allowance {current} of {spender} over {owner} is below {amount}",
                details={"owner": owner, "spender": spender, "allowance": current},
            )
        self.approve(owner, spender, current - amount)

    def load(
        self,
        balances: Dict[str, Amount],
        allowances: Dict[Tuple[str, str], Amount],
    ) -> None:
        """Полная замена содержимого (используется при откате PoolState)."""
        self._balances = {h: a for h, a in balances.items() if a != 0}
        self._allowances = {k: a for k, a in allowances.items() if a != 0}
        self._total_supply = sum(self._balances.values())

    def _set_balance(self, holder: str, amount: Amount) -> None:
        if amount == 0:
            self._balances.pop(holder, None)
        else:
            self._balances[holder] = amount

    def __repr__(self) -> str:
        return f"ClaimLedger(holders={len(self._balances)}, total_supply={self._total_supply})"
