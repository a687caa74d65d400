"""
Тесты для Proportional Math — целочисленная математика пула

Проверяемые инварианты:
1. Только int: float и bool отвергаются
2. Округление floor везде
3. Нулевой знаменатель → ValueError
4. Депозит и вывод сохраняют соотношение резервов
"""

import pytest

from lpdex.core.math import (
    DepositQuote,
    WithdrawalQuote,
    mul_div_floor,
    quote_deposit,
    quote_withdrawal,
)


# =============================================================================
# ТЕСТЫ: mul_div_floor
# =============================================================================


class TestMulDivFloor:
    """Тесты mul_div_floor: точность и округление."""

    def test_exact_division(self):
        assert mul_div_floor(1, 1000, 2) == 500
        assert mul_div_floor(3, 10, 5) == 6

    def test_floor_rounding(self):
        assert mul_div_floor(1, 1000, 3) == 333
        assert mul_div_floor(2, 1000, 3) == 666

    def test_large_values_no_overflow(self):
        """Промежуточное произведение больше uint256 считается точно."""
        big = 2**200
        assert mul_div_floor(big, big, big) == big

    def test_zero_denominator(self):
        with pytest.raises(ValueError):
            mul_div_floor(1, 1, 0)

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            mul_div_floor(-1, 1, 1)

    def test_float_rejected(self):
        with pytest.raises(TypeError):
            mul_div_floor(1.0, 1, 1)

    def test_bool_rejected(self):
        with pytest.raises(TypeError):
            mul_div_floor(True, 1, 1)


# =============================================================================
# ТЕСТЫ: quote_deposit
# =============================================================================


class TestQuoteDeposit:

    def test_doubling_deposit(self):
        quote = quote_deposit(base_amount=1, base_reserve=1, token_reserve=1000, claim_supply=1)
        assert quote == DepositQuote(base_amount=1, token_required=1000, lp_minted=1)

    def test_partial_deposit_floors(self):
        quote = quote_deposit(base_amount=1, base_reserve=3, token_reserve=1000, claim_supply=3)
        assert quote.token_required == 333
        assert quote.lp_minted == 1

    def test_dust_deposit_requires_no_token(self):
        """Если token_reserve < base_reserve, малый депозит требует 0 token."""
        quote = quote_deposit(base_amount=1, base_reserve=1000, token_reserve=1, claim_supply=1000)
        assert quote.token_required == 0
        assert quote.lp_minted == 1

    def test_empty_pool_rejected(self):
        with pytest.raises(ValueError):
            quote_deposit(base_amount=1, base_reserve=0, token_reserve=0, claim_supply=0)

    def test_ratio_preserved(self):
        base_reserve, token_reserve = 7 * 10**18, 3_500 * 10**18
        quote = quote_deposit(10**18, base_reserve, token_reserve, base_reserve)
        new_base = base_reserve + quote.base_amount
        new_token = token_reserve + quote.token_required
        assert new_token * base_reserve == token_reserve * new_base


# =============================================================================
# ТЕСТЫ: quote_withdrawal
# =============================================================================


class TestQuoteWithdrawal:

    def test_half_withdrawal(self):
        quote = quote_withdrawal(lp_amount=1, base_reserve=2, token_reserve=1000, claim_supply=2)
        assert quote == WithdrawalQuote(lp_amount=1, base_out=1, token_out=500)

    def test_full_withdrawal_returns_everything(self):
        quote = quote_withdrawal(lp_amount=4, base_reserve=4, token_reserve=1333, claim_supply=4)
        assert quote.base_out == 4
        assert quote.token_out == 1333

    def test_floor_rounding(self):
        quote = quote_withdrawal(lp_amount=1, base_reserve=4, token_reserve=1333, claim_supply=4)
        assert quote.token_out == 333

    def test_exceeding_supply_rejected(self):
        with pytest.raises(ValueError):
            quote_withdrawal(lp_amount=3, base_reserve=2, token_reserve=1000, claim_supply=2)

    def test_empty_pool_rejected(self):
        with pytest.raises(ValueError):
            quote_withdrawal(lp_amount=1, base_reserve=0, token_reserve=0, claim_supply=0)

    def test_deposit_then_withdraw_never_profits(self):
        """Депозит и немедленный вывод не дают депозитору больше внесённого."""
        base_reserve, token_reserve, supply = 3, 1000, 3
        dep = quote_deposit(1, base_reserve, token_reserve, supply)
        wd = quote_withdrawal(
            dep.lp_minted,
            base_reserve + dep.base_amount,
            token_reserve + dep.token_required,
            supply + dep.lp_minted,
        )
        assert wd.base_out <= dep.base_amount
        assert wd.token_out <= dep.token_required
