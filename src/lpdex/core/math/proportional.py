"""
Proportional Math — целочисленная пропорциональная математика пула

Модуль содержит чистые функции расчёта депозитов и выводов ликвидности.
Округление везде одно и то же: floor (целочисленное деление вниз),
через единственный примитив mul_div_floor.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Никаких float: все входы и выходы — int
2. Округление всегда в пользу пула (floor для выплат и выпуска claim)
3. Деление на ноль невозможно: нулевой знаменатель → ValueError
4. Функции детерминированы и не имеют побочных эффектов

ФОРМУЛЫ:
    token_required = floor(base_amount * token_reserve / base_reserve)
    lp_minted      = floor(base_amount * claim_supply  / base_reserve)

    base_out  = floor(lp_amount * base_reserve  / claim_supply)
    token_out = floor(lp_amount * token_reserve / claim_supply)
"""

from typing import NamedTuple

from lpdex.core.domain.units import Amount, validate_amount


# =============================================================================
# TYPES
# =============================================================================


class DepositQuote(NamedTuple):
    """Результат расчёта депозита ликвидности."""

    base_amount: Amount
    token_required: Amount
    lp_minted: Amount


class WithdrawalQuote(NamedTuple):
    """Результат расчёта вывода ликвидности."""

    lp_amount: Amount
    base_out: Amount
    token_out: Amount


# =============================================================================
# ПРИМИТИВЫ
# =============================================================================


def mul_div_floor(x: Amount, numerator: Amount, denominator: Amount) -> Amount:
    """
    floor(x * numerator / denominator) в точной целочисленной арифметике.

    Python int не переполняется, поэтому промежуточное произведение
    вычисляется точно (в отличие от uint256 в EVM).

    Args:
        x: Масштабируемое количество
        numerator: Числитель пропорции
        denominator: Знаменатель пропорции (> 0)

    Returns:
        Целая часть пропорции

    Raises:
        ValueError: Если denominator == 0 или аргументы отрицательные

    Examples:
        >>> mul_div_floor(1, 1000, 2)
        500
        >>> mul_div_floor(1, 1000, 3)
        333
    """
    validate_amount("x", x)
    validate_amount("numerator", numerator)
    validate_amount("denominator", denominator)
    if denominator == 0:
        raise ValueError("denominator must be positive")
    return (x * numerator) // denominator


# =============================================================================
# DEPOSIT / WITHDRAWAL
# =============================================================================


def quote_deposit(
    base_amount: Amount,
    base_reserve: Amount,
    token_reserve: Amount,
    claim_supply: Amount,
) -> DepositQuote:
    """
    Расчёт депозита в инициализированный пул.

    Депозит сохраняет соотношение резервов: token_required берётся
    в той же пропорции, что и base_amount к base_reserve.

    Args:
        base_amount: Вносимое количество base asset
        base_reserve: Текущий base резерв (> 0)
        token_reserve: Текущий token резерв
        claim_supply: Текущий выпуск claim-токенов

    Returns:
        DepositQuote(base_amount, token_required, lp_minted)

    Raises:
        ValueError: Если base_reserve == 0 (пул не инициализирован)
    """
    if base_reserve == 0:
        raise ValueError("cannot quote a deposit into an empty pool")

    token_required = mul_div_floor(base_amount, token_reserve, base_reserve)
    lp_minted = mul_div_floor(base_amount, claim_supply, base_reserve)

    return DepositQuote(
        base_amount=base_amount,
        token_required=token_required,
        lp_minted=lp_minted,
    )


def quote_withdrawal(
    lp_amount: Amount,
    base_reserve: Amount,
    token_reserve: Amount,
    claim_supply: Amount,
) -> WithdrawalQuote:
    """
    Расчёт вывода ликвидности по количеству сжигаемых claim-токенов.

    Raises:
        ValueError: Если claim_supply == 0 или lp_amount > claim_supply
    """
    if claim_supply == 0:
        raise ValueError("cannot quote a withdrawal from an empty pool")
    if lp_amount > claim_supply:
        raise ValueError(
            f"lp_amount {lp_amount} exceeds claim supply {claim_supply}"
        )

    return WithdrawalQuote(
        lp_amount=lp_amount,
        base_out=mul_div_floor(lp_amount, base_reserve, claim_supply),
        token_out=mul_div_floor(lp_amount, token_reserve, claim_supply),
    )
