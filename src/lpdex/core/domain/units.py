"""
Units — Единицы количеств пула

Все количества (резервы, claim-токены, депозиты) — целые числа в минимальных
единицах актива (аналог wei). Дробные значения допускаются только на границе
ввода/вывода через parse_units / format_units.

ЗАПРЕЩЕНО передавать float в математику пула: float теряет точность уже на 1e18.
"""

from decimal import Decimal, InvalidOperation
from typing import Final, Union


# =============================================================================
# ПАРАМЕТРЫ ЕДИНИЦ
# =============================================================================

# Количество знаков после запятой по умолчанию (как у ETH и ERC20 токенов)
DEFAULT_DECIMALS: Final[int] = 18

# Максимальное значение количества (uint256)
MAX_AMOUNT: Final[int] = 2**256 - 1

# Тип количества: целое число минимальных единиц
Amount = int


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_amount(name: str, value: Amount) -> Amount:
    """
    Проверка, что количество — неотрицательное целое в пределах uint256.

    bool отвергается явно: в Python bool является подклассом int.

    Args:
        name: Имя параметра (для сообщения об ошибке)
        value: Проверяемое количество

    Returns:
        value без изменений

    Raises:
        TypeError: Если value не int (или bool)
        ValueError: Если value отрицательное или больше MAX_AMOUNT
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} cannot be negative: {value}")
    if value > MAX_AMOUNT:
        raise ValueError(f"{name} exceeds uint256 range: {value}")
    return value


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def parse_units(value: Union[str, int, Decimal], decimals: int = DEFAULT_DECIMALS) -> Amount:
    """
    Конверсия: человекочитаемое количество → минимальные единицы.

    parse_units("1") == 10**18, parse_units("0.5", 6) == 500_000

    Args:
        value: Количество в целых единицах актива (str/int/Decimal, не float)
        decimals: Количество знаков после запятой

    Returns:
        Количество в минимальных единицах

    Raises:
        TypeError: Если передан float
        ValueError: Если значение не парсится, отрицательное или
            содержит больше знаков, чем decimals
    """
    if isinstance(value, float):
        raise TypeError("parse_units does not accept float, pass a str or Decimal")
    if decimals < 0:
        raise ValueError(f"decimals cannot be negative: {decimals}")

    try:
        quantity = Decimal(value)
    except InvalidOperation:
        raise ValueError(f"Cannot parse amount: {value!r}")

    scaled = quantity.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"Amount {value} has more than {decimals} decimal places")

    return validate_amount("value", int(scaled))


def format_units(amount: Amount, decimals: int = DEFAULT_DECIMALS) -> str:
    """
    Конверсия: минимальные единицы → строка в целых единицах актива.

    Хвостовые нули отбрасываются: format_units(1500 * 10**15) == "1.5"
    """
    validate_amount("amount", amount)
    if decimals < 0:
        raise ValueError(f"decimals cannot be negative: {decimals}")

    whole, frac = divmod(amount, 10**decimals)
    if frac == 0:
        return str(whole)
    frac_str = str(frac).rjust(decimals, "0").rstrip("0")
    return f"{whole}.{frac_str}"
