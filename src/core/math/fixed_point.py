"""
FixedPoint — Целочисленная арифметика с фиксированной точкой

Модуль обеспечивает детерминированные вычисления над scaled-integer
значениями произвольной точности (Python int):
- mul_div с явным режимом округления (down/up)
- Применение basis points (удержание комиссии / доля комиссии)
- Валидация bps и парсинг сумм

ПОЛИТИКА ОКРУГЛЕНИЯ (жёсткий контракт):
1. Все удержания fee/spread/slippage округляются ВНИЗ (в пользу протокола)
2. Проверки confidence ratio округляются ВВЕРХ (строже к отклонению)
3. Float никогда не участвует в вычислении сумм

Промежуточное произведение a * b не переполняется: int в Python неограничен.
"""

import re
from decimal import Decimal
from enum import Enum
from typing import Final, Union

from src.core.errors import ErrorKind, VaultEngineError


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# 10000 bps = 100%
BPS_DENOMINATOR: Final[int] = 10_000

MIN_BPS: Final[int] = 0
MAX_BPS: Final[int] = 10_000

# Каноническая беззнаковая десятичная строка (только ASCII-цифры)
_CANONICAL_AMOUNT_RE: Final = re.compile(r"[0-9]+")


# =============================================================================
# ТИПЫ
# =============================================================================


class RoundingMode(str, Enum):
    """Режим округления частного"""

    DOWN = "down"
    UP = "up"


AmountInput = Union[int, str]


# =============================================================================
# БАЗОВЫЕ ОПЕРАЦИИ
# =============================================================================


def mul_div(
    a: int,
    b: int,
    denom: int,
    rounding: RoundingMode = RoundingMode.DOWN,
) -> int:
    """
    Вычисление a * b / denom с явным округлением.

    Единственный примитив, через который проходят все отношения и комиссии,
    чтобы политика округления была одна и проверяемая.

    Args:
        a: Множитель
        b: Множитель
        denom: Делитель (не ноль)
        rounding: DOWN → floor(a*b/denom); UP → q + 1, если остаток ≠ 0

    Returns:
        Целочисленное частное

    Raises:
        VaultEngineError(InvalidArgument): Если denom == 0

    Examples:
        >>> mul_div(10, 3, 2)
        15
        >>> mul_div(10, 1, 3, RoundingMode.UP)
        4
    """
    if denom == 0:
        raise VaultEngineError(ErrorKind.INVALID_ARGUMENT, "Division by zero")

    q, r = divmod(a * b, denom)
    if rounding == RoundingMode.DOWN or r == 0:
        return q
    return q + 1


def clamp_bps(bps: int) -> int:
    """
    Проверка, что bps в диапазоне [0, 10000].

    Не обрезает значение: вне диапазона — ошибка.

    Raises:
        VaultEngineError(InvalidArgument): Если bps не целое или вне [0, 10000]
    """
    if isinstance(bps, bool) or not isinstance(bps, int):
        raise VaultEngineError(
            ErrorKind.INVALID_ARGUMENT,
            "bps must be an integer",
            {"bps": repr(bps)},
        )
    if bps < MIN_BPS or bps > MAX_BPS:
        raise VaultEngineError(
            ErrorKind.INVALID_ARGUMENT,
            f"bps must be in [{MIN_BPS}, {MAX_BPS}]",
            {"bps": bps},
        )
    return bps


def apply_bps(
    amount: int,
    bps: int,
    rounding: RoundingMode = RoundingMode.DOWN,
) -> int:
    """
    Удерживаемая сумма после снятия доли bps.

    amount * (10000 - bps) / 10000

    Returns:
        Оставшаяся сумма (НЕ сама комиссия)
    """
    safe_bps = clamp_bps(bps)
    return mul_div(amount, BPS_DENOMINATOR - safe_bps, BPS_DENOMINATOR, rounding)


def bps_of(
    amount: int,
    bps: int,
    rounding: RoundingMode = RoundingMode.DOWN,
) -> int:
    """Доля bps от суммы: amount * bps / 10000"""
    safe_bps = clamp_bps(bps)
    return mul_div(amount, safe_bps, BPS_DENOMINATOR, rounding)


def pow10(exp: int) -> int:
    """
    10 ** exp для неотрицательного целого exp.

    Raises:
        VaultEngineError(InvalidArgument): Если exp отрицательный или не целый
    """
    if isinstance(exp, bool) or not isinstance(exp, int) or exp < 0:
        raise VaultEngineError(
            ErrorKind.INVALID_ARGUMENT,
            "pow10 exponent must be a non-negative integer",
            {"exp": repr(exp)},
        )
    return 10**exp


def abs_int(x: int) -> int:
    return -x if x < 0 else x


# =============================================================================
# ПАРСИНГ СУММ
# =============================================================================


def to_scaled_amount(value: AmountInput) -> int:
    """
    Конверсия входного значения в ScaledAmount (неотрицательный int).

    Допускаются:
    - неотрицательный int
    - каноническая беззнаковая десятичная строка ("0", "1000", "007")

    Отклоняются: float, Decimal, bool, отрицательные числа, знак,
    десятичная точка, экспонента, пробелы, не-ASCII цифры.

    Raises:
        VaultEngineError(InvalidArgument): Если значение не является
            корректной суммой
    """
    if isinstance(value, bool):
        raise VaultEngineError(
            ErrorKind.INVALID_ARGUMENT, "Amount must be a non-negative integer"
        )

    if isinstance(value, int):
        if value < 0:
            raise VaultEngineError(
                ErrorKind.INVALID_ARGUMENT,
                "Amount must be a non-negative integer",
                {"value": value},
            )
        return value

    if isinstance(value, str):
        if not _CANONICAL_AMOUNT_RE.fullmatch(value):
            raise VaultEngineError(
                ErrorKind.INVALID_ARGUMENT,
                "Amount string must be base-10 integer",
                {"value": value},
            )
        return int(value)

    if isinstance(value, (float, Decimal)):
        raise VaultEngineError(
            ErrorKind.INVALID_ARGUMENT,
            "Amount must not be a floating point value",
            {"value": repr(value)},
        )

    raise VaultEngineError(
        ErrorKind.INVALID_ARGUMENT,
        "Unsupported amount type",
        {"type": type(value).__name__},
    )


def to_canonical_string(amount: int) -> str:
    """Каноническая строка суммы (обратная операция к to_scaled_amount)"""
    return str(to_scaled_amount(amount))
