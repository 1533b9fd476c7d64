"""
CrossRateEngine — Кросс-курс из двух USD-котировок

scaled_ratio = to_price * 10^18 / from_price   (округление вниз)
exponent     = to_exponent - from_exponent - 18

Истинное отношение = scaled_ratio * 10^exponent.
Масштаб 10^18 фиксирован: отношение остаётся точным целым независимо
от экспонент входов.
"""

from typing import Final

from src.core.domain.oracle_price import OraclePrice
from src.core.domain.swap_quote import CrossRate
from src.core.errors import ErrorKind, VaultEngineError
from src.core.math.fixed_point import RoundingMode, mul_div, pow10


CROSS_RATE_SCALE_DECIMALS: Final[int] = 18
CROSS_RATE_SCALE: Final[int] = pow10(CROSS_RATE_SCALE_DECIMALS)


def compute_cross_rate(from_usd: OraclePrice, to_usd: OraclePrice) -> CrossRate:
    """
    Кросс-курс по двум USD-котировкам.

    Args:
        from_usd: USD-цена исходного актива
        to_usd: USD-цена целевого актива

    Returns:
        CrossRate с source_price = to_usd

    Raises:
        VaultEngineError(OracleConfidenceTooWide): Если from_usd.price == 0
            или любая из цен отрицательна
    """
    if from_usd.price == 0:
        raise VaultEngineError(
            ErrorKind.ORACLE_CONFIDENCE_TOO_WIDE,
            "fromUsd oracle returned zero price",
            {"feed": from_usd.feed},
        )

    # Отношение хранится как неотрицательное целое
    if from_usd.price < 0 or to_usd.price < 0:
        raise VaultEngineError(
            ErrorKind.ORACLE_CONFIDENCE_TOO_WIDE,
            "USD oracle returned negative price",
            {"from_price": from_usd.price, "to_price": to_usd.price},
        )

    exponent = to_usd.exponent - from_usd.exponent - CROSS_RATE_SCALE_DECIMALS
    scaled = mul_div(to_usd.price, CROSS_RATE_SCALE, from_usd.price, RoundingMode.DOWN)

    return CrossRate(scaled_ratio=scaled, exponent=exponent, source_price=to_usd)
