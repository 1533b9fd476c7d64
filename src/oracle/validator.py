"""
OracleValidator — Проверка свежести и доверия к показанию оракула

Чистый гейт валидации, выполняется на каждом чтении цены:
1. Свежесть: age = now - publish_time <= max_age_sec
2. Торговый статус (если требуется)
3. Ненулевая цена
4. confidence / |price| в bps (округление ВВЕРХ) <= max_confidence_bps

Отрицательный age (publish_time в будущем) принимается без ошибки.
"""

from dataclasses import dataclass

from src.core.domain.oracle_price import OraclePrice, OraclePriceStatus
from src.core.errors import ErrorKind, VaultEngineError
from src.core.math.fixed_point import (
    BPS_DENOMINATOR,
    RoundingMode,
    abs_int,
    clamp_bps,
    mul_div,
)


@dataclass(frozen=True)
class OracleValidationPolicy:
    """Политика валидации показаний"""

    max_age_sec: int = 60
    max_confidence_bps: int = 100
    require_trading_status: bool = False

    def __post_init__(self) -> None:
        if self.max_age_sec < 0:
            raise VaultEngineError(
                ErrorKind.INVALID_ARGUMENT,
                "max_age_sec must be >= 0",
                {"max_age_sec": self.max_age_sec},
            )
        # [0, 10000], иначе InvalidArgument
        clamp_bps(self.max_confidence_bps)


def confidence_bps(price: OraclePrice) -> int:
    """
    Ширина confidence interval относительно |price| в bps.

    Округление вверх: пограничные значения отклоняются.

    Raises:
        VaultEngineError(OracleConfidenceTooWide): Если price == 0
    """
    abs_price = abs_int(price.price)
    if abs_price == 0:
        raise VaultEngineError(
            ErrorKind.ORACLE_CONFIDENCE_TOO_WIDE,
            "Oracle price is zero",
            {"feed": price.feed},
        )
    return mul_div(price.confidence, BPS_DENOMINATOR, abs_price, RoundingMode.UP)


def validate_oracle_price(
    price: OraclePrice,
    now_sec: int,
    max_age_sec: int,
    max_confidence_bps: int,
    require_trading: bool = False,
) -> None:
    """
    Валидация показания оракула.

    Args:
        price: Показание
        now_sec: Текущее время (unix, секунды)
        max_age_sec: Максимальный допустимый возраст
        max_confidence_bps: Максимальная ширина confidence (bps)
        require_trading: Требовать статус TRADING

    Raises:
        VaultEngineError(OraclePriceStale): age > max_age_sec
        VaultEngineError(OracleConfidenceTooWide): статус не TRADING
            (при require_trading), нулевая цена или слишком широкий confidence
    """
    age = now_sec - price.publish_time
    if age > max_age_sec:
        raise VaultEngineError(
            ErrorKind.ORACLE_PRICE_STALE,
            "Oracle price is stale",
            {"age_sec": age, "max_age_sec": max_age_sec, "feed": price.feed},
        )

    # Статус отдаётся под кодом OracleConfidenceTooWide (совместимость кодов)
    if require_trading and price.status != OraclePriceStatus.TRADING:
        raise VaultEngineError(
            ErrorKind.ORACLE_CONFIDENCE_TOO_WIDE,
            "Oracle price is not in TRADING status",
            {"status": price.status.value, "feed": price.feed},
        )

    conf_bps = confidence_bps(price)
    if conf_bps > max_confidence_bps:
        raise VaultEngineError(
            ErrorKind.ORACLE_CONFIDENCE_TOO_WIDE,
            "Oracle confidence interval too wide",
            {"confidence_bps": conf_bps, "max_confidence_bps": max_confidence_bps},
        )


class OracleValidator:
    """Валидатор с зафиксированной политикой"""

    def __init__(self, policy: OracleValidationPolicy | None = None):
        self.policy = policy or OracleValidationPolicy()

    def validate(self, price: OraclePrice, now_sec: int) -> None:
        validate_oracle_price(
            price,
            now_sec=now_sec,
            max_age_sec=self.policy.max_age_sec,
            max_confidence_bps=self.policy.max_confidence_bps,
            require_trading=self.policy.require_trading_status,
        )
