"""
OracleAdapter — Валидированные USD-цены и кросс-курс по активам

Связывает внешний PriceSource с чистыми OracleValidator и CrossRateEngine:
- asset_id → USD-фид (из конфигурации)
- чтение цены → валидация политикой → кросс-курс

Два чтения для кросс-курса последовательны и не снапшот-консистентны
друг с другом. Для preview-котировок это допустимо.
"""

import logging
import time
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping

from src.core.domain.oracle_price import OracleFeed, OraclePrice
from src.core.domain.swap_quote import CrossRate
from src.core.errors import ErrorKind, VaultEngineError
from src.oracle.cross_rate import compute_cross_rate
from src.oracle.price_source import PriceSource
from src.oracle.validator import OracleValidationPolicy, validate_oracle_price


logger = logging.getLogger(__name__)


def wall_clock_sec() -> int:
    """Текущее время (unix, целые секунды)"""
    return int(time.time())


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class OracleAdapterConfig:
    """Конфигурация OracleAdapter.

    USD-фиды по активам и политика валидации показаний.
    """

    # asset_id -> USD фид
    usd_feeds_by_asset: Mapping[str, OracleFeed] = field(default_factory=dict)

    max_age_sec: int = 60
    max_confidence_bps: int = 100
    require_trading_status: bool = False

    def __post_init__(self) -> None:
        # Read-only копия: изменения исходного dict не видны конфигурации
        object.__setattr__(
            self, "usd_feeds_by_asset", MappingProxyType(dict(self.usd_feeds_by_asset))
        )
        # Ранняя проверка диапазонов
        self.policy()

    def policy(self) -> OracleValidationPolicy:
        return OracleValidationPolicy(
            max_age_sec=self.max_age_sec,
            max_confidence_bps=self.max_confidence_bps,
            require_trading_status=self.require_trading_status,
        )


# =============================================================================
# ADAPTER
# =============================================================================


class OracleAdapter:
    """Валидированные USD-цены и кросс-курсы поверх PriceSource"""

    def __init__(
        self,
        oracle: PriceSource,
        config: OracleAdapterConfig,
        clock: Callable[[], int] = wall_clock_sec,
    ):
        """
        Args:
            oracle: источник цен (например, OraclePriceRouter)
            config: фиды и политика валидации
            clock: источник текущего времени в секундах
        """
        self.oracle = oracle
        self.config = config
        self._clock = clock

    def feed_for(self, asset_id: str) -> OracleFeed:
        feed = self.config.usd_feeds_by_asset.get(asset_id)
        if feed is None:
            raise VaultEngineError(
                ErrorKind.INVALID_ARGUMENT,
                "Missing USD oracle feed for asset",
                {"asset": asset_id},
            )
        return feed

    async def get_usd_price(self, asset_id: str) -> OraclePrice:
        """
        Чтение и валидация USD-цены актива.

        Каждый вызов читает цену заново, кэша нет.
        """
        feed = self.feed_for(asset_id)
        price = await self.oracle.get_price(feed)

        validate_oracle_price(
            price,
            now_sec=self._clock(),
            max_age_sec=self.config.max_age_sec,
            max_confidence_bps=self.config.max_confidence_bps,
            require_trading=self.config.require_trading_status,
        )
        logger.debug(
            "USD price for %s: %s e%s (feed %s)",
            asset_id,
            price.price,
            price.exponent,
            feed.address,
        )
        return price

    async def get_cross_rate(self, from_asset: str, to_asset: str) -> CrossRate:
        """Кросс-курс to/from по валидированным USD-ценам"""
        from_usd = await self.get_usd_price(from_asset)
        to_usd = await self.get_usd_price(to_asset)
        return compute_cross_rate(from_usd, to_usd)
