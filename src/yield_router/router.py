"""
AdaptiveYieldRouter — Оптимальный маршрут капитала по источникам доходности

Метрики всех источников читаются конкурентно (asyncio.gather); порядок
результатов совпадает с порядком конфигурации, от которого зависят веса.
Ошибка любого источника завершает весь расчёт, retry нет.
"""

import asyncio
import logging
from typing import Protocol, Sequence

from src.core.domain.yield_source import YieldAllocation, YieldSourceMetrics
from src.core.errors import ErrorKind, VaultEngineError

from .allocator import YieldRouterConfig, allocate_weights


logger = logging.getLogger(__name__)


class YieldSource(Protocol):
    """Источник доходности с живыми метриками"""

    @property
    def id(self) -> str: ...

    async def get_metrics(self, asset_id: str) -> YieldSourceMetrics: ...


class AdaptiveYieldRouter:
    """Маршрутизатор доходности с фиксированной конфигурацией"""

    def __init__(self, sources: Sequence[YieldSource], config: YieldRouterConfig | None = None):
        """
        Args:
            sources: источники в порядке приоритета (порядок влияет на tie-break)
            config: параметры взвешивания (опционально, используется default)

        Raises:
            VaultEngineError(InvalidArgument): Пустой список источников
        """
        if not sources:
            raise VaultEngineError(
                ErrorKind.INVALID_ARGUMENT, "Yield router requires at least one source"
            )
        self.sources = tuple(sources)
        self.config = config or YieldRouterConfig()

    async def fetch_metrics(self, asset_id: str) -> list[YieldSourceMetrics]:
        metrics = await asyncio.gather(*(s.get_metrics(asset_id) for s in self.sources))
        return list(metrics)

    async def get_optimal_route(self, asset_id: str) -> list[YieldAllocation]:
        """
        Распределение 10000 bps по источникам для актива.

        Raises:
            VaultEngineError(InvariantViolation): Нет подходящих источников
        """
        metrics = await self.fetch_metrics(asset_id)
        logger.debug(
            "Fetched yield metrics for %s: %s",
            asset_id,
            [(m.source_id, m.apr_bps) for m in metrics],
        )
        return allocate_weights(metrics, self.config)
