"""
PriceSource — Интерфейс источника цен и маршрутизатор по виду оракула

Единая возможность: async get_price(feed) -> OraclePrice.
Транспорт (RPC, чтение аккаунтов) — забота внешнего коллаборатора,
который передаётся источникам как AccountFetcher.
"""

import logging
from typing import Awaitable, Callable, Mapping, Optional, Protocol

from src.core.domain.oracle_price import OracleFeed, OracleKind, OraclePrice
from src.core.errors import ErrorKind, VaultEngineError


logger = logging.getLogger(__name__)


# Чтение сырых данных аккаунта по адресу; None, если аккаунт не найден
AccountFetcher = Callable[[str], Awaitable[Optional[bytes]]]


class PriceSource(Protocol):
    """Источник показаний оракула"""

    async def get_price(self, feed: OracleFeed) -> OraclePrice: ...


class OraclePriceRouter:
    """
    Диспетчеризация get_price по feed.kind.

    Источник для вида оракула не зарегистрирован → OracleAdapterUnavailable.
    """

    def __init__(self, sources: Mapping[OracleKind, PriceSource]):
        self._sources = dict(sources)

    async def get_price(self, feed: OracleFeed) -> OraclePrice:
        source = self._sources.get(feed.kind)
        if source is None:
            raise VaultEngineError(
                ErrorKind.ORACLE_ADAPTER_UNAVAILABLE,
                "No price source registered for oracle kind",
                {"kind": feed.kind.value, "feed": feed.address},
            )
        logger.debug("Routing price read for %s feed %s", feed.kind.value, feed.address)
        return await source.get_price(feed)
