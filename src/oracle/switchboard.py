"""
Switchboard — Источник цен Switchboard

Раскладка аккаунта не поставляется: у Switchboard несколько продуктовых
линеек, поэтому декодер агрегатора передаёт приложение.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from src.core.domain.oracle_price import (
    OracleFeed,
    OracleKind,
    OraclePrice,
    OraclePriceStatus,
)
from src.core.errors import ErrorKind, VaultEngineError

from .price_source import AccountFetcher


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwitchboardReading:
    """Результат декодирования агрегатора"""

    price: int
    confidence: int
    exponent: int
    publish_time: int
    publish_slot: int
    status: Optional[OraclePriceStatus] = None


# (сырые данные аккаунта, адрес фида) -> SwitchboardReading
AggregatorDecoder = Callable[[bytes, str], SwitchboardReading]


class SwitchboardPriceSource:
    """Источник цен Switchboard с декодером от приложения"""

    kind = OracleKind.SWITCHBOARD

    def __init__(self, fetch_account: AccountFetcher, decode_aggregator: AggregatorDecoder):
        self._fetch_account = fetch_account
        self._decode_aggregator = decode_aggregator

    async def get_price(self, feed: OracleFeed) -> OraclePrice:
        if feed.kind != OracleKind.SWITCHBOARD:
            raise VaultEngineError(
                ErrorKind.INVALID_ARGUMENT,
                "SwitchboardPriceSource can only read switchboard feeds",
                {"kind": feed.kind.value},
            )

        data = await self._fetch_account(feed.address)
        if not data:
            raise VaultEngineError(
                ErrorKind.ACCOUNT_PARSE_ERROR,
                "Switchboard feed account not found",
                {"feed": feed.address},
            )

        decoded = self._decode_aggregator(bytes(data), feed.address)
        logger.debug("Switchboard %s: price=%s expo=%s", feed.address, decoded.price, decoded.exponent)

        return OraclePrice(
            kind=OracleKind.SWITCHBOARD,
            feed=feed.address,
            price=decoded.price,
            confidence=decoded.confidence,
            exponent=decoded.exponent,
            publish_time=decoded.publish_time,
            publish_slot=decoded.publish_slot,
            status=decoded.status or OraclePriceStatus.UNKNOWN,
        )
