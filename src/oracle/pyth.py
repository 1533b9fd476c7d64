"""
Pyth — Декодирование ценового аккаунта Pyth

Раскладка (little-endian):
    0    u32  magic (0xa1b2c3d4)
    20   i32  exponent
    96   i64  publish_time
    208  агрегат:
         +0   i64  price
         +8   u64  confidence
         +16  u32  status
         +24  u64  publish_slot

Минимальный размер аккаунта: 240 байт.
"""

import logging
import struct
from typing import Final

from src.core.domain.oracle_price import (
    OracleFeed,
    OracleKind,
    OraclePrice,
    OraclePriceStatus,
)
from src.core.errors import ErrorKind, VaultEngineError

from .price_source import AccountFetcher


logger = logging.getLogger(__name__)


# =============================================================================
# LAYOUT
# =============================================================================

PYTH_MAGIC: Final[int] = 0xA1B2C3D4
PYTH_MIN_ACCOUNT_SIZE: Final[int] = 240

OFFSET_MAGIC: Final[int] = 0
OFFSET_EXPONENT: Final[int] = 20
OFFSET_TIMESTAMP: Final[int] = 96
OFFSET_AGGREGATE: Final[int] = 208

AGG_PRICE: Final[int] = 0
AGG_CONFIDENCE: Final[int] = 8
AGG_STATUS: Final[int] = 16
AGG_PUBLISH_SLOT: Final[int] = 24

_STATUS_BY_CODE: Final[dict[int, OraclePriceStatus]] = {
    1: OraclePriceStatus.TRADING,
    2: OraclePriceStatus.HALTED,
    3: OraclePriceStatus.AUCTION,
    4: OraclePriceStatus.IGNORED,
}


def map_pyth_status(code: int) -> OraclePriceStatus:
    return _STATUS_BY_CODE.get(code, OraclePriceStatus.UNKNOWN)


def decode_pyth_price_account(data: bytes, feed_address: str) -> OraclePrice:
    """
    Декодирование сырых данных ценового аккаунта Pyth.

    Raises:
        VaultEngineError(AccountParseError): Слишком мало данных или неверный magic
    """
    if len(data) < PYTH_MIN_ACCOUNT_SIZE:
        raise VaultEngineError(
            ErrorKind.ACCOUNT_PARSE_ERROR,
            "Pyth price account data too small",
            {"bytes": len(data)},
        )

    (magic,) = struct.unpack_from("<I", data, OFFSET_MAGIC)
    if magic != PYTH_MAGIC:
        raise VaultEngineError(
            ErrorKind.ACCOUNT_PARSE_ERROR, "Invalid Pyth magic", {"magic": magic}
        )

    (exponent,) = struct.unpack_from("<i", data, OFFSET_EXPONENT)
    (publish_time,) = struct.unpack_from("<q", data, OFFSET_TIMESTAMP)

    price, confidence, status_code = struct.unpack_from(
        "<qQI", data, OFFSET_AGGREGATE + AGG_PRICE
    )
    (publish_slot,) = struct.unpack_from("<Q", data, OFFSET_AGGREGATE + AGG_PUBLISH_SLOT)

    return OraclePrice(
        kind=OracleKind.PYTH,
        feed=feed_address,
        price=price,
        confidence=confidence,
        exponent=exponent,
        publish_time=publish_time,
        publish_slot=publish_slot,
        status=map_pyth_status(status_code),
    )


class PythPriceSource:
    """Источник цен Pyth поверх внешнего чтения аккаунтов"""

    kind = OracleKind.PYTH

    def __init__(self, fetch_account: AccountFetcher):
        self._fetch_account = fetch_account

    async def get_price(self, feed: OracleFeed) -> OraclePrice:
        if feed.kind != OracleKind.PYTH:
            raise VaultEngineError(
                ErrorKind.INVALID_ARGUMENT,
                "PythPriceSource can only read pyth feeds",
                {"kind": feed.kind.value},
            )

        data = await self._fetch_account(feed.address)
        if not data:
            raise VaultEngineError(
                ErrorKind.ACCOUNT_PARSE_ERROR,
                "Pyth price account not found",
                {"feed": feed.address},
            )

        price = decode_pyth_price_account(bytes(data), feed.address)
        logger.debug(
            "Pyth %s: price=%s expo=%s publish_time=%s",
            feed.address,
            price.price,
            price.exponent,
            price.publish_time,
        )
        return price
