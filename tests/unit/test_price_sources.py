"""
Тесты для источников цен: Pyth, Switchboard, маршрутизатор

Проверяет:
1. Декодирование ценового аккаунта Pyth (раскладка, magic, размер)
2. Маппинг статусов Pyth
3. Switchboard с декодером приложения
4. Диспетчеризацию по виду оракула
"""

import struct
from typing import Optional

import pytest

from src.core.domain import OracleFeed, OracleKind, OraclePriceStatus
from src.core.errors import ErrorKind, VaultEngineError
from src.oracle import (
    PYTH_MAGIC,
    OraclePriceRouter,
    PythPriceSource,
    SwitchboardPriceSource,
    SwitchboardReading,
    decode_pyth_price_account,
    map_pyth_status,
)


# =============================================================================
# FIXTURES
# =============================================================================


def build_pyth_account(
    price: int = 2_000_000_000,
    confidence: int = 1_000_000,
    exponent: int = -8,
    publish_time: int = 1_700_000_000,
    status: int = 1,
    publish_slot: int = 250_000_000,
    magic: int = PYTH_MAGIC,
    size: int = 240,
) -> bytes:
    buf = bytearray(size)
    struct.pack_into("<I", buf, 0, magic)
    struct.pack_into("<i", buf, 20, exponent)
    struct.pack_into("<q", buf, 96, publish_time)
    struct.pack_into("<qQI", buf, 208, price, confidence, status)
    struct.pack_into("<Q", buf, 232, publish_slot)
    return bytes(buf)


class FakeAccountFetcher:
    """In-memory чтение аккаунтов"""

    def __init__(self, accounts: dict[str, bytes]):
        self.accounts = accounts
        self.calls: list[str] = []

    async def __call__(self, address: str) -> Optional[bytes]:
        self.calls.append(address)
        return self.accounts.get(address)


PYTH_FEED = OracleFeed(kind=OracleKind.PYTH, address="sol-usd")
SWITCHBOARD_FEED = OracleFeed(kind=OracleKind.SWITCHBOARD, address="btc-usd")


# =============================================================================
# PYTH DECODING
# =============================================================================


class TestPythDecoding:
    """Тесты для decode_pyth_price_account"""

    def test_decodes_all_fields(self) -> None:
        price = decode_pyth_price_account(build_pyth_account(), "sol-usd")

        assert price.kind == OracleKind.PYTH
        assert price.feed == "sol-usd"
        assert price.price == 2_000_000_000
        assert price.confidence == 1_000_000
        assert price.exponent == -8
        assert price.publish_time == 1_700_000_000
        assert price.publish_slot == 250_000_000
        assert price.status == OraclePriceStatus.TRADING

    def test_negative_price_decoded(self) -> None:
        price = decode_pyth_price_account(build_pyth_account(price=-5), "x")
        assert price.price == -5

    def test_larger_account_accepted(self) -> None:
        price = decode_pyth_price_account(build_pyth_account(size=3312), "x")
        assert price.price == 2_000_000_000

    def test_too_small_rejected(self) -> None:
        with pytest.raises(VaultEngineError) as exc:
            decode_pyth_price_account(build_pyth_account()[:239], "x")
        assert exc.value.kind == ErrorKind.ACCOUNT_PARSE_ERROR
        assert exc.value.details == {"bytes": 239}

    def test_bad_magic_rejected(self) -> None:
        with pytest.raises(VaultEngineError) as exc:
            decode_pyth_price_account(build_pyth_account(magic=0xDEADBEEF), "x")
        assert exc.value.kind == ErrorKind.ACCOUNT_PARSE_ERROR

    @pytest.mark.parametrize(
        "code,status",
        [
            (0, OraclePriceStatus.UNKNOWN),
            (1, OraclePriceStatus.TRADING),
            (2, OraclePriceStatus.HALTED),
            (3, OraclePriceStatus.AUCTION),
            (4, OraclePriceStatus.IGNORED),
            (99, OraclePriceStatus.UNKNOWN),
        ],
    )
    def test_status_mapping(self, code: int, status: OraclePriceStatus) -> None:
        assert map_pyth_status(code) == status


# =============================================================================
# SOURCES
# =============================================================================


class TestPythPriceSource:
    """Тесты для PythPriceSource"""

    @pytest.mark.asyncio
    async def test_reads_and_decodes(self) -> None:
        fetcher = FakeAccountFetcher({"sol-usd": build_pyth_account()})
        source = PythPriceSource(fetcher)

        price = await source.get_price(PYTH_FEED)

        assert price.price == 2_000_000_000
        assert fetcher.calls == ["sol-usd"]

    @pytest.mark.asyncio
    async def test_missing_account(self) -> None:
        source = PythPriceSource(FakeAccountFetcher({}))
        with pytest.raises(VaultEngineError) as exc:
            await source.get_price(PYTH_FEED)
        assert exc.value.kind == ErrorKind.ACCOUNT_PARSE_ERROR

    @pytest.mark.asyncio
    async def test_rejects_foreign_feed_kind(self) -> None:
        source = PythPriceSource(FakeAccountFetcher({}))
        with pytest.raises(VaultEngineError) as exc:
            await source.get_price(SWITCHBOARD_FEED)
        assert exc.value.kind == ErrorKind.INVALID_ARGUMENT


class TestSwitchboardPriceSource:
    """Тесты для SwitchboardPriceSource"""

    @staticmethod
    def decoder(data: bytes, feed_address: str) -> SwitchboardReading:
        (price,) = struct.unpack_from("<q", data, 0)
        return SwitchboardReading(
            price=price,
            confidence=10,
            exponent=-2,
            publish_time=1_700_000_000,
            publish_slot=7,
        )

    @pytest.mark.asyncio
    async def test_uses_application_decoder(self) -> None:
        fetcher = FakeAccountFetcher({"btc-usd": struct.pack("<q", 6_500_000)})
        source = SwitchboardPriceSource(fetcher, self.decoder)

        price = await source.get_price(SWITCHBOARD_FEED)

        assert price.kind == OracleKind.SWITCHBOARD
        assert price.price == 6_500_000
        assert price.exponent == -2
        # Декодер не вернул статус
        assert price.status == OraclePriceStatus.UNKNOWN

    @pytest.mark.asyncio
    async def test_missing_account(self) -> None:
        source = SwitchboardPriceSource(FakeAccountFetcher({}), self.decoder)
        with pytest.raises(VaultEngineError) as exc:
            await source.get_price(SWITCHBOARD_FEED)
        assert exc.value.kind == ErrorKind.ACCOUNT_PARSE_ERROR

    @pytest.mark.asyncio
    async def test_rejects_foreign_feed_kind(self) -> None:
        source = SwitchboardPriceSource(FakeAccountFetcher({}), self.decoder)
        with pytest.raises(VaultEngineError) as exc:
            await source.get_price(PYTH_FEED)
        assert exc.value.kind == ErrorKind.INVALID_ARGUMENT


# =============================================================================
# ROUTER
# =============================================================================


class TestOraclePriceRouter:
    """Тесты для OraclePriceRouter"""

    @pytest.mark.asyncio
    async def test_dispatches_by_kind(self) -> None:
        router = OraclePriceRouter(
            {OracleKind.PYTH: PythPriceSource(FakeAccountFetcher({"sol-usd": build_pyth_account()}))}
        )
        price = await router.get_price(PYTH_FEED)
        assert price.kind == OracleKind.PYTH

    @pytest.mark.asyncio
    async def test_unregistered_kind(self) -> None:
        router = OraclePriceRouter({OracleKind.PYTH: PythPriceSource(FakeAccountFetcher({}))})
        with pytest.raises(VaultEngineError) as exc:
            await router.get_price(SWITCHBOARD_FEED)
        assert exc.value.kind == ErrorKind.ORACLE_ADAPTER_UNAVAILABLE
