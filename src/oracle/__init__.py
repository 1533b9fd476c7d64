"""Oracle — источники цен, валидация показаний и кросс-курсы.

- PriceSource: единая возможность get_price(feed)
- Pyth / Switchboard источники и маршрутизатор по виду оракула
- OracleValidator: свежесть, статус, confidence
- CrossRateEngine: кросс-курс по двум USD-котировкам
"""

from .cross_rate import CROSS_RATE_SCALE, CROSS_RATE_SCALE_DECIMALS, compute_cross_rate
from .price_source import AccountFetcher, OraclePriceRouter, PriceSource
from .pyth import PYTH_MAGIC, PythPriceSource, decode_pyth_price_account, map_pyth_status
from .switchboard import AggregatorDecoder, SwitchboardPriceSource, SwitchboardReading
from .validator import (
    OracleValidationPolicy,
    OracleValidator,
    confidence_bps,
    validate_oracle_price,
)

__all__ = [
    "AccountFetcher",
    "PriceSource",
    "OraclePriceRouter",
    "PYTH_MAGIC",
    "PythPriceSource",
    "decode_pyth_price_account",
    "map_pyth_status",
    "AggregatorDecoder",
    "SwitchboardPriceSource",
    "SwitchboardReading",
    "OracleValidationPolicy",
    "OracleValidator",
    "confidence_bps",
    "validate_oracle_price",
    "CROSS_RATE_SCALE",
    "CROSS_RATE_SCALE_DECIMALS",
    "compute_cross_rate",
]
