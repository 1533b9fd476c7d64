"""
Domain models and value objects.

Contains oracle readings, cross-rates, swap quotes, vault aggregate state
and yield source metrics/allocations.
"""

from src.core.domain.oracle_price import (
    OracleFeed,
    OracleKind,
    OraclePrice,
    OraclePriceStatus,
)
from src.core.domain.swap_quote import CrossRate, OracleSnapshot, SwapQuote
from src.core.domain.vault_state import VaultAggregateState
from src.core.domain.yield_source import YieldAllocation, YieldSourceMetrics

__all__ = [
    # Oracle
    "OracleFeed",
    "OracleKind",
    "OraclePrice",
    "OraclePriceStatus",
    # Swap
    "CrossRate",
    "OracleSnapshot",
    "SwapQuote",
    # Vault
    "VaultAggregateState",
    # Yield
    "YieldAllocation",
    "YieldSourceMetrics",
]
