"""Swaps — котировки обмена по ценам оракула.

- OracleAdapter: валидированные USD-цены и кросс-курс по активам
- compute_swap_quote: spread → fee → slippage, всё с округлением вниз
- SwapQuoter: асинхронная котировка поверх OracleAdapter
"""

from .oracle_adapter import OracleAdapter, OracleAdapterConfig, wall_clock_sec
from .quote import check_quote_executable, compute_swap_quote, convert_at_cross_rate
from .quoter import SwapQuoter

__all__ = [
    "OracleAdapter",
    "OracleAdapterConfig",
    "wall_clock_sec",
    "check_quote_executable",
    "compute_swap_quote",
    "convert_at_cross_rate",
    "SwapQuoter",
]
