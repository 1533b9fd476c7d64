"""Yield router — распределение капитала по источникам доходности.

- allocate_weights: пропорционально risk-adjusted score, cap + round-robin остатка
- AdaptiveYieldRouter: конкурентное чтение метрик + allocate_weights
"""

from .allocator import YieldRouterConfig, allocate_weights, score_source, weighted_apr_bps
from .router import AdaptiveYieldRouter, YieldSource

__all__ = [
    "YieldRouterConfig",
    "allocate_weights",
    "score_source",
    "weighted_apr_bps",
    "AdaptiveYieldRouter",
    "YieldSource",
]
