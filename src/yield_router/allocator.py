"""
YieldAllocator — Распределение капитала по источникам доходности

Алгоритм:
1. Фильтр по liquidity_usd >= min_liquidity_usd
2. score = apr_bps - risk_penalty_bps_per_point * max(0, risk_score)
3. Отбрасываем score <= 0
4. Начальный вес = floor(score * 10000 / total_score); последний источник
   в порядке конфигурации получает весь остаток
5. Cap на источник (если задан), затем clamp в [0, remaining]
6. Остаток после cap раздаётся round-robin в том же порядке до cap
7. Сумма весов ровно 10000, иначе InvariantViolation

Порядок итерации = порядок конфигурации источников (tie-break зависит от порядка).
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from src.core.domain.yield_source import YieldAllocation, YieldSourceMetrics
from src.core.errors import ErrorKind, VaultEngineError
from src.core.math.fixed_point import BPS_DENOMINATOR, clamp_bps


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class YieldRouterConfig:
    """Конфигурация маршрутизации доходности.

    Параметры взвешивания источников.
    """

    # Штраф в bps за единицу risk_score
    risk_penalty_bps_per_point: float = 0.0

    # Минимальная ликвидность источника (USD)
    min_liquidity_usd: float = 0.0

    # Максимальный вес одного источника (bps), None: без ограничения
    max_single_source_bps: Optional[int] = None

    def __post_init__(self) -> None:
        if self.risk_penalty_bps_per_point < 0:
            raise VaultEngineError(
                ErrorKind.INVALID_ARGUMENT, "riskPenaltyBpsPerPoint must be >= 0"
            )
        if self.min_liquidity_usd < 0:
            raise VaultEngineError(ErrorKind.INVALID_ARGUMENT, "minLiquidityUsd must be >= 0")
        if self.max_single_source_bps is not None:
            clamp_bps(self.max_single_source_bps)


# =============================================================================
# SCORING
# =============================================================================


def score_source(metrics: YieldSourceMetrics, config: YieldRouterConfig) -> float:
    """Risk-adjusted score источника в bps"""
    return metrics.apr_bps - config.risk_penalty_bps_per_point * max(0.0, metrics.risk_score)


# =============================================================================
# ALLOCATION
# =============================================================================


def allocate_weights(
    metrics: Sequence[YieldSourceMetrics],
    config: YieldRouterConfig,
) -> list[YieldAllocation]:
    """
    Детерминированное распределение 10000 bps по источникам.

    Args:
        metrics: метрики источников в порядке конфигурации
        config: параметры взвешивания

    Returns:
        Аллокации с суммой weight_bps ровно 10000

    Raises:
        VaultEngineError(InvariantViolation): Нет подходящих источников,
            суммарный score <= 0 или сумма не сошлась (cap слишком мал)
    """
    eligible: list[tuple[YieldSourceMetrics, float]] = []
    for m in metrics:
        if m.liquidity_usd < config.min_liquidity_usd:
            continue
        score = score_source(m, config)
        if score > 0:
            eligible.append((m, score))

    if not eligible:
        raise VaultEngineError(
            ErrorKind.INVARIANT_VIOLATION, "No eligible yield sources for routing"
        )

    total_score = sum(score for _, score in eligible)
    if total_score <= 0:
        raise VaultEngineError(
            ErrorKind.INVARIANT_VIOLATION,
            "Total yield score is non-positive",
            {"total_score": total_score},
        )

    cap = config.max_single_source_bps
    remaining = BPS_DENOMINATOR
    weights: list[int] = []

    for i, (_, score) in enumerate(eligible):
        is_last = i == len(eligible) - 1
        weight = remaining if is_last else math.floor(score * BPS_DENOMINATOR / total_score)

        if cap is not None:
            weight = min(weight, cap)

        weight = max(0, min(weight, remaining))
        remaining -= weight
        weights.append(weight)

    # После cap мог остаться нераспределённый бюджет
    if remaining > 0:
        room_cap = cap if cap is not None else BPS_DENOMINATOR
        for i in range(len(weights)):
            if remaining <= 0:
                break
            room = room_cap - weights[i]
            if room <= 0:
                continue
            add = min(room, remaining)
            weights[i] += add
            remaining -= add

    total = sum(weights)
    if total != BPS_DENOMINATOR:
        raise VaultEngineError(
            ErrorKind.INVARIANT_VIOLATION,
            "Yield allocation did not sum to 10000 bps",
            {"sum": total},
        )

    return [
        YieldAllocation(source_id=m.source_id, weight_bps=w, metrics=m)
        for (m, _), w in zip(eligible, weights)
    ]


def weighted_apr_bps(allocations: Sequence[YieldAllocation]) -> int:
    """
    APR портфеля источников: round(Σ apr_bps * weight_bps / 10000).

    Используется только для отображения, не для расчёта сумм.
    """
    return round(
        sum(a.metrics.apr_bps * a.weight_bps / BPS_DENOMINATOR for a in allocations)
    )
