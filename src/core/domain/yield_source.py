"""
YieldSource — Модели метрик источников доходности и аллокаций

Immutable Pydantic модели:
- YieldSourceMetrics: живые метрики источника для маршрутизации
- YieldAllocation: вес источника в bps

Инвариант набора аллокаций: сумма weight_bps ровно 10000.
"""

from pydantic import BaseModel, Field, StrictInt


class YieldSourceMetrics(BaseModel):
    """
    Метрики источника доходности.

    apr_bps может быть отрицательным: это вход для score, не доля.
    """

    source_id: str = Field(..., min_length=1, description="Идентификатор источника")
    apr_bps: StrictInt = Field(..., description="APR в bps (может быть < 0)")
    liquidity_usd: float = Field(..., ge=0, description="Доступная ликвидность (USD)")
    risk_score: float = Field(..., ge=0, description="Оценка риска (безразмерная)")
    updated_at: int = Field(..., description="Время обновления метрик (unix, секунды)")

    model_config = {"frozen": True}


class YieldAllocation(BaseModel):
    """Вес одного источника в распределении капитала"""

    source_id: str = Field(..., min_length=1, description="Идентификатор источника")
    weight_bps: StrictInt = Field(..., ge=0, le=10_000, description="Вес в bps")
    metrics: YieldSourceMetrics = Field(..., description="Метрики на момент расчёта")

    model_config = {"frozen": True}
