"""
SwapQuote — Модели кросс-курса и котировки обмена

Immutable Pydantic модели:
- CrossRate: курс to/from в fixed-point (истинное значение = scaled_ratio * 10^exponent)
- OracleSnapshot: атрибуция оракула для аудита и replay
- SwapQuote: исполнимая котировка

Инвариант SwapQuote при создании: min_out_amount <= out_amount.
"""

from pydantic import BaseModel, Field, StrictInt, model_validator

from .oracle_price import OracleKind, OraclePrice


# =============================================================================
# CROSS RATE
# =============================================================================


class CrossRate(BaseModel):
    """
    Кросс-курс, полученный делением двух USD-котировок.

    source_price — показание to-актива (используется как снапшот оракула
    в итоговой котировке).
    """

    scaled_ratio: StrictInt = Field(..., ge=0, description="Масштабированное отношение")
    exponent: StrictInt = Field(..., description="Десятичная экспонента отношения")
    source_price: OraclePrice = Field(..., description="Показание для атрибуции")

    model_config = {"frozen": True}


# =============================================================================
# SWAP QUOTE
# =============================================================================


class OracleSnapshot(BaseModel):
    """Снапшот оракула, встроенный в котировку"""

    kind: OracleKind = Field(..., description="Вид оракула")
    feed: str = Field(..., min_length=1, description="Адрес фида")
    publish_time: StrictInt = Field(..., description="Время публикации (unix, секунды)")
    confidence: StrictInt = Field(..., ge=0, description="Confidence interval")
    exponent: StrictInt = Field(..., description="Экспонента показания")

    model_config = {"frozen": True}

    @classmethod
    def from_price(cls, price: OraclePrice) -> "OracleSnapshot":
        return cls(
            kind=price.kind,
            feed=price.feed,
            publish_time=price.publish_time,
            confidence=price.confidence,
            exponent=price.exponent,
        )


class SwapQuote(BaseModel):
    """
    Котировка обмена from_asset → to_asset.

    Передаётся внешнему исполнителю без изменений.
    Смысл цены: out_amount ≈ in_amount * price * 10^price_exponent (до spread/fee).
    """

    from_asset: str = Field(..., min_length=1, description="Исходный актив")
    to_asset: str = Field(..., min_length=1, description="Целевой актив")

    # Суммы
    in_amount: StrictInt = Field(..., gt=0, description="Входная сумма")
    out_amount: StrictInt = Field(..., ge=0, description="Выход после spread и fee")
    min_out_amount: StrictInt = Field(
        ..., ge=0, description="Минимальный выход с учётом slippage"
    )

    # Курс
    price: StrictInt = Field(..., ge=0, description="Масштабированный кросс-курс")
    price_exponent: StrictInt = Field(..., description="Экспонента кросс-курса")

    # Параметры
    fee_bps: StrictInt = Field(..., ge=0, le=10_000, description="Комиссия протокола (bps)")
    spread_bps: StrictInt = Field(..., ge=0, le=10_000, description="Spread (bps)")
    slippage_bps: StrictInt = Field(..., ge=0, le=10_000, description="Допуск slippage (bps)")

    oracle: OracleSnapshot = Field(..., description="Снапшот оракула")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_min_out(self) -> "SwapQuote":
        """min_out_amount не может превышать out_amount"""
        if self.min_out_amount > self.out_amount:
            raise ValueError(
                f"min_out_amount {self.min_out_amount} exceeds out_amount {self.out_amount}"
            )
        return self
