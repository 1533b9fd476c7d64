"""
OraclePrice — Модель показания ценового оракула

Immutable Pydantic модели:
- OracleFeed: идентичность фида (вид оракула + адрес)
- OraclePrice: показание в fixed-point представлении

Истинная цена = price * 10^exponent.
confidence в том же exponent-пространстве, что и price.
"""

from enum import Enum

from pydantic import BaseModel, Field, StrictInt


# =============================================================================
# ENUMS
# =============================================================================


class OracleKind(str, Enum):
    """Вид ценового оракула"""

    PYTH = "pyth"
    SWITCHBOARD = "switchboard"


class OraclePriceStatus(str, Enum):
    """Торговый статус показания"""

    UNKNOWN = "unknown"
    TRADING = "trading"
    HALTED = "halted"
    AUCTION = "auction"
    IGNORED = "ignored"


# =============================================================================
# MODELS
# =============================================================================


class OracleFeed(BaseModel):
    """Идентичность ценового фида"""

    kind: OracleKind = Field(..., description="Вид оракула (pyth/switchboard)")
    address: str = Field(..., min_length=1, description="Адрес аккаунта фида")

    model_config = {"frozen": True}


class OraclePrice(BaseModel):
    """
    Показание оракула.

    Immutable модель (frozen=True). Цены никогда не кэшируются между
    валидациями: каждое чтение создаёт новый экземпляр.
    """

    # Атрибуция
    kind: OracleKind = Field(..., description="Вид оракула, выдавшего показание")
    feed: str = Field(..., min_length=1, description="Адрес фида")

    # Fixed-point значение
    price: StrictInt = Field(..., description="Цена (знаковое целое)")
    confidence: StrictInt = Field(
        ..., ge=0, description="Confidence interval (в exponent-пространстве price)"
    )
    exponent: StrictInt = Field(..., description="Десятичная экспонента")

    # Время публикации
    publish_time: StrictInt = Field(..., description="Время публикации (unix, секунды)")
    publish_slot: StrictInt = Field(..., ge=0, description="Счётчик последовательности")

    status: OraclePriceStatus = Field(
        OraclePriceStatus.UNKNOWN, description="Торговый статус"
    )

    model_config = {"frozen": True}
