"""
VaultAggregateState — Агрегатное состояние хранилища

Immutable Pydantic модель снапшота хранилища, прочитанного из внешнего
ledger перед каждой операцией. Ядро не кэширует и не изменяет состояние.

Модель проверяет только типы (строгие int, без float). Бизнес-инварианты
(неотрицательность, пустое хранилище, диапазон utilization) проверяются
в src.vaults.share_accounting.validate_vault_state и дают InvariantViolation.
"""

from typing import Optional

from pydantic import BaseModel, Field, StrictInt


class VaultAggregateState(BaseModel):
    """Снапшот агрегатов хранилища"""

    # Идентификация (опционально, для диагностики)
    vault_id: Optional[str] = Field(None, description="Идентификатор хранилища")
    asset_id: Optional[str] = Field(None, description="Идентификатор базового актива")

    # Агрегаты
    total_assets: StrictInt = Field(..., description="Сумма активов (наименьшие единицы)")
    total_shares: StrictInt = Field(..., description="Сумма выпущенных shares")

    # Ограничения
    capacity_assets: Optional[StrictInt] = Field(
        None, description="Максимальная сумма активов (опционально)"
    )
    utilization_bps: Optional[StrictInt] = Field(
        None, description="Утилизация в bps (опционально)"
    )

    last_updated_ts: Optional[int] = Field(
        None, description="Время последнего обновления (unix, секунды)"
    )

    model_config = {"frozen": True}
