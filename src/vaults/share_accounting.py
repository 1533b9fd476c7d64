"""
ShareAccountant — Конверсия shares ↔ assets хранилища

Без состояния: каждая операция получает свежий VaultAggregateState.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. total_assets >= 0, total_shares >= 0
2. total_shares == 0 ⇒ total_assets == 0
3. capacity_assets >= 0 (если задан), utilization_bps ∈ [0, 10000] (если задан)
4. Конверсии округляются ВНИЗ (в пользу хранилища)
5. deposit → withdraw не может вернуть больше, чем было внесено

ФОРМУЛЫ:
    shares_out = assets * total_shares / total_assets     (deposit)
    assets_out = shares * total_assets / total_shares     (withdraw)
    Первый депозит (пустое хранилище): shares_out = assets (1:1)
"""

from dataclasses import dataclass

from src.core.domain.vault_state import VaultAggregateState
from src.core.errors import ErrorKind, VaultEngineError, invariant
from src.core.math.fixed_point import MAX_BPS, MIN_BPS, RoundingMode, mul_div


# =============================================================================
# RESULTS
# =============================================================================


@dataclass(frozen=True)
class PreviewDepositResult:
    """Результат preview депозита"""

    shares_out: int


@dataclass(frozen=True)
class PreviewWithdrawResult:
    """Результат preview вывода"""

    assets_out: int


# =============================================================================
# STATE VALIDATION
# =============================================================================


def validate_vault_state(state: VaultAggregateState) -> None:
    """
    Проверка инвариантов агрегатного состояния.

    Raises:
        VaultEngineError(InvariantViolation): Любое нарушение
    """
    invariant(state.total_assets >= 0, "totalAssets must be non-negative")
    invariant(state.total_shares >= 0, "totalShares must be non-negative")

    if state.total_shares == 0:
        invariant(
            state.total_assets == 0,
            "empty vault must have totalAssets=0",
            {"total_assets": str(state.total_assets)},
        )

    if state.capacity_assets is not None:
        invariant(state.capacity_assets >= 0, "capacityAssets must be non-negative")

    if state.utilization_bps is not None:
        invariant(
            MIN_BPS <= state.utilization_bps <= MAX_BPS,
            "utilizationBps out of range",
            {"utilization_bps": state.utilization_bps},
        )


# =============================================================================
# PREVIEWS
# =============================================================================


def preview_deposit(state: VaultAggregateState, asset_amount: int) -> PreviewDepositResult:
    """
    Сколько shares будет выпущено за депозит asset_amount.

    Raises:
        VaultEngineError(InvariantViolation): Некорректное состояние
        VaultEngineError(InvalidArgument): asset_amount <= 0
        VaultEngineError(VaultCapacityExceeded): Превышение capacity
        VaultEngineError(InvalidShareConversion): Депозит меньше цены одной share
    """
    validate_vault_state(state)

    if asset_amount <= 0:
        raise VaultEngineError(ErrorKind.INVALID_ARGUMENT, "deposit amount must be > 0")

    if state.capacity_assets is not None:
        next_total = state.total_assets + asset_amount
        if next_total > state.capacity_assets:
            raise VaultEngineError(
                ErrorKind.VAULT_CAPACITY_EXCEEDED,
                "deposit exceeds vault capacity",
                {
                    "total_assets": str(state.total_assets),
                    "deposit": str(asset_amount),
                    "capacity_assets": str(state.capacity_assets),
                },
            )

    # Первый депозит: 1 share == 1 единица актива
    if state.total_shares == 0 or state.total_assets == 0:
        return PreviewDepositResult(shares_out=asset_amount)

    shares_out = mul_div(asset_amount, state.total_shares, state.total_assets, RoundingMode.DOWN)
    if shares_out <= 0:
        raise VaultEngineError(
            ErrorKind.INVALID_SHARE_CONVERSION,
            "deposit results in zero shares",
            {"deposit": str(asset_amount)},
        )

    return PreviewDepositResult(shares_out=shares_out)


def preview_withdraw(state: VaultAggregateState, share_amount: int) -> PreviewWithdrawResult:
    """
    Сколько активов будет выдано за погашение share_amount.

    Raises:
        VaultEngineError(InvariantViolation): Некорректное состояние
        VaultEngineError(InvalidArgument): share_amount <= 0
        VaultEngineError(VaultInsolvent): Пустое хранилище или вывод больше активов
        VaultEngineError(InvalidShareConversion): Вывод округляется в ноль
    """
    validate_vault_state(state)

    if share_amount <= 0:
        raise VaultEngineError(ErrorKind.INVALID_ARGUMENT, "withdraw shareAmount must be > 0")

    if state.total_shares == 0 or state.total_assets == 0:
        raise VaultEngineError(ErrorKind.VAULT_INSOLVENT, "vault has no liquidity")

    assets_out = mul_div(share_amount, state.total_assets, state.total_shares, RoundingMode.DOWN)
    if assets_out <= 0:
        raise VaultEngineError(
            ErrorKind.INVALID_SHARE_CONVERSION,
            "withdraw results in zero assets",
            {"shares": str(share_amount)},
        )

    # Недостижимо при shares <= total_shares; оставлено как tripwire
    if assets_out > state.total_assets:
        raise VaultEngineError(
            ErrorKind.VAULT_INSOLVENT,
            "withdraw exceeds vault assets",
            {"assets_out": str(assets_out), "total_assets": str(state.total_assets)},
        )

    return PreviewWithdrawResult(assets_out=assets_out)
