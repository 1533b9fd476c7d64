"""
VaultService — Preview-операции хранилища поверх внешнего чтения состояния

Состояние читается заново перед каждой операцией, кэша нет.
Ядро не выполняет депозит/вывод: результат preview передаётся внешнему
исполнителю.
"""

import logging
from typing import Optional, Protocol

from src.core.domain.vault_state import VaultAggregateState
from src.core.errors import ErrorKind, VaultEngineError
from src.core.math.fixed_point import AmountInput, to_scaled_amount
from src.yield_router.allocator import weighted_apr_bps
from src.yield_router.router import AdaptiveYieldRouter

from .share_accounting import (
    PreviewDepositResult,
    PreviewWithdrawResult,
    preview_deposit,
    preview_withdraw,
)


logger = logging.getLogger(__name__)


class VaultStateReader(Protocol):
    """Чтение агрегатного состояния хранилища из внешнего ledger"""

    async def read_vault_state(self, vault_id: str) -> VaultAggregateState: ...


class VaultService:
    """Preview депозитов/выводов, TVL и APR хранилища"""

    def __init__(
        self,
        state_reader: VaultStateReader,
        yield_router: Optional[AdaptiveYieldRouter] = None,
    ):
        self.state_reader = state_reader
        self.yield_router = yield_router

    async def get_vault_state(self, vault_id: str) -> VaultAggregateState:
        state = await self.state_reader.read_vault_state(vault_id)
        logger.debug(
            "Vault %s: total_assets=%s total_shares=%s",
            vault_id,
            state.total_assets,
            state.total_shares,
        )
        return state

    async def preview_deposit(self, vault_id: str, amount: AmountInput) -> PreviewDepositResult:
        asset_amount = to_scaled_amount(amount)
        state = await self.get_vault_state(vault_id)
        return preview_deposit(state, asset_amount)

    async def preview_withdraw(self, vault_id: str, shares: AmountInput) -> PreviewWithdrawResult:
        share_amount = to_scaled_amount(shares)
        state = await self.get_vault_state(vault_id)
        return preview_withdraw(state, share_amount)

    async def get_vault_tvl(self, vault_id: str) -> int:
        state = await self.get_vault_state(vault_id)
        return state.total_assets

    async def get_vault_apr(self, vault_id: str) -> int:
        """
        APR хранилища в bps по текущему оптимальному маршруту доходности.

        Raises:
            VaultEngineError(ProgramNotConfigured): Маршрутизатор не задан
                или маршрут не удалось построить
        """
        if self.yield_router is None:
            raise VaultEngineError(
                ErrorKind.PROGRAM_NOT_CONFIGURED,
                "Unable to compute APR; configure yield sources",
            )

        state = await self.get_vault_state(vault_id)
        if state.asset_id is None:
            raise VaultEngineError(
                ErrorKind.PROGRAM_NOT_CONFIGURED,
                "Vault state carries no asset id",
                {"vault_id": vault_id},
            )

        try:
            route = await self.yield_router.get_optimal_route(state.asset_id)
        except VaultEngineError as e:
            raise VaultEngineError(
                ErrorKind.PROGRAM_NOT_CONFIGURED,
                "Unable to compute APR; configure yield sources",
                {"cause": e.kind.value},
            ) from e

        return weighted_apr_bps(route)
