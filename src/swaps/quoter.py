"""
SwapQuoter — Котировки обмена по ценам оракула

Цепочка: OracleAdapter (чтение + OracleValidator) → CrossRateEngine → quote math.
Котировка не вызывает побочных эффектов: исполнение остаётся за внешним
коллаборатора, который обязан вызвать check_quote_executable.
"""

from src.core.domain.swap_quote import SwapQuote
from src.core.errors import ErrorKind, VaultEngineError
from src.core.math.fixed_point import AmountInput, clamp_bps, to_scaled_amount

from .oracle_adapter import OracleAdapter
from .quote import compute_swap_quote


class SwapQuoter:
    """Котировщик обмена поверх OracleAdapter"""

    def __init__(self, oracle_adapter: OracleAdapter):
        self.oracle_adapter = oracle_adapter

    async def quote(
        self,
        from_asset: str,
        to_asset: str,
        amount_in: AmountInput,
        slippage_bps: int,
        fee_bps: int,
        spread_bps: int,
    ) -> SwapQuote:
        """
        Исполнимая котировка from_asset → to_asset.

        Входные параметры проверяются до чтения оракула.

        Raises:
            VaultEngineError: InvalidArgument для входа, ошибки оракула
                (OraclePriceStale, OracleConfidenceTooWide, ...) как есть
        """
        in_amount = to_scaled_amount(amount_in)
        for bps in (slippage_bps, fee_bps, spread_bps):
            clamp_bps(bps)
        if in_amount == 0:
            raise VaultEngineError(ErrorKind.INVALID_ARGUMENT, "amountIn must be > 0")

        cross = await self.oracle_adapter.get_cross_rate(from_asset, to_asset)

        return compute_swap_quote(
            from_asset=from_asset,
            to_asset=to_asset,
            amount_in=in_amount,
            cross=cross,
            slippage_bps=slippage_bps,
            fee_bps=fee_bps,
            spread_bps=spread_bps,
        )

    async def simulate(
        self,
        from_asset: str,
        to_asset: str,
        amount_in: AmountInput,
        slippage_bps: int,
        fee_bps: int,
        spread_bps: int,
    ) -> SwapQuote:
        """Симуляция обмена: та же котировка, без исполнения"""
        return await self.quote(from_asset, to_asset, amount_in, slippage_bps, fee_bps, spread_bps)
