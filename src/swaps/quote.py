"""
SwapQuote math — Расчёт исполнимой котировки

Порядок применения (фиксированный):
1. raw_out по кросс-курсу
2. spread (округление вниз)
3. fee от суммы после spread (округление вниз)
4. min_out = after_fee с учётом slippage (округление вниз)

Две ветки для raw_out исключают дробные промежуточные экспоненты:
    exponent >= 0: raw_out = amount_in * ratio * 10^exponent
    exponent <  0: raw_out = floor(amount_in * ratio / 10^(-exponent))
"""

from src.core.domain.swap_quote import CrossRate, OracleSnapshot, SwapQuote
from src.core.errors import ErrorKind, VaultEngineError
from src.core.math.fixed_point import (
    AmountInput,
    RoundingMode,
    apply_bps,
    clamp_bps,
    mul_div,
    pow10,
    to_scaled_amount,
)


def convert_at_cross_rate(amount_in: int, cross: CrossRate) -> int:
    """Сумма в единицах to-актива до spread/fee"""
    if cross.exponent >= 0:
        return amount_in * cross.scaled_ratio * pow10(cross.exponent)
    return mul_div(amount_in * cross.scaled_ratio, 1, pow10(-cross.exponent), RoundingMode.DOWN)


def compute_swap_quote(
    from_asset: str,
    to_asset: str,
    amount_in: AmountInput,
    cross: CrossRate,
    slippage_bps: int,
    fee_bps: int,
    spread_bps: int,
) -> SwapQuote:
    """
    Котировка обмена по готовому кросс-курсу.

    Args:
        from_asset: исходный актив
        to_asset: целевой актив
        amount_in: входная сумма (> 0), int или каноническая строка
        cross: кросс-курс to/from
        slippage_bps: допуск slippage
        fee_bps: комиссия протокола
        spread_bps: spread (применяется до комиссии)

    Returns:
        SwapQuote с min_out_amount <= out_amount

    Raises:
        VaultEngineError(InvalidArgument): amount_in == 0, некорректная сумма
            или bps вне [0, 10000]
    """
    in_amount = to_scaled_amount(amount_in)
    slippage = clamp_bps(slippage_bps)
    fee = clamp_bps(fee_bps)
    spread = clamp_bps(spread_bps)

    if in_amount == 0:
        raise VaultEngineError(ErrorKind.INVALID_ARGUMENT, "amountIn must be > 0")

    raw_out = convert_at_cross_rate(in_amount, cross)

    after_spread = apply_bps(raw_out, spread, RoundingMode.DOWN)
    after_fee = apply_bps(after_spread, fee, RoundingMode.DOWN)
    min_out = apply_bps(after_fee, slippage, RoundingMode.DOWN)

    return SwapQuote(
        from_asset=from_asset,
        to_asset=to_asset,
        in_amount=in_amount,
        out_amount=after_fee,
        min_out_amount=min_out,
        price=cross.scaled_ratio,
        price_exponent=cross.exponent,
        fee_bps=fee,
        spread_bps=spread,
        slippage_bps=slippage,
        oracle=OracleSnapshot.from_price(cross.source_price),
    )


def check_quote_executable(quote: SwapQuote) -> None:
    """
    Повторная проверка котировки перед исполнением.

    По построению не срабатывает, но ловит устаревшую/изменённую котировку
    (например, пересобранную через model_construct).

    Raises:
        VaultEngineError(InvalidSlippage): min_out_amount > out_amount
    """
    if quote.min_out_amount > quote.out_amount:
        raise VaultEngineError(
            ErrorKind.INVALID_SLIPPAGE,
            "minOutAmount exceeds quoted outAmount",
            {
                "min_out_amount": str(quote.min_out_amount),
                "out_amount": str(quote.out_amount),
            },
        )
