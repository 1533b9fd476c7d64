"""
Payloads — Сериализация доменных моделей в контрактные payload'ы

Суммы пересекают границу как канонические десятичные строки: JSON number
не гарантирует точность больших целых у потребителей.
"""

from typing import Any, Dict, Sequence

from jsonschema import ValidationError
from pydantic import ValidationError as PydanticValidationError

from src.core.domain.swap_quote import SwapQuote
from src.core.domain.vault_state import VaultAggregateState
from src.core.domain.yield_source import YieldAllocation
from src.core.errors import ErrorKind, VaultEngineError
from src.core.math.fixed_point import to_canonical_string, to_scaled_amount

from .validators import SwapQuoteValidator, VaultStateValidator, YieldAllocationValidator


def swap_quote_to_payload(quote: SwapQuote) -> Dict[str, Any]:
    """SwapQuote → payload swap_quote (проверен по схеме)"""
    payload = {
        "from_asset": quote.from_asset,
        "to_asset": quote.to_asset,
        "in_amount": to_canonical_string(quote.in_amount),
        "out_amount": to_canonical_string(quote.out_amount),
        "min_out_amount": to_canonical_string(quote.min_out_amount),
        "price": to_canonical_string(quote.price),
        "price_exponent": quote.price_exponent,
        "fee_bps": quote.fee_bps,
        "spread_bps": quote.spread_bps,
        "slippage_bps": quote.slippage_bps,
        "oracle": {
            "kind": quote.oracle.kind.value,
            "feed": quote.oracle.feed,
            "publish_time": quote.oracle.publish_time,
            "confidence": to_canonical_string(quote.oracle.confidence),
            "exponent": quote.oracle.exponent,
        },
    }
    SwapQuoteValidator().validate(payload)
    return payload


def yield_allocations_to_payload(
    asset_id: str, allocations: Sequence[YieldAllocation]
) -> Dict[str, Any]:
    """Набор аллокаций → payload yield_allocation (проверен по схеме)"""
    payload = {
        "asset_id": asset_id,
        "allocations": [
            {
                "source_id": a.source_id,
                "weight_bps": a.weight_bps,
                "apr_bps": a.metrics.apr_bps,
            }
            for a in allocations
        ],
    }
    YieldAllocationValidator().validate(payload)
    return payload


def vault_state_from_payload(data: Dict[str, Any]) -> VaultAggregateState:
    """
    Payload vault_state → VaultAggregateState.

    Raises:
        VaultEngineError(AccountParseError): Payload не соответствует схеме
    """
    try:
        VaultStateValidator().validate(data)
    except ValidationError as e:
        raise VaultEngineError(
            ErrorKind.ACCOUNT_PARSE_ERROR,
            "vault_state payload does not match contract",
            {"path": list(e.absolute_path), "error": e.message},
        ) from e

    # Схема пропускает "1\n" (pattern) и 5.0 (integer); строгий разбор ниже
    try:
        capacity = data.get("capacity_assets")
        return VaultAggregateState(
            vault_id=data.get("vault_id"),
            asset_id=data.get("asset_id"),
            total_assets=to_scaled_amount(data["total_assets"]),
            total_shares=to_scaled_amount(data["total_shares"]),
            capacity_assets=to_scaled_amount(capacity) if capacity is not None else None,
            utilization_bps=data.get("utilization_bps"),
            last_updated_ts=data.get("last_updated_ts"),
        )
    except VaultEngineError as e:
        raise VaultEngineError(
            ErrorKind.ACCOUNT_PARSE_ERROR,
            "vault_state payload carries a malformed amount",
            {"error": e.message},
        ) from e
    except PydanticValidationError as e:
        raise VaultEngineError(
            ErrorKind.ACCOUNT_PARSE_ERROR,
            "vault_state payload does not match the domain model",
            {"error": str(e)},
        ) from e
