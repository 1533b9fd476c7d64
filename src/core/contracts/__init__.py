"""
Contract Validation Module

Модуль для валидации JSON контрактов на границе с внешними коллабораторами.
"""

from .payloads import (
    swap_quote_to_payload,
    vault_state_from_payload,
    yield_allocations_to_payload,
)
from .validators import (
    ContractValidator,
    SchemaLoader,
    SwapQuoteValidator,
    VaultStateValidator,
    YieldAllocationValidator,
    validate_swap_quote_payload,
    validate_vault_state_payload,
    validate_yield_allocation_payload,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "SwapQuoteValidator",
    "VaultStateValidator",
    "YieldAllocationValidator",
    # Functions
    "validate_swap_quote_payload",
    "validate_vault_state_payload",
    "validate_yield_allocation_payload",
    # Payloads
    "swap_quote_to_payload",
    "vault_state_from_payload",
    "yield_allocations_to_payload",
]
