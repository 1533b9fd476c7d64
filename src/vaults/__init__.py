"""Vaults — учёт shares single-asset хранилища.

- validate_vault_state / preview_deposit / preview_withdraw: чистая математика shares
- VaultService: preview поверх внешнего чтения состояния, TVL, APR
"""

from .service import VaultService, VaultStateReader
from .share_accounting import (
    PreviewDepositResult,
    PreviewWithdrawResult,
    preview_deposit,
    preview_withdraw,
    validate_vault_state,
)

__all__ = [
    "PreviewDepositResult",
    "PreviewWithdrawResult",
    "preview_deposit",
    "preview_withdraw",
    "validate_vault_state",
    "VaultService",
    "VaultStateReader",
]
