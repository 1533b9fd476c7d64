"""
Errors — Единая таксономия ошибок движка

Плоская таксономия: одно исключение VaultEngineError со стабильным
машиночитаемым kind и опциональными структурированными details.

ПОЛИТИКА РАСПРОСТРАНЕНИЯ:
1. Ядро никогда не восстанавливается от ошибки внутри себя
2. Нарушение предусловия сразу пробрасывается вызывающему
3. Нет retry, нет частичных результатов
4. Ядро не логирует ошибки (это забота вызывающего)
"""

from enum import Enum
from typing import Any, Optional, TypeVar


T = TypeVar("T")


# =============================================================================
# ENUMS
# =============================================================================


class ErrorCategory(str, Enum):
    """Как вызывающий должен трактовать ошибку"""

    CALLER_INPUT = "CALLER_INPUT"
    DATA_TRUST = "DATA_TRUST"
    BUSINESS_RULE = "BUSINESS_RULE"
    INTERNAL = "INTERNAL"
    INTEGRATION = "INTEGRATION"


class ErrorKind(str, Enum):
    """Машиночитаемый код ошибки (стабильный, используется в логах и API)"""

    ORACLE_PRICE_STALE = "OraclePriceStale"
    ORACLE_CONFIDENCE_TOO_WIDE = "OracleConfidenceTooWide"
    ORACLE_ADAPTER_UNAVAILABLE = "OracleAdapterUnavailable"
    INVALID_SLIPPAGE = "InvalidSlippage"
    INVALID_SHARE_CONVERSION = "InvalidShareConversion"
    VAULT_CAPACITY_EXCEEDED = "VaultCapacityExceeded"
    VAULT_INSOLVENT = "VaultInsolvent"
    UNAUTHORIZED_AUTHORITY = "UnauthorizedAuthority"
    PROGRAM_NOT_CONFIGURED = "ProgramNotConfigured"
    ACCOUNT_PARSE_ERROR = "AccountParseError"
    INVARIANT_VIOLATION = "InvariantViolation"
    INVALID_ARGUMENT = "InvalidArgument"
    TRANSACTION_BUILD_ERROR = "TransactionBuildError"

    @property
    def category(self) -> ErrorCategory:
        """Категория ошибки для принятия решения на стороне вызывающего"""
        return _CATEGORY_BY_KIND[self]


_CATEGORY_BY_KIND: dict[ErrorKind, ErrorCategory] = {
    ErrorKind.INVALID_ARGUMENT: ErrorCategory.CALLER_INPUT,
    ErrorKind.INVALID_SLIPPAGE: ErrorCategory.CALLER_INPUT,
    ErrorKind.ORACLE_PRICE_STALE: ErrorCategory.DATA_TRUST,
    ErrorKind.ORACLE_CONFIDENCE_TOO_WIDE: ErrorCategory.DATA_TRUST,
    ErrorKind.ACCOUNT_PARSE_ERROR: ErrorCategory.DATA_TRUST,
    ErrorKind.VAULT_CAPACITY_EXCEEDED: ErrorCategory.BUSINESS_RULE,
    ErrorKind.VAULT_INSOLVENT: ErrorCategory.BUSINESS_RULE,
    ErrorKind.INVALID_SHARE_CONVERSION: ErrorCategory.BUSINESS_RULE,
    ErrorKind.INVARIANT_VIOLATION: ErrorCategory.INTERNAL,
    ErrorKind.ORACLE_ADAPTER_UNAVAILABLE: ErrorCategory.INTEGRATION,
    ErrorKind.UNAUTHORIZED_AUTHORITY: ErrorCategory.INTEGRATION,
    ErrorKind.PROGRAM_NOT_CONFIGURED: ErrorCategory.INTEGRATION,
    ErrorKind.TRANSACTION_BUILD_ERROR: ErrorCategory.INTEGRATION,
}


# =============================================================================
# EXCEPTIONS
# =============================================================================


class VaultEngineError(Exception):
    """
    Типизированная ошибка движка.

    Attributes:
        kind: Машиночитаемый код ошибки
        message: Человекочитаемое описание
        details: Структурированная диагностика (опционально)
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details

    @property
    def category(self) -> ErrorCategory:
        return self.kind.category

    def __str__(self) -> str:
        if self.details:
            return f"[{self.kind.value}] {self.message} {self.details}"
        return f"[{self.kind.value}] {self.message}"


# =============================================================================
# INVARIANTS
# =============================================================================


def invariant(
    condition: object,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> None:
    """
    Проверка внутреннего инварианта.

    Raises:
        VaultEngineError(InvariantViolation): Если condition ложно
    """
    if not condition:
        raise VaultEngineError(ErrorKind.INVARIANT_VIOLATION, message, details)


def assert_non_null(value: Optional[T], message: str) -> T:
    """Возвращает value, если оно не None, иначе InvariantViolation"""
    if value is None:
        raise VaultEngineError(ErrorKind.INVARIANT_VIOLATION, message)
    return value
