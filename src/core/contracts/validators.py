"""
JSON Schema Contract Validators

Контракты на границе ядра с внешними коллабораторами:
- vault_state.json (чтение состояния хранилища из ledger)
- swap_quote.json (котировка для исполнителя)
- yield_allocation.json (распределение для ребалансировки)

Схемы поставляются как package data в schema/. Каждая схема загружается,
проходит meta-валидацию и компилируется в Draft202012Validator один раз
на процесс.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator

from src.core.errors import ErrorKind, VaultEngineError


SCHEMA_DIR = Path(__file__).parent / "schema"

CONTRACT_NAMES = ("vault_state", "swap_quote", "yield_allocation")


# =============================================================================
# SCHEMA LOADING
# =============================================================================


class SchemaLoader:
    """
    Загрузчик контрактных схем пакета.

    Принимает только известные имена контрактов. Повреждённая схема в
    поставке пакета означает ошибку сборки, а не входных данных.
    """

    def __init__(self, schema_dir: Path = SCHEMA_DIR):
        self._schema_dir = schema_dir
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, contract: str) -> Dict[str, Any]:
        """
        Args:
            contract: имя контракта из CONTRACT_NAMES

        Raises:
            VaultEngineError(InvalidArgument): Неизвестный контракт
            VaultEngineError(InvariantViolation): Схема отсутствует или невалидна
        """
        if contract not in CONTRACT_NAMES:
            raise VaultEngineError(
                ErrorKind.INVALID_ARGUMENT,
                f"Unknown contract: {contract}",
                {"known": list(CONTRACT_NAMES)},
            )

        if contract in self._schemas:
            return self._schemas[contract]

        schema_path = self._schema_dir / f"{contract}.json"
        try:
            with open(schema_path, "r", encoding="utf-8") as f:
                schema = json.load(f)
            Draft202012Validator.check_schema(schema)
        except (OSError, json.JSONDecodeError, jsonschema.SchemaError) as e:
            raise VaultEngineError(
                ErrorKind.INVARIANT_VIOLATION,
                f"Contract schema {contract}.json is unusable",
                {"path": str(schema_path), "error": str(e)},
            ) from e

        self._schemas[contract] = schema
        return schema


@lru_cache(maxsize=None)
def compiled_validator(contract: str) -> Draft202012Validator:
    """Скомпилированный валидатор контракта (кэш на процесс)"""
    return Draft202012Validator(SchemaLoader().load_schema(contract))


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Проверка payload'а против схемы одного контракта"""

    def __init__(self, contract: str):
        self.contract = contract
        self.validator = compiled_validator(contract)

    @property
    def schema(self) -> Dict[str, Any]:
        return self.validator.schema

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: Payload не соответствует контракту
        """
        self.validator.validate(data)


class VaultStateValidator(ContractValidator):
    def __init__(self):
        super().__init__("vault_state")


class SwapQuoteValidator(ContractValidator):
    def __init__(self):
        super().__init__("swap_quote")


class YieldAllocationValidator(ContractValidator):
    def __init__(self):
        super().__init__("yield_allocation")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_vault_state_payload(data: Dict[str, Any]) -> None:
    VaultStateValidator().validate(data)


def validate_swap_quote_payload(data: Dict[str, Any]) -> None:
    SwapQuoteValidator().validate(data)


def validate_yield_allocation_payload(data: Dict[str, Any]) -> None:
    YieldAllocationValidator().validate(data)
