"""
JSON Schema Contract Validators

Проверка JSON-форм на границах SDK по схемам Draft 2020-12:
- account_info_response.json — результат getAccountInfo до декодирования аккаунта
- trade_instruction.json — payload buy/sell инструкции (amount/bound как полные u64)

Схемы поставляются как package data (contracts/schema/) и компилируются один раз:
ledger reader валидирует каждый ответ RPC.
"""

import json
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


ACCOUNT_INFO_RESPONSE: str = "account_info_response"
TRADE_INSTRUCTION: str = "trade_instruction"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Чтение и meta-валидация схем из каталога.

    По умолчанию — каталог schema/ внутри установленного пакета.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        if schema_dir is None:
            schema_dir = Path(str(resources.files(__package__).joinpath("schema")))
        if not schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {schema_dir}")

        self.schema_dir = schema_dir
        self._cache: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени файла без .json (кэшируется).

        Raises:
            FileNotFoundError: Нет файла схемы
            ValueError: Файл не является корректной Draft 2020-12 схемой
        """
        cached = self._cache.get(schema_name)
        if cached is not None:
            return cached

        path = self.schema_dir / f"{schema_name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e.message}") from e

        self._cache[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Скомпилированный валидатор одной схемы пакета."""

    def __init__(self, schema_name: str, loader: Optional[SchemaLoader] = None):
        self.schema_name = schema_name
        self.schema = (loader or _SCHEMA_LOADER).load_schema(schema_name)
        self._validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Raises:
            ValidationError: Первое (наиболее релевантное) нарушение схемы
        """
        self._validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        return self._validator.is_valid(data)

    def iter_errors(self, data: Any) -> Iterator[ValidationError]:
        return self._validator.iter_errors(data)

    def describe_errors(self, data: Any) -> List[str]:
        """Все нарушения в виде "path: message" (пустой список, если данные валидны)."""
        return [
            f"{'/'.join(str(p) for p in error.absolute_path) or '<root>'}: {error.message}"
            for error in sorted(self.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
        ]


class AccountInfoResponseValidator(ContractValidator):
    """Результат getAccountInfo (encoding=base64)."""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        super().__init__(ACCOUNT_INFO_RESPONSE, loader)


class TradeInstructionValidator(ContractValidator):
    """Payload buy/sell инструкции."""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        super().__init__(TRADE_INSTRUCTION, loader)


_VALIDATOR_TYPES: Dict[str, type[ContractValidator]] = {
    ACCOUNT_INFO_RESPONSE: AccountInfoResponseValidator,
    TRADE_INSTRUCTION: TradeInstructionValidator,
}
_VALIDATORS: Dict[str, ContractValidator] = {}


def _validator(schema_name: str) -> ContractValidator:
    if schema_name not in _VALIDATORS:
        _VALIDATORS[schema_name] = _VALIDATOR_TYPES[schema_name]()
    return _VALIDATORS[schema_name]


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_account_info_response(data: Any) -> None:
    """
    Raises:
        ValidationError: Ответ RPC не соответствует контракту getAccountInfo
    """
    _validator(ACCOUNT_INFO_RESPONSE).validate(data)


def validate_trade_instruction(data: Any) -> None:
    """
    Raises:
        ValidationError: Payload инструкции не соответствует контракту
    """
    _validator(TRADE_INSTRUCTION).validate(data)
