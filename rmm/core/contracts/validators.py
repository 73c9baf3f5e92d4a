"""
JSON Schema Contract Validators

Контракты сериализованных моделей пула (Draft 2020-12):
- pool_parameters.json — PoolParameters (включая computed proportional_vol)
- pool_quote.json      — PoolQuote (неконечные значения как null)

Схемы поставляются внутри пакета (core/contracts/schema/) и проходят
meta-validation при первой загрузке.
"""

import json
from pathlib import Path
from typing import Any, ClassVar, Dict

import jsonschema
from jsonschema import Draft202012Validator
from pydantic import BaseModel

SCHEMA_DIR = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Кэширующий загрузчик схем из каталога (по умолчанию SCHEMA_DIR)."""

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._cache: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени файла без расширения.

        Raises:
            FileNotFoundError: Файла <schema_name>.json нет в каталоге
            ValueError: Файл не является валидной Draft 2020-12 схемой
        """
        cached = self._cache.get(schema_name)
        if cached is not None:
            return cached

        path = self._schema_dir / f"{schema_name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {path.name}: {e.message}") from e

        self._cache[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Валидатор одного контракта; подкласс задаёт schema_name.

    Принимает как готовый dict, так и pydantic модель: модель
    сериализуется в JSON-режиме, поэтому ±inf/NaN в PoolQuote
    проверяются уже как null.
    """

    schema_name: ClassVar[str]

    def __init__(self):
        self.validator = Draft202012Validator(_SCHEMA_LOADER.load_schema(self.schema_name))

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: Первое найденное нарушение схемы
        """
        self.validator.validate(data)

    def validate_model(self, model: BaseModel) -> None:
        """Валидация pydantic модели через её JSON-представление."""
        self.validate(model.model_dump(mode="json"))


class PoolParametersValidator(ContractValidator):
    schema_name = "pool_parameters"


class PoolQuoteValidator(ContractValidator):
    schema_name = "pool_quote"


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_pool_parameters(data: Dict[str, Any] | BaseModel) -> None:
    """Валидация pool_parameters (dict или PoolParameters)."""
    _validate(PoolParametersValidator(), data)


def validate_pool_quote(data: Dict[str, Any] | BaseModel) -> None:
    """Валидация pool_quote (dict или PoolQuote)."""
    _validate(PoolQuoteValidator(), data)


def _validate(validator: ContractValidator, data: Dict[str, Any] | BaseModel) -> None:
    if isinstance(data, BaseModel):
        validator.validate_model(data)
    else:
        validator.validate(data)
