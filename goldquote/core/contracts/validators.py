"""
JSON Schema Contract Validators

Модуль для валидации сериализованных Quote / SwapFee перед передачей
внешнему коллаборатору (хранилище котировок, запись сбора комиссий).
Использует библиотеку jsonschema.

Схемы (goldquote/core/contracts/schema/):
- quote.json
- swap_fee.json
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator

from goldquote.core.domain.quote import Quote, SwapFee


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются вместе с пакетом (package data) в каталоге schema/
    рядом с этим модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'quote')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class QuoteValidator(ContractValidator):
    """Валидатор для quote контракта."""

    def __init__(self):
        super().__init__("quote")


class SwapFeeValidator(ContractValidator):
    """Валидатор для swap_fee контракта."""

    def __init__(self):
        super().__init__("swap_fee")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_quote(data: Dict[str, Any] | Quote) -> None:
    """
    Валидация quote данных (dict или модель Quote).

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    if isinstance(data, Quote):
        data = data.model_dump(mode="json")
    QuoteValidator().validate(data)


def validate_swap_fee(data: Dict[str, Any] | SwapFee) -> None:
    """
    Валидация swap_fee данных (dict или модель SwapFee).

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    if isinstance(data, SwapFee):
        data = data.model_dump(mode="json")
    SwapFeeValidator().validate(data)
