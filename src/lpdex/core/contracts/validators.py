"""
JSON Schema Contract Validators

Модуль для валидации JSON данных согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы (lpdex/core/contracts/schema/):
- pool_snapshot.json
- liquidity_initialized.json
- liquidity_added.json
- liquidity_removed.json
- claim_transferred.json
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются вместе с пакетом в каталоге schema/ рядом с модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'pool_snapshot')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
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
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


def event_schema_name(event_name: str) -> str:
    """
    Имя схемы для события: CamelCase → snake_case.

    Examples:
        >>> event_schema_name("LiquidityAdded")
        'liquidity_added'
    """
    return re.sub(r"(?<!^)(?=[A-Z])", "_", event_name).lower()


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
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)


class PoolSnapshotValidator(ContractValidator):
    """Валидатор для pool_snapshot контракта."""

    def __init__(self):
        super().__init__("pool_snapshot")


class EventValidator(ContractValidator):
    """
    Валидатор для контракта конкретного события.

    Имя схемы выводится из имени события (LiquidityAdded → liquidity_added).
    """

    def __init__(self, event_name: str):
        self.event_name = event_name
        super().__init__(event_schema_name(event_name))


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_pool_snapshot(data: Dict[str, Any]) -> None:
    """
    Валидация pool_snapshot данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    PoolSnapshotValidator().validate(data)


def validate_event(data: Dict[str, Any]) -> None:
    """
    Валидация события по его полю "event".

    Raises:
        ValidationError: Если поле event отсутствует или данные не
            соответствуют схеме события
    """
    event_name = data.get("event")
    if not isinstance(event_name, str) or not event_name:
        raise ValidationError("Event payload has no 'event' name")
    EventValidator(event_name).validate(data)
