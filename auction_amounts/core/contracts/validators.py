"""
JSON Schema Contract Validators

Модуль для валидации входных JSON данных согласно формальным JSON Schema
контрактам (Draft 2020-12, библиотека jsonschema).

Схемы (auction_amounts/core/contracts/schema/):
- fraction_spec.json
- amount_request.json

КРИТИЧЕСКИЙ ИНВАРИАНТ:
Данные, прошедшие контракт, всегда загружаются в строгие модели и
принимаются uint256-арифметикой. Поэтому тип "integer" переопределён:
стандартный Draft 2020-12 считает 1.0 целым, здесь принимается только int
(bool также отвергается).
"""

import json
from importlib.resources import files
from importlib.resources.abc import Traversable
from typing import Any, Dict, List

import jsonschema
from jsonschema import Draft202012Validator, validators

from auction_amounts.core.domain.fraction import FractionSpec


# =============================================================================
# STRICT INTEGER VALIDATOR
# =============================================================================


def _is_strict_integer(checker: Any, instance: Any) -> bool:
    # 1.0 и True не являются uint256
    return isinstance(instance, int) and not isinstance(instance, bool)


StrictIntegerValidator = validators.extend(
    Draft202012Validator,
    type_checker=Draft202012Validator.TYPE_CHECKER.redefine("integer", _is_strict_integer),
)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    По умолчанию читает схемы из package-data (schema/ внутри пакета),
    поэтому работает и из установленного wheel. Для тестов можно передать
    любой каталог (Path или Traversable).
    """

    def __init__(self, schema_dir: Traversable | None = None):
        self._schema_dir = schema_dir or files("auction_amounts.core.contracts") / "schema"
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш схем и скомпилированных валидаторов
        self._schemas: Dict[str, Dict[str, Any]] = {}
        self._validators: Dict[str, Any] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'fraction_spec')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_file = self._schema_dir / f"{schema_name}.json"
        if not schema_file.is_file():
            raise FileNotFoundError(f"Schema not found: {schema_file}")

        schema = json.loads(schema_file.read_text(encoding="utf-8"))

        try:
            StrictIntegerValidator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e.message}") from e

        self._schemas[schema_name] = schema
        return schema

    def validator_for(self, schema_name: str):
        """Скомпилированный StrictIntegerValidator для схемы (кэшируется)."""
        if schema_name not in self._validators:
            self._validators[schema_name] = StrictIntegerValidator(self.load_schema(schema_name))
        return self._validators[schema_name]


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Валидатор данных против одного контракта.

    Валидаторы компилируются один раз на загрузчик и переиспользуются
    всеми экземплярами.
    """

    schema_name: str = ""

    def __init__(self, loader: SchemaLoader | None = None):
        loader = loader or _SCHEMA_LOADER
        self.schema = loader.load_schema(self.schema_name)
        self.validator = loader.validator_for(self.schema_name)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)

    def describe_errors(self, data: Dict[str, Any]) -> List[str]:
        """
        Все нарушения контракта в виде "json_path: message".

        Пустой список означает, что данные валидны. Порядок стабилен
        (сортировка по пути), что удобно для логов и аудита.
        """
        return sorted(f"{error.json_path}: {error.message}" for error in self.iter_errors(data))


class FractionSpecValidator(ContractValidator):
    """Валидатор для fraction_spec контракта."""

    schema_name = "fraction_spec"


class AmountRequestValidator(ContractValidator):
    """Валидатор для amount_request контракта."""

    schema_name = "amount_request"


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_fraction_spec(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют fraction_spec
    """
    FractionSpecValidator().validate(data)


def validate_amount_request(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют amount_request
    """
    AmountRequestValidator().validate(data)


def load_fraction_spec(data: Dict[str, Any]) -> FractionSpec:
    """
    Валидация по контракту и построение FractionSpec.

    Контракт строже или равен модели: всё, что прошло validate_fraction_spec,
    принимается FractionSpec без ошибок.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    validate_fraction_spec(data)
    return FractionSpec(**data)
