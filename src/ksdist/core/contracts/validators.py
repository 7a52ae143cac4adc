"""
JSON Schema Contract Validators

Проверка сериализованных результатов ksdist против контракта
ks_evaluation.json (библиотека jsonschema, Draft 2020-12).

Контракт фиксирует то, что видит потребитель результата: JSON-форму
KolmogorovEvaluation. Pydantic-модель проверяет объект в памяти, схема
проверяет уже сериализованный документ (после model_dump_json).
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Union

import jsonschema
from jsonschema import Draft202012Validator

from ksdist.core.domain import KolmogorovEvaluation

KS_EVALUATION_SCHEMA = "ks_evaluation"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик схем, поставляемых в пакете (contracts/schema/*.json).

    Каждая схема проходит meta-validation при первой загрузке и кэшируется.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Args:
            schema_name: Имя схемы без расширения (например, 'ks_evaluation')

        Returns:
            Схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# =============================================================================
# KS EVALUATION VALIDATOR
# =============================================================================


class KolmogorovEvaluationValidator:
    """
    Валидатор контракта ks_evaluation.

    Принимает либо уже сериализованный dict, либо KolmogorovEvaluation;
    модель сначала проходит через model_dump_json, чтобы проверялась именно
    та JSON-форма, которую получит потребитель.
    """

    def __init__(self, loader: SchemaLoader | None = None):
        self.schema = (loader or _SCHEMA_LOADER).load_schema(KS_EVALUATION_SCHEMA)
        self._validator = Draft202012Validator(self.schema)

    @staticmethod
    def to_document(data: Union[KolmogorovEvaluation, Dict[str, Any]]) -> Dict[str, Any]:
        """JSON-документ для проверки."""
        if isinstance(data, KolmogorovEvaluation):
            return json.loads(data.model_dump_json())
        return data

    def validate(self, data: Union[KolmogorovEvaluation, Dict[str, Any]]) -> None:
        """
        Raises:
            jsonschema.ValidationError: Если документ не соответствует схеме
        """
        self._validator.validate(self.to_document(data))

    def is_valid(self, data: Union[KolmogorovEvaluation, Dict[str, Any]]) -> bool:
        return self._validator.is_valid(self.to_document(data))

    def iter_errors(
        self, data: Union[KolmogorovEvaluation, Dict[str, Any]]
    ) -> Iterator[jsonschema.ValidationError]:
        return self._validator.iter_errors(self.to_document(data))


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_ks_evaluation(data: Union[KolmogorovEvaluation, Dict[str, Any]]) -> None:
    """
    Валидация результата evaluate_statistic против ks_evaluation.json.

    Args:
        data: KolmogorovEvaluation или его JSON-форма (dict)

    Raises:
        jsonschema.ValidationError: Если документ не соответствует схеме
    """
    KolmogorovEvaluationValidator().validate(data)
