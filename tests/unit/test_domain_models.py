"""
Tests for Pydantic domain models

Покрывает:
- PrecisionSettings: значения по умолчанию, ограничения, frozen
- KolmogorovEvaluation: валидация диапазонов, enum, сериализация
"""

import pytest
from pydantic import ValidationError

from ksdist.core.domain import (
    DEFAULT_PRECISION,
    LARGE_SAMPLE_SIZE,
    RESCALE_STEP,
    RESCALE_THRESHOLD,
    EvaluationMethod,
    KolmogorovEvaluation,
    PrecisionSettings,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def valid_evaluation_data():
    """Валидные данные результата."""
    return {
        "sample_size": 10,
        "statistic": 0.25,
        "cdf": 0.4,
        "sf": 0.6,
        "method": "EXACT_MATRIX",
        "matrix_dimension": 5,
    }


# =============================================================================
# PRECISION SETTINGS
# =============================================================================


class TestPrecisionSettings:
    """Тесты PrecisionSettings"""

    def test_defaults(self):
        settings = PrecisionSettings()
        assert settings.rescale_threshold == RESCALE_THRESHOLD == 1e140
        assert settings.rescale_step == RESCALE_STEP == 140
        assert settings.clamp_output is True
        assert settings.right_tail_approximation is False
        assert settings.large_sample_size == LARGE_SAMPLE_SIZE

    def test_default_instance(self):
        assert DEFAULT_PRECISION == PrecisionSettings()

    def test_frozen(self):
        settings = PrecisionSettings()
        with pytest.raises(ValidationError):
            settings.rescale_step = 10

    def test_custom_values(self):
        settings = PrecisionSettings(rescale_threshold=1e20, rescale_step=20)
        assert settings.rescale_threshold == 1e20
        assert settings.rescale_step == 20

    @pytest.mark.parametrize("threshold", [1e5, 1e200, -1.0])
    def test_threshold_out_of_range(self, threshold):
        with pytest.raises(ValidationError):
            PrecisionSettings(rescale_threshold=threshold, rescale_step=1)

    @pytest.mark.parametrize("step", [0, -5, 301])
    def test_step_out_of_range(self, step):
        with pytest.raises(ValidationError):
            PrecisionSettings(rescale_step=step)

    def test_step_must_fit_threshold(self):
        """10^step не должно превышать threshold²"""
        PrecisionSettings(rescale_threshold=1e10, rescale_step=20)
        with pytest.raises(ValidationError, match="too large"):
            PrecisionSettings(rescale_threshold=1e10, rescale_step=21)

    def test_large_sample_size_positive(self):
        with pytest.raises(ValidationError):
            PrecisionSettings(large_sample_size=0)


# =============================================================================
# KOLMOGOROV EVALUATION
# =============================================================================


class TestKolmogorovEvaluation:
    """Тесты KolmogorovEvaluation"""

    def test_valid(self, valid_evaluation_data):
        evaluation = KolmogorovEvaluation(**valid_evaluation_data)
        assert evaluation.method == EvaluationMethod.EXACT_MATRIX
        assert evaluation.schema_version == "1"

    @pytest.mark.parametrize("field, value", [("cdf", 1.5), ("cdf", -0.1), ("sf", 2.0)])
    def test_probability_range(self, valid_evaluation_data, field, value):
        valid_evaluation_data[field] = value
        with pytest.raises(ValidationError):
            KolmogorovEvaluation(**valid_evaluation_data)

    @pytest.mark.parametrize("value", [-0.1, 1.5, float("inf")])
    def test_statistic_within_support(self, valid_evaluation_data, value):
        valid_evaluation_data["statistic"] = value
        with pytest.raises(ValidationError):
            KolmogorovEvaluation(**valid_evaluation_data)

    def test_sample_size_positive(self, valid_evaluation_data):
        valid_evaluation_data["sample_size"] = 0
        with pytest.raises(ValidationError):
            KolmogorovEvaluation(**valid_evaluation_data)

    def test_invalid_method(self, valid_evaluation_data):
        valid_evaluation_data["method"] = "GUESS"
        with pytest.raises(ValidationError):
            KolmogorovEvaluation(**valid_evaluation_data)

    def test_schema_version_pinned(self, valid_evaluation_data):
        valid_evaluation_data["schema_version"] = "2"
        with pytest.raises(ValidationError):
            KolmogorovEvaluation(**valid_evaluation_data)

    def test_frozen(self, valid_evaluation_data):
        evaluation = KolmogorovEvaluation(**valid_evaluation_data)
        with pytest.raises(ValidationError):
            evaluation.cdf = 0.5

    def test_json_round_trip(self, valid_evaluation_data):
        evaluation = KolmogorovEvaluation(**valid_evaluation_data)
        restored = KolmogorovEvaluation.model_validate_json(evaluation.model_dump_json())
        assert restored == evaluation

    def test_method_serialized_as_string(self, valid_evaluation_data):
        dumped = KolmogorovEvaluation(**valid_evaluation_data).model_dump(mode="json")
        assert dumped["method"] == "EXACT_MATRIX"
