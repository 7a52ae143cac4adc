"""
Domain models and value objects.

Contains precision settings and the evaluation result model.
"""

from ksdist.core.domain.evaluation import EvaluationMethod, KolmogorovEvaluation
from ksdist.core.domain.precision import (
    DEFAULT_PRECISION,
    LARGE_SAMPLE_SIZE,
    RESCALE_STEP,
    RESCALE_THRESHOLD,
    PrecisionSettings,
)

__all__ = [
    # Precision settings
    "DEFAULT_PRECISION",
    "LARGE_SAMPLE_SIZE",
    "RESCALE_STEP",
    "RESCALE_THRESHOLD",
    "PrecisionSettings",
    # Evaluation model
    "EvaluationMethod",
    "KolmogorovEvaluation",
]
