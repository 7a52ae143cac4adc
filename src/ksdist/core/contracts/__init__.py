"""
Contract Validation Module

Валидация JSON контрактов результатов ksdist.
"""

from .validators import (
    KS_EVALUATION_SCHEMA,
    KolmogorovEvaluationValidator,
    SchemaLoader,
    validate_ks_evaluation,
)

__all__ = [
    # Constants
    "KS_EVALUATION_SCHEMA",
    # Classes
    "SchemaLoader",
    "KolmogorovEvaluationValidator",
    # Functions
    "validate_ks_evaluation",
]
