"""
KolmogorovEvaluation — результат вычисления распределения Колмогорова

Immutable Pydantic модель. Полная совместимость с JSON Schema
(ksdist/core/contracts/schema/ks_evaluation.json).
"""

from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class EvaluationMethod(str, Enum):
    """Способ, которым получено значение CDF."""

    BOUNDARY = "BOUNDARY"
    EXACT_MATRIX = "EXACT_MATRIX"
    TAIL_APPROXIMATION = "TAIL_APPROXIMATION"


# =============================================================================
# EVALUATION MODEL
# =============================================================================


class KolmogorovEvaluation(BaseModel):
    """
    Значение распределения статистики Колмогорова–Смирнова D_n в точке d.

    - cdf: P(D_n <= d)
    - statistic: d, ограниченное отрезком [0, 1] (носитель D_n)
    - sf: P(D_n > d) (p-value двустороннего критерия)
    - method: BOUNDARY для точных граничных случаев, EXACT_MATRIX для
      матричного алгоритма, TAIL_APPROXIMATION для быстрой формулы хвоста
    - matrix_dimension: размер m матрицы H (0, если матрица не строилась)
    """

    schema_version: str = Field("1", pattern="^1$", description="Версия схемы")
    sample_size: int = Field(..., ge=1, description="Размер выборки n")
    statistic: float = Field(
        ..., ge=0, le=1, description="Значение статистики d, ограниченное отрезком [0, 1]"
    )
    cdf: float = Field(..., ge=0, le=1, description="P(D_n <= d)")
    sf: float = Field(..., ge=0, le=1, description="P(D_n > d)")
    method: EvaluationMethod = Field(..., description="Способ вычисления")
    matrix_dimension: int = Field(..., ge=0, description="Размер матрицы m = 2k - 1")

    model_config = {"frozen": True}
