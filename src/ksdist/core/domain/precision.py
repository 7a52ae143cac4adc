"""
PrecisionSettings — параметры численной точности

Immutable Pydantic модель, управляющая десятичным масштабированием матриц,
clamp результата и быстрым приближением правого хвоста.

Константы по умолчанию используются также numerical_safeguards.
"""

import math
from typing import Final

from pydantic import BaseModel, Field, model_validator

# =============================================================================
# ПАРАМЕТРЫ МАСШТАБИРОВАНИЯ
# =============================================================================

# Порог модуля элемента, после которого матрица делится на 10^RESCALE_STEP.
# threshold² × m должно оставаться в пределах double (~1.8e308)
RESCALE_THRESHOLD: Final[float] = 1e140

# Шаг десятичного масштабирования (степень десяти)
RESCALE_STEP: Final[int] = 140

# Размер выборки, после которого накопленная ошибка округления заметна
LARGE_SAMPLE_SIZE: Final[int] = 100_000


class PrecisionSettings(BaseModel):
    """
    Настройки точности вычисления распределения Колмогорова.

    Immutable модель (frozen=True). Передаётся явно в каждую операцию,
    глобального изменяемого состояния нет.
    """

    rescale_threshold: float = Field(
        RESCALE_THRESHOLD,
        ge=1e10,
        le=1e150,
        description="Порог модуля элемента матрицы для rescale",
    )
    rescale_step: int = Field(
        RESCALE_STEP,
        ge=1,
        le=300,
        description="Шаг десятичного масштабирования (степень десяти)",
    )
    clamp_output: bool = Field(
        True, description="Clamp результата в [0, 1] после округления"
    )
    right_tail_approximation: bool = Field(
        False,
        description="Быстрая формула для правого хвоста (точность ~7 знаков)",
    )
    large_sample_size: int = Field(
        LARGE_SAMPLE_SIZE,
        ge=1,
        description="n, начиная с которого логируется предупреждение о точности",
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_step_fits_threshold(self) -> "PrecisionSettings":
        # один шаг не должен перепрыгивать диапазон [1/threshold, threshold]
        if self.rescale_step > 2 * math.log10(self.rescale_threshold):
            raise ValueError(
                f"rescale_step={self.rescale_step} too large for "
                f"rescale_threshold={self.rescale_threshold:.3e}: "
                f"10^step must not exceed threshold^2"
            )
        return self


DEFAULT_PRECISION: Final[PrecisionSettings] = PrecisionSettings()
