"""
Matrix Ops — произведение и степень квадратных матриц с масштабированием

Модуль содержит матричное ядро для точного распределения Колмогорова:
- matrix_multiply: плотное произведение C = A × B (m × m, row-major float64)
- matrix_power: A^p бинарным возведением в степень (O(log p) умножений)
  с отслеживанием десятичной экспоненты (scale exponent)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Истинное значение результата = values × 10^exponent
2. Выходной буфер matrix_multiply никогда не совпадает с входами
3. Нет глобальных scratch-буферов: каждый вызов аллоцирует свои матрицы
4. После каждого умножения max|элемент| <= rescale_threshold (для finite)

Матрица — numpy.ndarray float64 формы (m, m) в C-порядке, то есть плоский
буфер длины m*m с адресацией index = row*m + col.
"""

import logging
from typing import Final, NamedTuple

import numpy as np

from ksdist.core.domain import DEFAULT_PRECISION, PrecisionSettings
from ksdist.core.math.numerical_safeguards import (
    apply_decimal_exponent,
    is_integral,
    rescale_steps,
)

logger = logging.getLogger(__name__)

# Наибольший |exponent|, при котором 10.0 ** exponent остаётся нормальным double
MAX_DIRECT_EXPONENT: Final[int] = 300


# =============================================================================
# EXCEPTIONS
# =============================================================================


class MatrixShapeError(ValueError):
    """Матрица не квадратная, размеры не совпадают или выход совпадает с входом."""


class MatrixDomainError(ValueError):
    """Показатель степени вне области определения (не целое или < 0)."""


# =============================================================================
# SCALED MATRIX
# =============================================================================


class ScaledMatrix(NamedTuple):
    """
    Матрица с десятичной экспонентой.

    Истинное значение: values × 10^exponent.
    """

    values: np.ndarray
    exponent: int

    def to_array(self) -> np.ndarray:
        """
        Истинные значения как новая матрица.

        Может переполниться, если истинные значения вне диапазона double;
        предназначено для небольших матриц и проверок.
        """
        if self.exponent == 0:
            return self.values.copy()
        if abs(self.exponent) <= MAX_DIRECT_EXPONENT:
            return self.values * 10.0**self.exponent
        # 10^exponent сам по себе вне диапазона double: применяем по частям
        unscale = np.vectorize(
            lambda v: apply_decimal_exponent(float(v), self.exponent),
            otypes=[np.float64],
        )
        return unscale(self.values)


# =============================================================================
# HELPERS
# =============================================================================


def identity_matrix(m: int) -> np.ndarray:
    """Единичная матрица m × m."""
    return np.eye(m, dtype=np.float64)


def as_square_matrix(a, name: str = "matrix") -> np.ndarray:
    """
    Приведение к квадратной float64 матрице в C-порядке.

    Args:
        a: array-like
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        numpy.ndarray формы (m, m); без копирования, если a уже подходит

    Raises:
        MatrixShapeError: Если a не двумерная квадратная
    """
    arr = np.ascontiguousarray(a, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise MatrixShapeError(f"{name} must be a square matrix, got shape {arr.shape}")
    return arr


def _rescale_in_place(values: np.ndarray, settings: PrecisionSettings) -> int:
    """
    Масштабирование матрицы на месте.

    Returns:
        Приращение десятичной экспоненты (кратно settings.rescale_step)
    """
    if values.size == 0:
        return 0

    magnitude = float(np.max(np.abs(values)))
    steps = rescale_steps(magnitude, settings.rescale_threshold, settings.rescale_step)
    if steps == 0:
        return 0

    factor = 10.0 ** (-settings.rescale_step if steps > 0 else settings.rescale_step)
    for _ in range(abs(steps)):
        values *= factor

    logger.debug(
        "rescaled %dx%d matrix: max=%.3e, exponent %+d",
        values.shape[0],
        values.shape[1],
        magnitude,
        steps * settings.rescale_step,
    )
    return steps * settings.rescale_step


# =============================================================================
# MATRIX MULTIPLY
# =============================================================================


def matrix_multiply(a, b, out: np.ndarray | None = None) -> np.ndarray:
    """
    Произведение квадратных матриц C = A × B.

    C[i, j] = Σ_k A[i, k] · B[k, j], 0 <= i, j < m.

    Args:
        a: Левая матрица m × m
        b: Правая матрица m × m
        out: Выходной буфер m × m (float64, C-порядок); аллоцируется, если None

    Returns:
        Матрица C (тот же объект, что out, если out передан)

    Raises:
        MatrixShapeError: Если размеры не совпадают или out пересекается
            по памяти с a или b

    Examples:
        >>> matrix_multiply([[1.0, 2.0], [3.0, 4.0]], identity_matrix(2)).tolist()
        [[1.0, 2.0], [3.0, 4.0]]
    """
    a = as_square_matrix(a, "a")
    b = as_square_matrix(b, "b")

    if a.shape != b.shape:
        raise MatrixShapeError(f"dimension mismatch: a {a.shape} vs b {b.shape}")

    m = a.shape[0]

    if out is None:
        out = np.empty((m, m), dtype=np.float64)
    else:
        if out.shape != a.shape or out.dtype != np.float64 or not out.flags.c_contiguous:
            raise MatrixShapeError(
                f"out must be a C-contiguous float64 matrix of shape {a.shape}, "
                f"got {out.dtype} {out.shape}"
            )
        if np.shares_memory(out, a) or np.shares_memory(out, b):
            raise MatrixShapeError("out must not alias a or b")

    if m == 0:
        return out

    np.matmul(a, b, out=out)
    return out


# =============================================================================
# MATRIX POWER
# =============================================================================


def matrix_power(
    a,
    power: int,
    scale_exponent: int = 0,
    settings: PrecisionSettings | None = None,
) -> ScaledMatrix:
    """
    Возведение матрицы в целую неотрицательную степень с масштабированием.

    Вычисляет (A × 10^scale_exponent)^power = V × 10^eV бинарным
    возведением в степень. После каждого умножения и возведения в квадрат
    матрица, у которой max|элемент| вышел за rescale_threshold, делится на
    10^rescale_step (а при underflow умножается), шаг добавляется к её
    экспоненте.

    Алгоритм:
        square ← A, acc ← I
        для каждого бита power, начиная с младшего:
            если бит установлен: acc ← acc × square (экспоненты складываются)
            square ← square × square (экспонента удваивается)

    Args:
        a: Квадратная матрица m × m
        power: Показатель степени (int >= 0)
        scale_exponent: Десятичная экспонента входной матрицы
        settings: Параметры масштабирования (default: DEFAULT_PRECISION)

    Returns:
        ScaledMatrix(values, exponent)

    Raises:
        MatrixShapeError: Если a не квадратная
        MatrixDomainError: Если power не целое или power < 0

    Examples:
        >>> result = matrix_power([[2.0]], 10)
        >>> float(result.values[0, 0]), result.exponent
        (1024.0, 0)
        >>> result = matrix_power([[5.0, 1.0], [0.0, 5.0]], 0)
        >>> result.values.tolist(), result.exponent
        ([[1.0, 0.0], [0.0, 1.0]], 0)
    """
    if settings is None:
        settings = DEFAULT_PRECISION

    a = as_square_matrix(a, "a")

    if not is_integral(power):
        raise MatrixDomainError(f"power must be an integer, got {power!r}")
    if power < 0:
        raise MatrixDomainError(f"power must be non-negative, got {power}")

    m = a.shape[0]

    if power == 0:
        return ScaledMatrix(identity_matrix(m), 0)

    square = a.copy()
    square_exponent = int(scale_exponent)
    acc: np.ndarray | None = None
    acc_exponent = 0
    scratch = np.empty_like(square)
    remaining = int(power)

    # acc, square и scratch: три разных буфера, swap сохраняет это свойство
    while True:
        if remaining & 1:
            if acc is None:
                acc = square.copy()
                acc_exponent = square_exponent
            else:
                matrix_multiply(acc, square, out=scratch)
                acc, scratch = scratch, acc
                acc_exponent += square_exponent
                acc_exponent += _rescale_in_place(acc, settings)

        remaining >>= 1
        if remaining == 0:
            break

        matrix_multiply(square, square, out=scratch)
        square, scratch = scratch, square
        square_exponent = 2 * square_exponent + _rescale_in_place(square, settings)

    logger.debug("matrix_power: m=%d power=%d exponent=%d", m, power, acc_exponent)
    return ScaledMatrix(acc, acc_exponent)
