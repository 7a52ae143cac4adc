"""
Kolmogorov — точное распределение статистики Колмогорова–Смирнова

Durbin (1968); Marsaglia, Tsang, Wang (2003), "Evaluating Kolmogorov's
Distribution", Journal of Statistical Software 8(18).

Модуль вычисляет K(n, d) = P(D_n <= d), где D_n — двусторонняя статистика
Колмогорова–Смирнова для выборки размера n:
- Граничные случаи без построения матрицы (d <= 0, d >= 1, n·d <= 1/2)
- Матрица H размера m = 2k - 1, где k = ceil(n·d), h = k - n·d
- (n! / n^n) · (H^n)[k-1, k-1] через matrix_power с десятичным масштабированием
- Опционально: быстрая формула правого хвоста

ФОРМУЛЫ:
    H[i, j] = 1 / (i - j + 1)!            при i - j + 1 >= 0, иначе 0
    H[i, 0]   -= h^(i+1) / (i+1)!          (первый столбец)
    H[m-1, j] -= h^(m-j) / (m-j)!          (последняя строка)
    H[m-1, 0] += (2h - 1)^m / m!           при 2h - 1 > 0

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат в [0, 1] (clamp после округления, если clamp_output)
2. K(n, ·) не убывает по d
3. Нет общего изменяемого состояния: вызовы реентерабельны
"""

import logging
import math
from typing import Final

import numpy as np

from ksdist.core.domain import (
    DEFAULT_PRECISION,
    EvaluationMethod,
    KolmogorovEvaluation,
    PrecisionSettings,
)
from ksdist.core.math.asymptotic import right_tail_approximation
from ksdist.core.math.matrix_ops import matrix_power
from ksdist.core.math.numerical_safeguards import (
    apply_decimal_exponent,
    clamp,
    clamp_probability,
    is_integral,
    rescale_steps,
)

logger = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# При n·d <= 1/2 вероятность P(D_n <= d) точно равна нулю (D_n >= 1/(2n))
MIN_ND: Final[float] = 0.5

# Пороги n·d² для быстрой формулы правого хвоста (MTW 2003)
TAIL_ND2_ANY_N: Final[float] = 7.24
TAIL_ND2_LARGE_N: Final[float] = 3.76
TAIL_LARGE_N: Final[int] = 99


# =============================================================================
# EXCEPTIONS
# =============================================================================


class KolmogorovDomainViolation(ValueError):
    """
    Нарушение области определения K(n, d).

    n должно быть целым >= 1, d не должно быть NaN.
    """


# =============================================================================
# MATRIX CONSTRUCTION
# =============================================================================


def _inverse_factorials(m: int) -> np.ndarray:
    """[1/0!, 1/1!, ..., 1/m!]; хвост может уйти в underflow, это допустимо."""
    inv = np.empty(m + 1, dtype=np.float64)
    inv[0] = 1.0
    for j in range(1, m + 1):
        inv[j] = inv[j - 1] / j
    return inv


def build_durbin_matrix(k: int, h: float) -> np.ndarray:
    """
    Матрица H размера (2k-1) × (2k-1) для n·d = k - h.

    Args:
        k: ceil(n·d), k >= 1
        h: k - n·d, 0 <= h < 1

    Returns:
        numpy.ndarray float64 формы (m, m)

    Examples:
        >>> round(float(build_durbin_matrix(1, 0.2)[0, 0]), 12)
        0.6
    """
    m = 2 * k - 1
    idx = np.arange(m)
    offset = idx[:, None] - idx[None, :] + 1

    H = (offset >= 0).astype(np.float64)
    H[:, 0] -= h ** (idx + 1)
    H[m - 1, :] -= h ** (m - idx)
    if 2.0 * h - 1.0 > 0.0:
        H[m - 1, 0] += (2.0 * h - 1.0) ** m

    inv_fact = _inverse_factorials(m)
    positive = offset > 0
    H[positive] *= inv_fact[offset[positive]]
    return H


# =============================================================================
# EVALUATION
# =============================================================================


def _check_domain(n: int, d: float) -> None:
    if not is_integral(n):
        raise KolmogorovDomainViolation(f"sample size n must be an integer, got {n!r}")
    if n < 1:
        raise KolmogorovDomainViolation(f"sample size n must be >= 1, got {n}")
    if math.isnan(d):
        raise KolmogorovDomainViolation(f"statistic d must not be NaN, got {d}")


def _evaluate(
    n: int, d: float, settings: PrecisionSettings
) -> tuple[float, EvaluationMethod, int]:
    """
    Returns:
        (cdf, method, matrix_dimension)
    """
    _check_domain(n, d)
    n = int(n)
    d = float(d)

    if d <= 0.0:
        return 0.0, EvaluationMethod.BOUNDARY, 0
    if d >= 1.0:
        return 1.0, EvaluationMethod.BOUNDARY, 0

    nd = n * d
    if nd <= MIN_ND:
        return 0.0, EvaluationMethod.BOUNDARY, 0

    if settings.right_tail_approximation:
        s = nd * d
        if s > TAIL_ND2_ANY_N or (s > TAIL_ND2_LARGE_N and n > TAIL_LARGE_N):
            p = right_tail_approximation(n, d)
            return clamp_probability(p), EvaluationMethod.TAIL_APPROXIMATION, 0

    if n > settings.large_sample_size:
        logger.debug(
            "n=%d exceeds %d: accumulated round-off may degrade precision",
            n,
            settings.large_sample_size,
        )

    k = math.ceil(nd)
    h = k - nd
    H = build_durbin_matrix(k, h)
    m = H.shape[0]

    q = matrix_power(H, n, settings=settings)
    s = float(q.values[k - 1, k - 1])
    exponent = q.exponent

    # s × n! / n^n, с тем же масштабированием, что и в matrix_power
    step = settings.rescale_step
    for i in range(1, n + 1):
        s = s * i / n
        steps = rescale_steps(s, settings.rescale_threshold, step)
        if steps:
            s = apply_decimal_exponent(s, -steps * step, step)
            exponent += steps * step

    p = apply_decimal_exponent(s, exponent, step)
    if settings.clamp_output:
        p = clamp_probability(p)

    logger.debug("K(%d, %.6g) = %.12g (m=%d, h=%.6g)", n, d, p, m, h)
    return p, EvaluationMethod.EXACT_MATRIX, m


def kolmogorov_cdf(n: int, d: float, settings: PrecisionSettings | None = None) -> float:
    """
    Функция распределения статистики Колмогорова–Смирнова P(D_n <= d).

    Args:
        n: Размер выборки (int >= 1)
        d: Значение статистики (любое вещественное, кроме NaN)
        settings: Параметры точности (default: DEFAULT_PRECISION)

    Returns:
        Вероятность в [0, 1]

    Raises:
        KolmogorovDomainViolation: Если n не целое >= 1 или d — NaN

    Examples:
        >>> kolmogorov_cdf(5, 0.0)
        0.0
        >>> kolmogorov_cdf(5, 1.0)
        1.0
        >>> round(kolmogorov_cdf(1, 0.75), 12)
        0.5
        >>> round(kolmogorov_cdf(2, 0.6), 12)
        0.68
    """
    return _evaluate(n, d, settings or DEFAULT_PRECISION)[0]


def kolmogorov_sf(n: int, d: float, settings: PrecisionSettings | None = None) -> float:
    """
    Функция выживания P(D_n > d) — p-value двустороннего критерия KS.

    Как и kolmogorov_cdf, ограничивает результат в [0, 1] только при
    settings.clamp_output.

    Raises:
        KolmogorovDomainViolation: Если n не целое >= 1 или d — NaN
    """
    settings = settings or DEFAULT_PRECISION
    sf = 1.0 - _evaluate(n, d, settings)[0]
    if settings.clamp_output:
        sf = clamp_probability(sf)
    return sf


def evaluate_statistic(
    n: int, d: float, settings: PrecisionSettings | None = None
) -> KolmogorovEvaluation:
    """
    Полное вычисление распределения в точке d.

    D_n принимает значения в [0, 1], и вне этого отрезка CDF постоянна,
    поэтому в результат записывается d, ограниченное отрезком [0, 1]
    (d = ±inf сериализуется как 0.0 или 1.0). cdf и sf ограничиваются
    в [0, 1] независимо от settings.clamp_output: этого требует
    KolmogorovEvaluation.

    Returns:
        KolmogorovEvaluation с cdf, sf, способом вычисления и размером матрицы

    Raises:
        KolmogorovDomainViolation: Если n не целое >= 1 или d — NaN

    Examples:
        >>> result = evaluate_statistic(2, 0.6)
        >>> result.method.value, result.matrix_dimension
        ('EXACT_MATRIX', 3)
        >>> evaluate_statistic(5, float("inf")).statistic
        1.0
    """
    cdf, method, m = _evaluate(n, d, settings or DEFAULT_PRECISION)
    return KolmogorovEvaluation(
        sample_size=int(n),
        statistic=clamp(float(d), 0.0, 1.0),
        cdf=clamp_probability(cdf),
        sf=clamp_probability(1.0 - cdf),
        method=method,
        matrix_dimension=m,
    )
