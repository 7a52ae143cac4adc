"""
Numerical Safeguards — десятичное масштабирование и защитные проверки

Модуль обеспечивает численную устойчивость матричных вычислений
распределения Колмогорова:
- Десятичное масштабирование (scale exponent) для защиты от overflow/underflow
  при многократном возведении матриц в квадрат
- Восстановление истинного значения value × 10^exponent без промежуточного
  переполнения 10.0 ** exponent
- NaN/Inf проверки и проверки целочисленных параметров
- Clamp вероятностей в [0, 1] после накопленной ошибки округления

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Истинное значение = stored × 10^exponent (exponent всегда int)
2. После rescale модуль значения лежит в [1/threshold, threshold]
3. Все операции детерминированы и воспроизводимы
"""

import math
from numbers import Integral

from ksdist.core.domain.precision import RESCALE_STEP, RESCALE_THRESHOLD


# =============================================================================
# ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение finite
    """
    return math.isfinite(value)


def is_integral(value: object) -> bool:
    """
    Проверка, что значение — целое число (int или numpy integer), но не bool.

    Examples:
        >>> is_integral(5)
        True
        >>> is_integral(5.0)
        False
        >>> is_integral(True)
        False
    """
    return isinstance(value, Integral) and not isinstance(value, bool)


# =============================================================================
# CLAMP
# =============================================================================


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Ограничение значения в заданном диапазоне.

    Examples:
        >>> clamp(-1.0, 0.0, 1.0)
        0.0
        >>> clamp(2.0, max_value=1.0)
        1.0
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result


def clamp_probability(p: float) -> float:
    """
    Clamp вероятности в [0, 1].

    Выход за границы ожидается только в пределах ошибки округления;
    NaN возвращается без изменений, чтобы
    не маскировать ошибку вычисления.

    Examples:
        >>> clamp_probability(1.0000000000002)
        1.0
        >>> clamp_probability(-1e-17)
        0.0
        >>> clamp_probability(0.25)
        0.25
    """
    if math.isnan(p):
        return p
    return clamp(p, 0.0, 1.0)


# =============================================================================
# ДЕСЯТИЧНОЕ МАСШТАБИРОВАНИЕ
# =============================================================================


def rescale_steps(
    magnitude: float,
    threshold: float = RESCALE_THRESHOLD,
    step: int = RESCALE_STEP,
) -> int:
    """
    Количество шагов 10^step, необходимых для возврата magnitude в
    диапазон [1/threshold, threshold].

    Положительный результат: значение нужно делить на 10^step (overflow).
    Отрицательный результат: значение нужно умножать на 10^step (underflow).

    Для корректной работы требуется 10^step <= threshold², иначе один шаг
    перепрыгивает весь допустимый диапазон.

    Args:
        magnitude: Модуль значения (для матрицы — максимум модулей элементов)
        threshold: Верхняя граница модуля (> 1)
        step: Шаг масштабирования (степень десяти, >= 1)

    Returns:
        Знаковое количество шагов (0 если масштабирование не требуется,
        а также для 0, NaN и Inf)

    Examples:
        >>> rescale_steps(1.0)
        0
        >>> rescale_steps(1e150)
        1
        >>> rescale_steps(1e-150)
        -1
        >>> rescale_steps(1e25, threshold=1e10, step=10)
        2
    """
    if magnitude == 0.0 or not is_valid_float(magnitude):
        return 0

    magnitude = abs(magnitude)
    floor = 1.0 / threshold
    down = 10.0 ** -step
    up = 10.0 ** step
    steps = 0

    while magnitude > threshold:
        magnitude *= down
        steps += 1

    while magnitude < floor:
        magnitude *= up
        steps -= 1

    return steps


def apply_decimal_exponent(value: float, exponent: int, step: int = RESCALE_STEP) -> float:
    """
    Вычисление value × 10^exponent без переполнения промежуточного 10^exponent.

    Множитель применяется порциями по 10^step: 10.0 ** 400 не представим
    в double, но 1e-300 × 10^400 = 1e100 вычисляется корректно.

    Args:
        value: Хранимое значение
        exponent: Десятичная экспонента (scale exponent)
        step: Размер порции (степень десяти)

    Returns:
        value × 10^exponent

    Examples:
        >>> apply_decimal_exponent(2.5, 0)
        2.5
        >>> abs(apply_decimal_exponent(1e-300, 400) / 1e100 - 1.0) < 1e-12
        True
    """
    if value == 0.0 or exponent == 0:
        return value

    sign = 1 if exponent > 0 else -1
    factor = 10.0 ** (sign * step)
    remaining = abs(exponent)
    result = value

    while remaining > step:
        result *= factor
        remaining -= step

    return result * 10.0 ** (sign * remaining)
