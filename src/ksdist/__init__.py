"""
ksdist — exact Kolmogorov-Smirnov distribution.

Marsaglia-Tsang-Wang evaluation of P(D_n <= d) via scaled matrix powers.

Logging: the package logger ``ksdist`` has a NullHandler attached; enable
diagnostics in an application with e.g.

    logging.getLogger("ksdist").setLevel(logging.DEBUG)
"""

import logging

from ksdist.core.domain import EvaluationMethod, KolmogorovEvaluation, PrecisionSettings
from ksdist.core.math import (
    KolmogorovDomainViolation,
    ScaledMatrix,
    evaluate_statistic,
    kolmogorov_cdf,
    kolmogorov_limit_cdf,
    kolmogorov_limit_sf,
    kolmogorov_sf,
    matrix_multiply,
    matrix_power,
)

logger = logging.getLogger("ksdist")
logger.addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "EvaluationMethod",
    "KolmogorovDomainViolation",
    "KolmogorovEvaluation",
    "PrecisionSettings",
    "ScaledMatrix",
    "evaluate_statistic",
    "kolmogorov_cdf",
    "kolmogorov_limit_cdf",
    "kolmogorov_limit_sf",
    "kolmogorov_sf",
    "matrix_multiply",
    "matrix_power",
]
