"""
Core math modules для ksdist

Матричное ядро и точное распределение Колмогорова–Смирнова
с гарантией численной стабильности.
"""

# Numerical Safeguards
from ksdist.core.math.numerical_safeguards import (
    apply_decimal_exponent,
    clamp,
    clamp_probability,
    is_integral,
    is_valid_float,
    rescale_steps,
)

# Matrix Ops
from ksdist.core.math.matrix_ops import (
    MatrixDomainError,
    MatrixShapeError,
    ScaledMatrix,
    as_square_matrix,
    identity_matrix,
    matrix_multiply,
    matrix_power,
)

# Asymptotic distribution
from ksdist.core.math.asymptotic import (
    kolmogorov_limit_cdf,
    kolmogorov_limit_sf,
    right_tail_approximation,
)

# Kolmogorov distribution
from ksdist.core.math.kolmogorov import (
    KolmogorovDomainViolation,
    build_durbin_matrix,
    evaluate_statistic,
    kolmogorov_cdf,
    kolmogorov_sf,
)

__all__ = [
    # Numerical Safeguards
    "apply_decimal_exponent",
    "clamp",
    "clamp_probability",
    "is_integral",
    "is_valid_float",
    "rescale_steps",
    # Matrix Ops — Exceptions
    "MatrixDomainError",
    "MatrixShapeError",
    # Matrix Ops — Types
    "ScaledMatrix",
    # Matrix Ops — Functions
    "as_square_matrix",
    "identity_matrix",
    "matrix_multiply",
    "matrix_power",
    # Asymptotic
    "kolmogorov_limit_cdf",
    "kolmogorov_limit_sf",
    "right_tail_approximation",
    # Kolmogorov — Exceptions
    "KolmogorovDomainViolation",
    # Kolmogorov — Functions
    "build_durbin_matrix",
    "evaluate_statistic",
    "kolmogorov_cdf",
    "kolmogorov_sf",
]
