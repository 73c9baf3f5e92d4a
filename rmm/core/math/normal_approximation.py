"""
Normal Distribution — Approximate (on-chain) family

Рациональные/полиномиальные аппроксимации N(0, 1), совпадающие с
fixed-point реализацией в смарт-контракте:

- CDF: Abramowitz & Stegun 7.1.26 для erf,
  Φ(x) = 0.5 * (1 + erf((x - mean) / sqrt(2 * variance)))
- Inverse CDF (Voutier, arXiv:1002.0567), выбор ветки по p:
    central  0.025 <= p <= 0.975   q * (a2 + (a1*r + a0) / (r² + b1*r + b0)),
                                   q = p - 0.5, r = q²
    low tail p < 0.025             c3*r + c2 + (c1*r + c0) / (r² + d1*r + d0),
                                   r = sqrt(log(1 / p²))
    high tail p > 0.975            -tail(1 - p)
- PDF: точная формула плотности (без аппроксимации)
- quantile_prime(p) = 1 / pdf(inverse_cdf(p)) в рамках этой же family

МАКСИМАЛЬНЫЕ ОШИБКИ (используются как толерантности тестов):
    CDF                 3.15e-3
    central inverse CDF 1.16e-4
    tail inverse CDF    2.458e-5

ВНИМАНИЕ: inverse_cdf возвращает +inf и при p <= 0, и при p >= 1
(в отличие от exact family, где p <= 0 → -inf). Потребители маскируют
резервы вне (0, 1) до вызова (requires_open_interval = True).
"""

import math
from typing import Final

from rmm.core.math.normal_distribution import NormalDistribution
from rmm.core.math.numerical_safeguards import safe_reciprocal

# =============================================================================
# ERROR BOUNDS
# =============================================================================

CDF_MAX_ERROR: Final[float] = 3.15e-3
CENTRAL_INVERSE_CDF_MAX_ERROR: Final[float] = 1.16e-4
TAIL_INVERSE_CDF_MAX_ERROR: Final[float] = 2.458e-5

# =============================================================================
# BRANCH CUTOFFS
# =============================================================================

LOW_TAIL: Final[float] = 0.025
HIGH_TAIL: Final[float] = 0.975

# =============================================================================
# ERF COEFFICIENTS (A&S 7.1.26)
# =============================================================================

ERF_P: Final[float] = 0.3275911
ERF_A1: Final[float] = 0.254829592
ERF_A2: Final[float] = -0.284496736
ERF_A3: Final[float] = 1.421413741
ERF_A4: Final[float] = -1.453152027
ERF_A5: Final[float] = 1.061405429

# =============================================================================
# INVERSE CDF COEFFICIENTS
# =============================================================================

# Central region
CENTRAL_A0: Final[float] = 0.151015506
CENTRAL_A1: Final[float] = -0.530357263
CENTRAL_A2: Final[float] = 1.365020123
CENTRAL_B0: Final[float] = 0.132089632
CENTRAL_B1: Final[float] = -0.760732499

# Tail region
TAIL_C0: Final[float] = 16.682320830719986527
TAIL_C1: Final[float] = 4.120411523939115059
TAIL_C2: Final[float] = 0.029814187308200211
TAIL_C3: Final[float] = -1.000182518730158122
TAIL_D0: Final[float] = 7.173787663925508066
TAIL_D1: Final[float] = 8.759693508958633869

_SQRT_2PI: Final[float] = math.sqrt(2.0 * math.pi)


# =============================================================================
# CDF
# =============================================================================


def solidity_erf(x: float) -> float:
    """
    Error function erf(x), A&S 7.1.26 (|ошибка| <= 1.5e-7).

    Args:
        x: Аргумент (может быть ±inf)

    Returns:
        erf(x) ∈ [-1, 1]
    """
    # erf(-x) = -erf(x)
    sgn = 1.0 if x >= 0 else -1.0
    x = abs(x)

    t = 1.0 / (1.0 + ERF_P * x)
    poly = ((((ERF_A5 * t + ERF_A4) * t + ERF_A3) * t + ERF_A2) * t + ERF_A1) * t
    y = 1.0 - poly * math.exp(-x * x)
    return sgn * y


def solidity_cdf(x: float, mean: float, variance: float) -> float:
    """
    CDF нормального распределения N(mean, variance) через solidity_erf.

    Args:
        x: Аргумент
        mean: Матожидание
        variance: Дисперсия (> 0)

    Returns:
        Φ((x - mean) / sqrt(variance))
    """
    return 0.5 * (1.0 + solidity_erf((x - mean) / math.sqrt(2.0 * variance)))


def get_cdf_solidity(x: float) -> float:
    """
    Standard normal CDF (on-chain approximation).

    Examples:
        >>> abs(get_cdf_solidity(0.0) - 0.5) < 1e-8
        True
    """
    return solidity_cdf(x, 0.0, 1.0)


# =============================================================================
# INVERSE CDF
# =============================================================================


def central_inverse_cdf_solidity(p: float) -> float:
    """Central region 0.025 <= p <= 0.975, max error 1.16e-4."""
    q = p - 0.5
    r = q * q
    numerator = CENTRAL_A1 * r + CENTRAL_A0
    denominator = r * r + CENTRAL_B1 * r + CENTRAL_B0
    return q * (CENTRAL_A2 + numerator / denominator)


def tail_inverse_cdf_solidity(p: float) -> float:
    """Lower tail 0 < p < 0.025, max error 2.458e-5."""
    # log(1 / p²) = -2 log(p), без underflow p² при малых p
    r = math.sqrt(-2.0 * math.log(p))
    numerator = TAIL_C1 * r + TAIL_C0
    denominator = r * r + TAIL_D1 * r + TAIL_D0
    return TAIL_C3 * r + TAIL_C2 + numerator / denominator


def get_inverse_cdf_solidity(p: float) -> float:
    """
    Standard normal quantile (on-chain approximation).

    Args:
        p: Вероятность

    Returns:
        Φ⁻¹(p) с ветвлением по региону; +inf при p <= 0 или p >= 1

    Examples:
        >>> get_inverse_cdf_solidity(0.5)
        0.0
        >>> get_inverse_cdf_solidity(0.0)
        inf
    """
    if p >= 1 or p <= 0:
        return math.inf

    if LOW_TAIL <= p <= HIGH_TAIL:
        return central_inverse_cdf_solidity(p)

    if p < LOW_TAIL:
        return tail_inverse_cdf_solidity(p)

    # Симметрия: Φ⁻¹(p) = -Φ⁻¹(1 - p)
    return -tail_inverse_cdf_solidity(1.0 - p)


# =============================================================================
# PDF / QUANTILE PRIME
# =============================================================================


def get_pdf_solidity(x: float) -> float:
    """Standard normal PDF, формула плотности при mean=0, variance=1."""
    return math.exp(-0.5 * x * x) / _SQRT_2PI


def quantile_prime_solidity(p: float) -> float:
    """
    1 / pdf(inverse_cdf(p)) в approximate family.

    На концах (0, 1) inverse_cdf = +inf, плотность 0, результат +inf.
    Вне [0, 1] результат NaN, как в exact family.
    """
    if p > 1 or p < 0:
        return math.nan
    return safe_reciprocal(get_pdf_solidity(get_inverse_cdf_solidity(p)))


# =============================================================================
# STRATEGY
# =============================================================================


class ApproximateNormalDistribution:
    """Approximate family: формулы смарт-контракта."""

    name = "approximate"
    requires_open_interval = True
    has_exact_inverse = False

    def cdf(self, x: float) -> float:
        return get_cdf_solidity(x)

    def pdf(self, x: float) -> float:
        return get_pdf_solidity(x)

    def inverse_cdf(self, p: float) -> float:
        return get_inverse_cdf_solidity(p)

    def quantile_prime(self, p: float) -> float:
        return quantile_prime_solidity(p)


APPROXIMATE: NormalDistribution = ApproximateNormalDistribution()
