"""
Normal Distribution — Exact (reference) family

Стандартное нормальное распределение N(0, 1) через scipy.stats.norm:
- cdf(x), pdf(x)
- inverse_cdf(p) (quantile, ppf)
- quantile_prime(p) = d/dp quantile(p) = 1 / pdf(quantile(p))

Используется как "ground truth" для проверки on-chain аппроксимаций
(см. normal_approximation) и как distribution strategy для exact-варианта
trading function.

КОНВЕНЦИИ НА ГРАНИЦАХ (не ошибки):
1. inverse_cdf(p) = -inf при p <= 0
2. inverse_cdf(p) = +inf при p >= 1
3. quantile_prime(0) = quantile_prime(1) = +inf
4. quantile_prime(p) = NaN при p вне [0, 1]
"""

import math
from typing import Protocol

from scipy.stats import norm

from rmm.core.math.numerical_safeguards import safe_reciprocal


# =============================================================================
# DISTRIBUTION STRATEGY
# =============================================================================


class NormalDistribution(Protocol):
    """
    Strategy: набор функций стандартного нормального распределения.

    Trading function и marginal pricing параметризуются этой стратегией,
    поэтому exact и approximate варианты не дублируют формулы.
    """

    name: str

    # True если inverse_cdf не различает p <= 0 и p >= 1 (одинаковый sentinel),
    # и потребители обязаны сами маскировать резервы вне (0, 1)
    requires_open_interval: bool

    # True если cdf и inverse_cdf точно взаимно обратны (есть аналитический
    # inverse trading function)
    has_exact_inverse: bool

    def cdf(self, x: float) -> float: ...

    def pdf(self, x: float) -> float: ...

    def inverse_cdf(self, p: float) -> float: ...

    def quantile_prime(self, p: float) -> float: ...


# =============================================================================
# EXACT FUNCTIONS
# =============================================================================


def std_n_cdf(x: float) -> float:
    """
    Standard normal CDF Φ(x).

    Examples:
        >>> std_n_cdf(0.0)
        0.5
        >>> std_n_cdf(float('-inf'))
        0.0
    """
    return float(norm.cdf(x))


def std_n_pdf(x: float) -> float:
    """
    Standard normal PDF φ(x) = exp(-x²/2) / sqrt(2π).

    Examples:
        >>> std_n_pdf(0.5)
        0.3520653267642995
    """
    return float(norm.pdf(x))


def inverse_std_n_cdf(p: float) -> float:
    """
    Quantile function Φ⁻¹(p).

    Args:
        p: Вероятность

    Returns:
        Φ⁻¹(p) для p ∈ (0, 1); -inf при p <= 0; +inf при p >= 1
    """
    if p >= 1:
        return math.inf
    if p <= 0:
        return -math.inf
    return float(norm.ppf(p))


def quantile_prime(p: float) -> float:
    """
    Производная quantile function: 1 / φ(Φ⁻¹(p)).

    На концах [0, 1] плотность равна нулю, результат +inf.

    Args:
        p: Вероятность

    Returns:
        quantile'(p) > 0; +inf при p ∈ {0, 1}; NaN при p вне [0, 1]
    """
    if p > 1 or p < 0:
        return math.nan
    return safe_reciprocal(std_n_pdf(inverse_std_n_cdf(p)))


# =============================================================================
# STRATEGY
# =============================================================================


class ExactNormalDistribution:
    """Exact family: scipy.stats.norm."""

    name = "exact"
    requires_open_interval = False
    has_exact_inverse = True

    def cdf(self, x: float) -> float:
        return std_n_cdf(x)

    def pdf(self, x: float) -> float:
        return std_n_pdf(x)

    def inverse_cdf(self, p: float) -> float:
        return inverse_std_n_cdf(p)

    def quantile_prime(self, p: float) -> float:
        return quantile_prime(p)


EXACT: NormalDistribution = ExactNormalDistribution()
