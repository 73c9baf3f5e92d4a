"""
Trading Function — Covered-call replication curve

Связь резервов пула (на единицу ликвидности) для covered call RMM
(см. arXiv:2012.08040):

    R2 = K * Φ(Φ⁻¹(1 - R1) - σ√τ) + k          (forward)
    R1 = 1 - Φ(Φ⁻¹((R2 - k) / K) + σ√τ)        (inverse, только exact family)
    invariant = R2 - forward(R1)

где R1 — risky reserve, R2 — stable reserve, K — strike, k — invariant_last.

Forward функция параметризуется distribution strategy (EXACT / APPROXIMATE).
Аналитический inverse верен только когда cdf и inverse_cdf — точные
взаимно обратные функции; для approximate family см. inverse_solver.

КОНВЕНЦИИ (sentinel, не ошибки):
1. σ√τ <= 0 → 0
2. approximate family: R1 <= 0 или R1 >= 1 → 0
3. exact family: R1 = 0 → K + k, R1 = 1 → 0 (через ±inf из inverse_cdf)
"""

import math

from rmm.core.domain.evaluation import DegenerateReason, Evaluation
from rmm.core.math.normal_approximation import APPROXIMATE
from rmm.core.math.normal_distribution import EXACT, NormalDistribution


# =============================================================================
# HELPERS
# =============================================================================


def get_proportional_vol(sigma: float, tau: float) -> float:
    """
    Proportional volatility σ√τ.

    Args:
        sigma: Implied volatility (десятичная доля)
        tau: Время до экспирации (годы)

    Returns:
        sigma * sqrt(tau); 0 при tau <= 0 (истёкший пул)

    Examples:
        >>> get_proportional_vol(0.5, 1.0)
        0.5
        >>> get_proportional_vol(0.5, 0.0)
        0.0
    """
    if tau <= 0:
        return 0.0
    return sigma * math.sqrt(tau)


# =============================================================================
# FORWARD: STABLE GIVEN RISKY
# =============================================================================


def evaluate_stable_given_risky(
    reserve_risky: float,
    strike: float,
    sigma: float,
    tau: float,
    invariant_last: float = 0.0,
    distribution: NormalDistribution = EXACT,
) -> Evaluation:
    """
    Forward trading function: stable reserve для заданного risky reserve.

    R2 = K * Φ(Φ⁻¹(1 - R1) - σ√τ) + invariant_last

    Args:
        reserve_risky: Risky reserve на единицу ликвидности
        strike: Strike K
        sigma: Implied volatility
        tau: Время до экспирации (годы)
        invariant_last: Предыдущий invariant с тем же tau
        distribution: Distribution strategy (default: EXACT)

    Returns:
        Evaluation со stable reserve, либо degenerate с sentinel 0
    """
    if distribution.requires_open_interval and (reserve_risky <= 0 or reserve_risky >= 1):
        return Evaluation.degenerate(DegenerateReason.RESERVE_OUT_OF_RANGE, 0.0)

    vol = get_proportional_vol(sigma, tau)
    if vol <= 0:
        return Evaluation.degenerate(DegenerateReason.NON_POSITIVE_VOL, 0.0)

    phi = distribution.inverse_cdf(1.0 - reserve_risky)
    reserve_stable = strike * distribution.cdf(phi - vol) + invariant_last
    return Evaluation.valid(reserve_stable)


def get_stable_given_risky(
    reserve_risky: float,
    strike: float,
    sigma: float,
    tau: float,
    invariant_last: float = 0.0,
) -> float:
    """Forward trading function, exact family (legacy float)."""
    return evaluate_stable_given_risky(
        reserve_risky, strike, sigma, tau, invariant_last, EXACT
    ).to_legacy()


def get_stable_given_risky_approximation(
    reserve_risky: float,
    strike: float,
    sigma: float,
    tau: float,
    invariant_last: float = 0.0,
) -> float:
    """Forward trading function, on-chain approximations (legacy float)."""
    return evaluate_stable_given_risky(
        reserve_risky, strike, sigma, tau, invariant_last, APPROXIMATE
    ).to_legacy()


# =============================================================================
# INVERSE: RISKY GIVEN STABLE (EXACT ONLY)
# =============================================================================


def evaluate_risky_given_stable(
    reserve_stable: float,
    strike: float,
    sigma: float,
    tau: float,
    invariant_last: float = 0.0,
) -> Evaluation:
    """
    Аналитический inverse trading function (exact family).

    R1 = 1 - Φ(Φ⁻¹((R2 - invariant_last) / K) + σ√τ)

    Args:
        reserve_stable: Stable reserve на единицу ликвидности
        strike: Strike K
        sigma: Implied volatility
        tau: Время до экспирации (годы)
        invariant_last: Предыдущий invariant с тем же tau

    Returns:
        Evaluation с risky reserve, либо degenerate с sentinel 0
    """
    vol = get_proportional_vol(sigma, tau)
    if vol <= 0:
        return Evaluation.degenerate(DegenerateReason.NON_POSITIVE_VOL, 0.0)

    if strike <= 0:
        return Evaluation.degenerate(DegenerateReason.NON_POSITIVE_STRIKE, 0.0)

    phi = EXACT.inverse_cdf((reserve_stable - invariant_last) / strike)
    reserve_risky = 1.0 - EXACT.cdf(phi + vol)
    return Evaluation.valid(reserve_risky)


def get_risky_given_stable(
    reserve_stable: float,
    strike: float,
    sigma: float,
    tau: float,
    invariant_last: float = 0.0,
) -> float:
    """Inverse trading function, exact family (legacy float)."""
    return evaluate_risky_given_stable(
        reserve_stable, strike, sigma, tau, invariant_last
    ).to_legacy()


# =============================================================================
# INVARIANT
# =============================================================================


def evaluate_invariant(
    reserve_risky: float,
    reserve_stable: float,
    strike: float,
    sigma: float,
    tau: float,
    invariant_last: float = 0.0,
    distribution: NormalDistribution = EXACT,
) -> Evaluation:
    """
    Invariant = R2 - forward(R1).

    0 на идеальной кривой; ненулевое значение — дрейф (fees, ошибка
    аппроксимации). Причина degenerate наследуется от forward функции,
    значение всегда R2 - legacy forward.
    """
    forward = evaluate_stable_given_risky(
        reserve_risky, strike, sigma, tau, invariant_last, distribution
    )
    return Evaluation(value=reserve_stable - forward.value, reason=forward.reason)


def calc_invariant(
    reserve_risky: float,
    reserve_stable: float,
    strike: float,
    sigma: float,
    tau: float,
    invariant_last: float = 0.0,
) -> float:
    """Invariant, exact family (legacy float)."""
    return evaluate_invariant(
        reserve_risky, reserve_stable, strike, sigma, tau, invariant_last, EXACT
    ).to_legacy()


def calc_invariant_approximation(
    reserve_risky: float,
    reserve_stable: float,
    strike: float,
    sigma: float,
    tau: float,
    invariant_last: float = 0.0,
) -> float:
    """Invariant, on-chain approximations (legacy float)."""
    return evaluate_invariant(
        reserve_risky, reserve_stable, strike, sigma, tau, invariant_last, APPROXIMATE
    ).to_legacy()
