"""
Marginal Pricing — spot price и post-trade marginal price

Цены в единицах stable token за единицу risky token (arXiv:2012.08040).

    spot(R1)       = K * exp(Φ⁻¹(1 - R1) * σ√τ - σ²τ / 2)
    risky in  (Δ)  = γK * φ(Φ⁻¹(y) - σ√τ) * quantile'(y),   y = 1 - R1 - γΔ
    stable in (Δ)  = K / (γ * φ(Φ⁻¹(y) + σ√τ) * quantile'(y)), y = (R2 + γΔ - k) / K

где γ = 1 - fee применяется к входящему количеству до вычисления
цепочки quantile/CDF. При Δ = 0 и fee = 0 обе marginal price совпадают
со spot price.

КОНВЕНЦИИ (sentinel, не ошибки):
1. Δ < 0 → 0
2. y вне (0, 1): risky in → 0, stable in → +inf
. σ√τ <= 0: spot price → K
"""

import math

from rmm.core.domain.evaluation import DegenerateReason, Evaluation
from rmm.core.math.normal_approximation import APPROXIMATE
from rmm.core.math.normal_distribution import EXACT, NormalDistribution
from rmm.core.math.numerical_safeguards import (
    non_negative,
    safe_exp,
    safe_reciprocal,
)
from rmm.core.math.trading_function import get_proportional_vol


# =============================================================================
# SPOT PRICE
# =============================================================================


def evaluate_spot_price(
    reserve_risky: float,
    strike: float,
    sigma: float,
    tau: float,
    distribution: NormalDistribution = EXACT,
) -> Evaluation:
    """
    Spot price: -dR2/dR1 на кривой с нулевым invariant.

    Args:
        reserve_risky: Risky reserve на единицу ликвидности
        strike: Strike K
        sigma: Implied volatility
        tau: Время до экспирации (годы)
        distribution: Distribution strategy (default: EXACT)

    Returns:
        Evaluation со spot price (+inf при переполнении экспоненты);
        K с причиной NON_POSITIVE_VOL при σ√τ <= 0
    """
    if distribution.requires_open_interval and (reserve_risky <= 0 or reserve_risky >= 1):
        return Evaluation.degenerate(DegenerateReason.RESERVE_OUT_OF_RANGE, 0.0)

    vol = get_proportional_vol(sigma, tau)
    if vol <= 0:
        return Evaluation.degenerate(DegenerateReason.NON_POSITIVE_VOL, strike)

    phi = distribution.inverse_cdf(1.0 - reserve_risky)
    # exp(Φ⁻¹·σ√τ) · exp(-σ²τ/2) одной экспонентой
    exponent = phi * vol - 0.5 * vol * vol
    return Evaluation.valid(strike * safe_exp(exponent))


def get_spot_price(reserve_risky: float, strike: float, sigma: float, tau: float) -> float:
    """Spot price, exact family (legacy float)."""
    return evaluate_spot_price(reserve_risky, strike, sigma, tau, EXACT).to_legacy()


def get_spot_price_approximation(
    reserve_risky: float, strike: float, sigma: float, tau: float
) -> float:
    """Spot price, on-chain approximations (legacy float)."""
    return evaluate_spot_price(reserve_risky, strike, sigma, tau, APPROXIMATE).to_legacy()


# =============================================================================
# MARGINAL PRICE: RISKY IN, STABLE OUT
# =============================================================================


def evaluate_marginal_price_swap_risky_in(
    amount_in: float,
    reserve_risky: float,
    strike: float,
    sigma: float,
    tau: float,
    fee: float,
    distribution: NormalDistribution = EXACT,
) -> Evaluation:
    """
    Marginal price после свопа risky → stable размером amount_in.

    Args:
        amount_in: Количество risky, добавляемое в risky reserve
        reserve_risky: Risky reserve на единицу ликвидности
        strike: Strike K
        sigma: Implied volatility
        tau: Время до экспирации (годы)
        fee: Комиссия (десятичная доля), γ = 1 - fee
        distribution: Distribution strategy (default: EXACT)

    Returns:
        Evaluation с marginal price (stable за risky)
    """
    if not non_negative(amount_in):
        return Evaluation.degenerate(DegenerateReason.NEGATIVE_AMOUNT_IN, 0.0)

    gamma = 1.0 - fee
    probability = 1.0 - reserve_risky - gamma * amount_in
    if probability <= 0 or probability >= 1:
        return Evaluation.degenerate(DegenerateReason.PROBABILITY_OUT_OF_RANGE, 0.0)

    vol = get_proportional_vol(sigma, tau)
    phi = distribution.inverse_cdf(probability)
    density = distribution.pdf(phi - vol)
    price = gamma * strike * density * distribution.quantile_prime(probability)
    return Evaluation.valid(price)


def get_marginal_price_swap_risky_in(
    amount_in: float,
    reserve_risky: float,
    strike: float,
    sigma: float,
    tau: float,
    fee: float,
) -> float:
    """Marginal price risky in, exact family (legacy float)."""
    return evaluate_marginal_price_swap_risky_in(
        amount_in, reserve_risky, strike, sigma, tau, fee, EXACT
    ).to_legacy()


def get_marginal_price_swap_risky_in_approximation(
    amount_in: float,
    reserve_risky: float,
    strike: float,
    sigma: float,
    tau: float,
    fee: float,
) -> float:
    """Marginal price risky in, on-chain approximations (legacy float)."""
    return evaluate_marginal_price_swap_risky_in(
        amount_in, reserve_risky, strike, sigma, tau, fee, APPROXIMATE
    ).to_legacy()


# =============================================================================
# MARGINAL PRICE: STABLE IN, RISKY OUT
# =============================================================================


def evaluate_marginal_price_swap_stable_in(
    amount_in: float,
    invariant: float,
    reserve_stable: float,
    strike: float,
    sigma: float,
    tau: float,
    fee: float,
    distribution: NormalDistribution = EXACT,
) -> Evaluation:
    """
    Marginal price после свопа stable → risky размером amount_in.

    Обратная величина к |dR1/dΔ|: сколько stable платится за единицу
    risky на границе сделки.

    Args:
        amount_in: Количество stable, добавляемое в stable reserve
        invariant: Текущий invariant пула
        reserve_stable: Stable reserve на единицу ликвидности
        strike: Strike K
        sigma: Implied volatility
        tau: Время до экспирации (годы)
        fee: Комиссия (десятичная доля), γ = 1 - fee
        distribution: Distribution strategy (default: EXACT)

    Returns:
        Evaluation с marginal price (stable за risky)
    """
    if not non_negative(amount_in):
        return Evaluation.degenerate(DegenerateReason.NEGATIVE_AMOUNT_IN, 0.0)

    if strike <= 0:
        return Evaluation.degenerate(DegenerateReason.NON_POSITIVE_STRIKE, 0.0)

    gamma = 1.0 - fee
    probability = (reserve_stable + gamma * amount_in - invariant) / strike
    if probability <= 0 or probability >= 1:
        return Evaluation.degenerate(DegenerateReason.PROBABILITY_OUT_OF_RANGE, math.inf)

    vol = get_proportional_vol(sigma, tau)
    phi = distribution.inverse_cdf(probability)
    density = distribution.pdf(phi + vol)
    denominator = gamma * density * distribution.quantile_prime(probability)
    return Evaluation.valid(strike * safe_reciprocal(denominator))


def get_marginal_price_swap_stable_in(
    amount_in: float,
    invariant: float,
    reserve_stable: float,
    strike: float,
    sigma: float,
    tau: float,
    fee: float,
) -> float:
    """Marginal price stable in, exact family (legacy float)."""
    return evaluate_marginal_price_swap_stable_in(
        amount_in, invariant, reserve_stable, strike, sigma, tau, fee, EXACT
    ).to_legacy()


def get_marginal_price_swap_stable_in_approximation(
    amount_in: float,
    invariant: float,
    reserve_stable: float,
    strike: float,
    sigma: float,
    tau: float,
    fee: float,
) -> float:
    """Marginal price stable in, on-chain approximations (legacy float)."""
    return evaluate_marginal_price_swap_stable_in(
        amount_in, invariant, reserve_stable, strike, sigma, tau, fee, APPROXIMATE
    ).to_legacy()
