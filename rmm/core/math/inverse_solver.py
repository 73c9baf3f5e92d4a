"""
Approximate Inverse Solver — risky reserve по stable reserve

Approximate CDF и approximate inverse CDF — две независимые аппроксимации
и не являются точными взаимно обратными функциями. Поэтому у
get_stable_given_risky_approximation нет аналитического inverse, и
risky reserve находится численно: bisection по invariant

    f(R1) = R2 - forward_approx(R1)

на интервале [MAX_PRECISION, 1 - MAX_PRECISION]. Forward монотонен по R1,
поэтому при смене знака f на концах корень внутри единственный.

Без смены знака возвращается saturation value 1 (пул полностью в risky)
с DegenerateReason.ROOT_NOT_BRACKETED.
"""

from dataclasses import dataclass
from typing import Final

import structlog

from rmm.core.domain.evaluation import DegenerateReason, Evaluation
from rmm.core.math.normal_approximation import APPROXIMATE
from rmm.core.math.numerical_safeguards import (
    same_sign,
    validate_in_range,
    validate_positive,
)
from rmm.core.math.root_finders import EPSILON, bisection
from rmm.core.math.trading_function import evaluate_invariant

logger = structlog.get_logger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

# Отступ от сингулярных концов [0, 1] для вычисления распределения
MAX_PRECISION: Final[float] = 1e-6

# Максимальный risky reserve на единицу ликвидности (saturation value)
MAX_RISKY: Final[float] = 1.0


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class SolverConfig:
    """Конфигурация inverse solver.

    Attributes:
        epsilon: Ширина интервала для остановки bisection
        max_precision: Отступ bracket от 0 и MAX_RISKY
        saturation_value: Значение при отсутствии смены знака
    """

    epsilon: float = EPSILON
    max_precision: float = MAX_PRECISION
    saturation_value: float = MAX_RISKY

    def __post_init__(self):
        validate_positive(self.epsilon, "epsilon")
        validate_positive(self.max_precision, "max_precision")
        validate_in_range(self.max_precision, "max_precision", max_value=MAX_RISKY / 2)


# =============================================================================
# SOLVER
# =============================================================================


def evaluate_risky_given_stable_approximation(
    reserve_stable: float,
    strike: float,
    sigma: float,
    tau: float,
    invariant_last: float = 0.0,
    config: SolverConfig | None = None,
) -> Evaluation:
    """
    Численный inverse approximate trading function.

    Args:
        reserve_stable: Stable reserve на единицу ликвидности
        strike: Strike K
        sigma: Implied volatility
        tau: Время до экспирации (годы)
        invariant_last: Предыдущий invariant с тем же tau
        config: Конфигурация solver (optional, default SolverConfig())

    Returns:
        Evaluation с risky reserve ∈ [max_precision, 1 - max_precision],
        либо degenerate ROOT_NOT_BRACKETED с saturation value
    """
    config = config or SolverConfig()

    def invariant_of(reserve_risky: float) -> float:
        return evaluate_invariant(
            reserve_risky,
            reserve_stable,
            strike,
            sigma,
            tau,
            invariant_last,
            APPROXIMATE,
        ).value

    lo = config.max_precision
    hi = MAX_RISKY - config.max_precision
    f_lo = invariant_of(lo)
    f_hi = invariant_of(hi)

    if same_sign(f_lo, f_hi):
        logger.warning(
            "inverse_solver_saturated",
            reserve_stable=reserve_stable,
            strike=strike,
            sigma=sigma,
            tau=tau,
            f_lo=f_lo,
            f_hi=f_hi,
            saturation_value=config.saturation_value,
        )
        return Evaluation.degenerate(
            DegenerateReason.ROOT_NOT_BRACKETED, config.saturation_value
        )

    reserve_risky = bisection(invariant_of, lo, hi, epsilon=config.epsilon)
    return Evaluation.valid(reserve_risky)


def get_risky_given_stable_approximation(
    reserve_stable: float,
    strike: float,
    sigma: float,
    tau: float,
    invariant_last: float = 0.0,
) -> float:
    """Inverse trading function, on-chain approximations (legacy float)."""
    return evaluate_risky_given_stable_approximation(
        reserve_stable, strike, sigma, tau, invariant_last
    ).to_legacy()
