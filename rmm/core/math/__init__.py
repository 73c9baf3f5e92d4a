"""
Core math modules для RMM

Математические примитивы replication math: нормальное распределение
(exact и approximate), trading function, численный inverse, цены.
"""

# Numerical Safeguards
from rmm.core.math.numerical_safeguards import (
    EPS_CALC,
    is_valid_float,
    non_negative,
    safe_exp,
    safe_reciprocal,
    same_sign,
    sign,
    validate_in_range,
    validate_positive,
)

# Normal Distribution: Exact
from rmm.core.math.normal_distribution import (
    EXACT,
    ExactNormalDistribution,
    NormalDistribution,
    inverse_std_n_cdf,
    quantile_prime,
    std_n_cdf,
    std_n_pdf,
)

# Normal Distribution: Approximate
from rmm.core.math.normal_approximation import (
    APPROXIMATE,
    CDF_MAX_ERROR,
    CENTRAL_INVERSE_CDF_MAX_ERROR,
    HIGH_TAIL,
    LOW_TAIL,
    TAIL_INVERSE_CDF_MAX_ERROR,
    ApproximateNormalDistribution,
    central_inverse_cdf_solidity,
    get_cdf_solidity,
    get_inverse_cdf_solidity,
    get_pdf_solidity,
    quantile_prime_solidity,
    solidity_cdf,
    solidity_erf,
    tail_inverse_cdf_solidity,
)

# Root Finders
from rmm.core.math.root_finders import (
    EPSILON,
    RootNotBracketedError,
    bisection,
    newton_method,
)

# Trading Function
from rmm.core.math.trading_function import (
    calc_invariant,
    calc_invariant_approximation,
    evaluate_invariant,
    evaluate_risky_given_stable,
    evaluate_stable_given_risky,
    get_proportional_vol,
    get_risky_given_stable,
    get_stable_given_risky,
    get_stable_given_risky_approximation,
)

# Approximate Inverse Solver
from rmm.core.math.inverse_solver import (
    MAX_PRECISION,
    MAX_RISKY,
    SolverConfig,
    evaluate_risky_given_stable_approximation,
    get_risky_given_stable_approximation,
)

# Marginal Pricing
from rmm.core.math.marginal_pricing import (
    evaluate_marginal_price_swap_risky_in,
    evaluate_marginal_price_swap_stable_in,
    evaluate_spot_price,
    get_marginal_price_swap_risky_in,
    get_marginal_price_swap_risky_in_approximation,
    get_marginal_price_swap_stable_in,
    get_marginal_price_swap_stable_in_approximation,
    get_spot_price,
    get_spot_price_approximation,
)

__all__ = [
    # Numerical Safeguards
    "EPS_CALC",
    "is_valid_float",
    "non_negative",
    "safe_exp",
    "safe_reciprocal",
    "same_sign",
    "sign",
    "validate_in_range",
    "validate_positive",
    # Normal Distribution: Exact
    "EXACT",
    "ExactNormalDistribution",
    "NormalDistribution",
    "inverse_std_n_cdf",
    "quantile_prime",
    "std_n_cdf",
    "std_n_pdf",
    # Normal Distribution: Approximate
    "APPROXIMATE",
    "CDF_MAX_ERROR",
    "CENTRAL_INVERSE_CDF_MAX_ERROR",
    "HIGH_TAIL",
    "LOW_TAIL",
    "TAIL_INVERSE_CDF_MAX_ERROR",
    "ApproximateNormalDistribution",
    "central_inverse_cdf_solidity",
    "get_cdf_solidity",
    "get_inverse_cdf_solidity",
    "get_pdf_solidity",
    "quantile_prime_solidity",
    "solidity_cdf",
    "solidity_erf",
    "tail_inverse_cdf_solidity",
    # Root Finders
    "EPSILON",
    "RootNotBracketedError",
    "bisection",
    "newton_method",
    # Trading Function
    "calc_invariant",
    "calc_invariant_approximation",
    "evaluate_invariant",
    "evaluate_risky_given_stable",
    "evaluate_stable_given_risky",
    "get_proportional_vol",
    "get_risky_given_stable",
    "get_stable_given_risky",
    "get_stable_given_risky_approximation",
    # Approximate Inverse Solver
    "MAX_PRECISION",
    "MAX_RISKY",
    "SolverConfig",
    "evaluate_risky_given_stable_approximation",
    "get_risky_given_stable_approximation",
    # Marginal Pricing
    "evaluate_marginal_price_swap_risky_in",
    "evaluate_marginal_price_swap_stable_in",
    "evaluate_spot_price",
    "get_marginal_price_swap_risky_in",
    "get_marginal_price_swap_risky_in_approximation",
    "get_marginal_price_swap_stable_in",
    "get_marginal_price_swap_stable_in_approximation",
    "get_spot_price",
    "get_spot_price_approximation",
]
