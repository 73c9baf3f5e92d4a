"""
Replication Engine — фасад над replication math для одной distribution family

Связывает value objects (PoolParameters, PoolReserves) с чистыми функциями
core.math и возвращает Evaluation/PoolQuote. Состояния между вызовами не
хранит: экземпляр — это только выбор distribution strategy и SolverConfig.

Inverse trading function выбирается по family:
- exact: аналитический inverse (cdf и inverse_cdf взаимно обратны)
- approximate: bisection по invariant (inverse_solver)
"""

import structlog

from rmm.core.domain.evaluation import Evaluation
from rmm.core.domain.pool import PoolParameters, PoolQuote, PoolReserves
from rmm.core.math.inverse_solver import (
    SolverConfig,
    evaluate_risky_given_stable_approximation,
)
from rmm.core.math.marginal_pricing import (
    evaluate_marginal_price_swap_risky_in,
    evaluate_marginal_price_swap_stable_in,
    evaluate_spot_price,
)
from rmm.core.math.normal_distribution import EXACT, NormalDistribution
from rmm.core.math.trading_function import (
    evaluate_invariant,
    evaluate_risky_given_stable,
    evaluate_stable_given_risky,
)

logger = structlog.get_logger(__name__)


class ReplicationEngine:
    """Replication math для covered-call пула с фиксированной distribution family.

    Все методы — чистые функции от аргументов; degenerate входы
    возвращают Evaluation с reason, исключения не поднимаются.
    """

    def __init__(
        self,
        distribution: NormalDistribution = EXACT,
        config: SolverConfig | None = None,
    ):
        """Инициализация engine.

        Args:
            distribution: Distribution strategy (EXACT или APPROXIMATE)
            config: Конфигурация inverse solver (опционально, используется default)
        """
        self.distribution = distribution
        self.config = config or SolverConfig()

    @property
    def flavor(self) -> str:
        return self.distribution.name

    # -------------------------------------------------------------------------
    # Trading function
    # -------------------------------------------------------------------------

    def stable_given_risky(
        self,
        pool: PoolParameters,
        reserve_risky: float,
        invariant_last: float = 0.0,
    ) -> Evaluation:
        return evaluate_stable_given_risky(
            reserve_risky,
            pool.strike,
            pool.sigma,
            pool.tau,
            invariant_last,
            self.distribution,
        )

    def risky_given_stable(
        self,
        pool: PoolParameters,
        reserve_stable: float,
        invariant_last: float = 0.0,
    ) -> Evaluation:
        if not self.distribution.has_exact_inverse:
            return evaluate_risky_given_stable_approximation(
                reserve_stable,
                pool.strike,
                pool.sigma,
                pool.tau,
                invariant_last,
                self.config,
            )
        return evaluate_risky_given_stable(
            reserve_stable, pool.strike, pool.sigma, pool.tau, invariant_last
        )

    def invariant(self, pool: PoolParameters, reserves: PoolReserves) -> Evaluation:
        return evaluate_invariant(
            reserves.reserve_risky,
            reserves.reserve_stable,
            pool.strike,
            pool.sigma,
            pool.tau,
            reserves.invariant_last,
            self.distribution,
        )

    # -------------------------------------------------------------------------
    # Prices
    # -------------------------------------------------------------------------

    def spot_price(self, pool: PoolParameters, reserve_risky: float) -> Evaluation:
        return evaluate_spot_price(
            reserve_risky, pool.strike, pool.sigma, pool.tau, self.distribution
        )

    def marginal_price_risky_in(
        self,
        pool: PoolParameters,
        reserves: PoolReserves,
        amount_in: float,
        fee: float,
    ) -> Evaluation:
        return evaluate_marginal_price_swap_risky_in(
            amount_in,
            reserves.reserve_risky,
            pool.strike,
            pool.sigma,
            pool.tau,
            fee,
            self.distribution,
        )

    def marginal_price_stable_in(
        self,
        pool: PoolParameters,
        reserves: PoolReserves,
        amount_in: float,
        fee: float,
        invariant: float = 0.0,
    ) -> Evaluation:
        return evaluate_marginal_price_swap_stable_in(
            amount_in,
            invariant,
            reserves.reserve_stable,
            pool.strike,
            pool.sigma,
            pool.tau,
            fee,
            self.distribution,
        )

    # -------------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------------

    def quote(self, pool: PoolParameters, reserves: PoolReserves) -> PoolQuote:
        """
        Снапшот пула: invariant и spot price.

        Args:
            pool: Параметры пула
            reserves: Резервы пула

        Returns:
            PoolQuote; degenerate_reasons содержит причины sentinel-значений
            (без повторов, в порядке вычисления)
        """
        invariant = self.invariant(pool, reserves)
        spot = self.spot_price(pool, reserves.reserve_risky)

        reasons: list[str] = []
        for evaluation in (invariant, spot):
            if evaluation.reason is not None and evaluation.reason.value not in reasons:
                reasons.append(evaluation.reason.value)

        if reasons:
            logger.debug(
                "replication_quote_degenerate",
                flavor=self.flavor,
                reasons=reasons,
                reserve_risky=reserves.reserve_risky,
                reserve_stable=reserves.reserve_stable,
            )

        return PoolQuote(
            flavor=self.flavor,
            reserve_risky=reserves.reserve_risky,
            reserve_stable=reserves.reserve_stable,
            invariant=invariant.value,
            spot_price=spot.value,
            degenerate_reasons=reasons,
        )
