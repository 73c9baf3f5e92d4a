"""
Тесты для ReplicationEngine

Проверяет:
1. Делегирование в core.math для exact и approximate family
2. Выбор inverse: аналитический (exact) или bisection (approximate)
3. Snapshot quote: invariant, spot price, degenerate_reasons
4. structlog событие для degenerate котировки
"""

import pytest
from structlog.testing import capture_logs

from rmm.core.domain import DegenerateReason, PoolParameters, PoolReserves
from rmm.core.math import (
    APPROXIMATE,
    CDF_MAX_ERROR,
    EPSILON,
    EXACT,
    SolverConfig,
    get_risky_given_stable,
    get_spot_price,
    get_stable_given_risky,
    get_stable_given_risky_approximation,
)
from rmm.engine import ReplicationEngine


@pytest.fixture
def pool() -> PoolParameters:
    return PoolParameters(strike=10.0, sigma=1.0, tau=1.0)


@pytest.fixture
def expired_pool() -> PoolParameters:
    return PoolParameters(strike=10.0, sigma=1.0, tau=0.0)


class TestEngineConstruction:
    """Тесты конструктора"""

    def test_default_is_exact(self) -> None:
        """По умолчанию exact family и SolverConfig по умолчанию"""
        engine = ReplicationEngine()

        assert engine.flavor == "exact"
        assert engine.config == SolverConfig()

    def test_approximate_flavor(self) -> None:
        """APPROXIMATE → flavor 'approximate'"""
        engine = ReplicationEngine(APPROXIMATE, SolverConfig(epsilon=1e-6))

        assert engine.flavor == "approximate"
        assert engine.config.epsilon == 1e-6


class TestEngineTradingFunction:
    """Тесты trading function через engine"""

    def test_exact_forward_matches_function(self, pool: PoolParameters) -> None:
        """Совпадает с get_stable_given_risky"""
        result = ReplicationEngine().stable_given_risky(pool, 0.3)

        assert result.value == get_stable_given_risky(0.3, 10.0, 1.0, 1.0)

    def test_approximate_forward_matches_function(self, pool: PoolParameters) -> None:
        """Совпадает с get_stable_given_risky_approximation"""
        result = ReplicationEngine(APPROXIMATE).stable_given_risky(pool, 0.3, 0.1)

        assert result.value == get_stable_given_risky_approximation(0.3, 10.0, 1.0, 1.0, 0.1)

    def test_exact_inverse_is_analytic(self, pool: PoolParameters) -> None:
        """Exact family: аналитический inverse"""
        result = ReplicationEngine().risky_given_stable(pool, 3.08537538726)

        assert result.value == get_risky_given_stable(3.08537538726, 10.0, 1.0, 1.0)
        assert result.value == pytest.approx(0.308537538726, rel=1e-9)

    def test_approximate_inverse_uses_solver(self, pool: PoolParameters) -> None:
        """Approximate family: bisection в пределах ошибки CDF"""
        result = ReplicationEngine(APPROXIMATE).risky_given_stable(pool, 3.08537538726)

        assert result.is_valid
        assert result.value == pytest.approx(0.308537538726, abs=CDF_MAX_ERROR)

    def test_approximate_inverse_respects_config(self, pool: PoolParameters) -> None:
        """SolverConfig engine передаётся в solver"""
        engine = ReplicationEngine(APPROXIMATE, SolverConfig(saturation_value=0.75))

        result = engine.risky_given_stable(pool, 50.0)

        assert result.value == 0.75
        assert result.reason == DegenerateReason.ROOT_NOT_BRACKETED

    def test_invariant_zero_on_curve(self, pool: PoolParameters) -> None:
        """Резервы на кривой → invariant 0"""
        engine = ReplicationEngine(APPROXIMATE)
        stable = engine.stable_given_risky(pool, 0.6).value

        result = engine.invariant(pool, PoolReserves(reserve_risky=0.6, reserve_stable=stable))

        assert result.value == 0.0
        assert result.is_valid


class TestEnginePrices:
    """Тесты цен через engine"""

    def test_spot_price(self, pool: PoolParameters) -> None:
        """Совпадает с get_spot_price"""
        assert ReplicationEngine().spot_price(pool, 0.4).value == get_spot_price(
            0.4, 10.0, 1.0, 1.0
        )

    def test_marginal_prices_equal_spot(self, pool: PoolParameters) -> None:
        """Δ = 0, fee = 0 → обе marginal price равны spot"""
        engine = ReplicationEngine()
        stable = engine.stable_given_risky(pool, 0.4).value
        reserves = PoolReserves(reserve_risky=0.4, reserve_stable=stable)
        spot = engine.spot_price(pool, 0.4).value

        assert engine.marginal_price_risky_in(pool, reserves, 0.0, 0.0).value == (
            pytest.approx(spot, rel=1e-9)
        )
        assert engine.marginal_price_stable_in(pool, reserves, 0.0, 0.0).value == (
            pytest.approx(spot, rel=1e-6)
        )

    def test_negative_amount(self, pool: PoolParameters) -> None:
        """Δ < 0 → degenerate"""
        engine = ReplicationEngine()
        reserves = PoolReserves(reserve_risky=0.4, reserve_stable=2.0)

        result = engine.marginal_price_risky_in(pool, reserves, -1.0, 0.003)

        assert result.reason == DegenerateReason.NEGATIVE_AMOUNT_IN


class TestEngineQuote:
    """Тесты snapshot quote"""

    def test_quote_on_curve(self, pool: PoolParameters) -> None:
        """Котировка на кривой без degenerate причин"""
        engine = ReplicationEngine()
        stable = engine.stable_given_risky(pool, 0.5).value

        quote = engine.quote(pool, PoolReserves(reserve_risky=0.5, reserve_stable=stable))

        assert quote.flavor == "exact"
        assert quote.invariant == 0.0
        assert quote.spot_price == pytest.approx(get_spot_price(0.5, 10.0, 1.0, 1.0))
        assert quote.degenerate_reasons == []
        assert not quote.is_degenerate

    def test_expired_pool_quote(self, expired_pool: PoolParameters) -> None:
        """tau = 0 → non_positive_vol, spot = K"""
        quote = ReplicationEngine().quote(
            expired_pool, PoolReserves(reserve_risky=0.5, reserve_stable=2.0)
        )

        assert quote.degenerate_reasons == ["non_positive_vol"]
        assert quote.invariant == 2.0
        assert quote.spot_price == 10.0

    def test_expired_pool_spot_tagged(self, expired_pool: PoolParameters) -> None:
        """Spot price истёкшего пула помечен NON_POSITIVE_VOL и на границе резерва"""
        result = ReplicationEngine().spot_price(expired_pool, 0.0)

        assert result.value == 10.0
        assert result.reason == DegenerateReason.NON_POSITIVE_VOL

    def test_reasons_deduplicated(self, pool: PoolParameters) -> None:
        """Одна причина от invariant и spot попадает в список один раз"""
        quote = ReplicationEngine(APPROXIMATE).quote(
            pool, PoolReserves(reserve_risky=1.0, reserve_stable=0.0)
        )

        assert quote.degenerate_reasons == ["reserve_out_of_range"]
        assert quote.spot_price == 0.0

    def test_degenerate_quote_logged(self, expired_pool: PoolParameters) -> None:
        """Degenerate котировка логируется на уровне debug"""
        with capture_logs() as logs:
            ReplicationEngine().quote(
                expired_pool, PoolReserves(reserve_risky=0.5, reserve_stable=2.0)
            )

        assert len(logs) == 1
        assert logs[0]["event"] == "replication_quote_degenerate"
        assert logs[0]["log_level"] == "debug"
        assert logs[0]["reasons"] == ["non_positive_vol"]

    def test_valid_quote_not_logged(self, pool: PoolParameters) -> None:
        """Котировка без причин не логируется"""
        engine = ReplicationEngine()
        stable = engine.stable_given_risky(pool, 0.5).value

        with capture_logs() as logs:
            engine.quote(pool, PoolReserves(reserve_risky=0.5, reserve_stable=stable))

        assert logs == []


def test_round_trip_through_engine(pool: PoolParameters) -> None:
    """forward → inverse через engine для обеих family"""
    for distribution, tolerance in ((EXACT, 1e-9), (APPROXIMATE, EPSILON)):
        engine = ReplicationEngine(distribution)
        stable = engine.stable_given_risky(pool, 0.45).value

        assert engine.risky_given_stable(pool, stable).value == pytest.approx(0.45, abs=tolerance)
