"""
Тесты для Normal Approximation (approximate family, формулы смарт-контракта)

Проверяет:
1. Точность CDF относительно exact (scipy) в пределах CDF_MAX_ERROR
2. Точность inverse CDF в central и tail регионах
3. Ветвление по регионам и симметрию
4. Sentinel +inf на обоих концах [0, 1]
5. Distribution strategy (APPROXIMATE)
"""

import math

import pytest

from rmm.core.math.normal_approximation import (
    APPROXIMATE,
    CDF_MAX_ERROR,
    CENTRAL_INVERSE_CDF_MAX_ERROR,
    HIGH_TAIL,
    LOW_TAIL,
    TAIL_INVERSE_CDF_MAX_ERROR,
    central_inverse_cdf_solidity,
    get_cdf_solidity,
    get_inverse_cdf_solidity,
    get_pdf_solidity,
    quantile_prime_solidity,
    solidity_cdf,
    solidity_erf,
    tail_inverse_cdf_solidity,
)
from rmm.core.math.normal_distribution import std_n_cdf, std_n_pdf

# =============================================================================
# ТЕСТЫ CDF
# =============================================================================


class TestApproximateCdf:
    """Тесты get_cdf_solidity"""

    def test_known_points(self) -> None:
        """Φ(0), Φ(±1) в пределах CDF_MAX_ERROR"""
        assert get_cdf_solidity(0.0) == pytest.approx(0.5, abs=CDF_MAX_ERROR)
        assert get_cdf_solidity(1.0) == pytest.approx(0.8413447460685429, abs=CDF_MAX_ERROR)
        assert get_cdf_solidity(-1.0) == pytest.approx(0.15865525393145707, abs=CDF_MAX_ERROR)

    def test_matches_exact_on_grid(self) -> None:
        """Отклонение от scipy не превышает CDF_MAX_ERROR на сетке [-5, 5]"""
        for i in range(-50, 51):
            x = i / 10.0
            assert abs(get_cdf_solidity(x) - std_n_cdf(x)) <= CDF_MAX_ERROR

    def test_infinite_arguments(self) -> None:
        """Φ(+inf) = 1, Φ(-inf) = 0"""
        assert get_cdf_solidity(math.inf) == 1.0
        assert get_cdf_solidity(-math.inf) == 0.0

    def test_erf_is_odd(self) -> None:
        """erf(-x) = -erf(x)"""
        for x in (0.1, 0.5, 2.0):
            assert solidity_erf(-x) == -solidity_erf(x)

    def test_erf_near_zero(self) -> None:
        """erf(0) ≈ 0 (сумма коэффициентов A&S 7.1.26 ≈ 1)"""
        assert solidity_erf(0.0) == pytest.approx(0.0, abs=1e-8)

    def test_shifted_distribution(self) -> None:
        """solidity_cdf в точке mean равен 0.5"""
        assert solidity_cdf(3.0, 3.0, 4.0) == pytest.approx(0.5, abs=1e-8)
        assert solidity_cdf(5.0, 3.0, 4.0) == pytest.approx(std_n_cdf(1.0), abs=CDF_MAX_ERROR)


# =============================================================================
# ТЕСТЫ INVERSE CDF
# =============================================================================


class TestApproximateInverseCdf:
    """Тесты get_inverse_cdf_solidity"""

    def test_median(self) -> None:
        """Φ⁻¹(0.5) = 0"""
        assert get_inverse_cdf_solidity(0.5) == 0.0

    def test_central_region_accuracy(self) -> None:
        """Central регион в пределах CENTRAL_INVERSE_CDF_MAX_ERROR"""
        assert get_inverse_cdf_solidity(0.7) == pytest.approx(
            0.5244005127080407, abs=CENTRAL_INVERSE_CDF_MAX_ERROR
        )
        assert get_inverse_cdf_solidity(0.3) == pytest.approx(
            -0.5244005127080407, abs=CENTRAL_INVERSE_CDF_MAX_ERROR
        )

    def test_upper_tail_accuracy(self) -> None:
        """Верхний хвост p = 0.98"""
        assert get_inverse_cdf_solidity(0.98) == pytest.approx(
            2.053748910631823, abs=TAIL_INVERSE_CDF_MAX_ERROR
        )

    def test_lower_tail_accuracy(self) -> None:
        """Нижний хвост p = 0.01"""
        assert get_inverse_cdf_solidity(0.01) == pytest.approx(
            -2.3263478740408408, abs=TAIL_INVERSE_CDF_MAX_ERROR
        )

    def test_boundary_sentinels(self) -> None:
        """p <= 0 и p >= 1 → +inf (оба конца)"""
        assert get_inverse_cdf_solidity(0.0) == math.inf
        assert get_inverse_cdf_solidity(1.0) == math.inf
        assert get_inverse_cdf_solidity(-0.5) == math.inf
        assert get_inverse_cdf_solidity(1.5) == math.inf

    def test_region_dispatch(self) -> None:
        """Ветвление: central на [LOW_TAIL, HIGH_TAIL], tail снаружи"""
        assert get_inverse_cdf_solidity(LOW_TAIL) == central_inverse_cdf_solidity(LOW_TAIL)
        assert get_inverse_cdf_solidity(HIGH_TAIL) == central_inverse_cdf_solidity(HIGH_TAIL)
        assert get_inverse_cdf_solidity(0.01) == tail_inverse_cdf_solidity(0.01)

    def test_symmetry(self) -> None:
        """Φ⁻¹(1 - p) = -Φ⁻¹(p) в обоих регионах"""
        for p in (0.001, 0.01, 0.2, 0.4):
            assert get_inverse_cdf_solidity(1.0 - p) == pytest.approx(
                -get_inverse_cdf_solidity(p), abs=1e-12
            )

    def test_monotonic_in_central_region(self) -> None:
        """Inverse CDF возрастает внутри central региона"""
        grid = [LOW_TAIL + i * (HIGH_TAIL - LOW_TAIL) / 100 for i in range(101)]
        values = [get_inverse_cdf_solidity(p) for p in grid]
        assert all(a < b for a, b in zip(values, values[1:]))

    def test_tiny_probability_does_not_underflow(self) -> None:
        """Очень малые p не дают ZeroDivisionError"""
        value = get_inverse_cdf_solidity(1e-300)
        assert math.isfinite(value)
        assert value < -30.0


# =============================================================================
# ТЕСТЫ PDF / QUANTILE PRIME
# =============================================================================


class TestApproximatePdf:
    """Тесты get_pdf_solidity и quantile_prime_solidity"""

    def test_pdf_matches_exact(self) -> None:
        """Плотность вычисляется по точной формуле"""
        for x in (-2.0, 0.0, 0.5, 3.0):
            assert get_pdf_solidity(x) == pytest.approx(std_n_pdf(x), rel=1e-12)

    def test_quantile_prime_median(self) -> None:
        """quantile'(0.5) = sqrt(2π)"""
        assert quantile_prime_solidity(0.5) == pytest.approx(math.sqrt(2.0 * math.pi))

    def test_quantile_prime_endpoints(self) -> None:
        """На концах (0, 1) +inf"""
        assert quantile_prime_solidity(0.0) == math.inf
        assert quantile_prime_solidity(1.0) == math.inf

    def test_quantile_prime_outside_unit_interval(self) -> None:
        """Вне [0, 1] NaN, как в exact family"""
        assert math.isnan(quantile_prime_solidity(-0.01))
        assert math.isnan(quantile_prime_solidity(1.01))
        assert math.isnan(APPROXIMATE.quantile_prime(2.0))


class TestApproximateStrategy:
    """Тесты distribution strategy APPROXIMATE"""

    def test_flags(self) -> None:
        """Approximate family маскирует резервы и не имеет точного inverse"""
        assert APPROXIMATE.name == "approximate"
        assert APPROXIMATE.requires_open_interval is True
        assert APPROXIMATE.has_exact_inverse is False

    def test_delegates_to_functions(self) -> None:
        """Методы стратегии совпадают с функциями модуля"""
        assert APPROXIMATE.cdf(0.3) == get_cdf_solidity(0.3)
        assert APPROXIMATE.pdf(0.3) == get_pdf_solidity(0.3)
        assert APPROXIMATE.inverse_cdf(0.3) == get_inverse_cdf_solidity(0.3)
        assert APPROXIMATE.quantile_prime(0.3) == quantile_prime_solidity(0.3)
