"""
Root Finders — Bisection & Newton

Универсальные численные методы поиска корня f(x) = 0:

- bisection: bracketed метод, гарантированная сходимость при смене знака
  f на концах интервала; O(log2((b - a) / epsilon)) вычислений f
- newton_method: x ← x - f(x) / f'(x); быстрый, без гарантий сходимости,
  число итераций ограничено max_runs

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. bisection никогда не возвращает значение вне [a, b]
2. bisection без смены знака → RootNotBracketedError (не "тихий" None)
3. newton_method всегда завершается (max_runs), возвращая последнюю итерацию
"""

from typing import Callable, Final

import structlog

from rmm.core.math.numerical_safeguards import same_sign

logger = structlog.get_logger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

# Ширина интервала, при которой bisection останавливается
EPSILON: Final[float] = 1e-3


# =============================================================================
# EXCEPTIONS
# =============================================================================


class RootNotBracketedError(ValueError):
    """
    Нарушено предусловие bisection: sign(f(a)) == sign(f(b)).

    Интервал [a, b] не гарантирует наличие корня.
    """

    def __init__(self, a: float, b: float, fa: float, fb: float):
        self.a = a
        self.b = b
        self.fa = fa
        self.fb = fb
        super().__init__(
            f"Root is not bracketed: f({a})={fa}, f({b})={fb} have the same sign"
        )


# =============================================================================
# BISECTION
# =============================================================================


def bisection(
    func: Callable[[float], float],
    a: float,
    b: float,
    epsilon: float = EPSILON,
) -> float:
    """
    Bisection: поиск корня f на интервале [a, b] со сменой знака.

    Алгоритм:
        c = (a + b) / 2
        конец, у которого знак f совпадает с f(c), заменяется на c
        повтор пока b - a >= epsilon

    Args:
        func: Функция f(x)
        a: Левый конец интервала
        b: Правый конец интервала
        epsilon: Ширина интервала для остановки (default: EPSILON)

    Returns:
        Последний midpoint c ∈ [a, b]; конец интервала, если f на нём == 0

    Raises:
        RootNotBracketedError: если sign(f(a)) == sign(f(b)) и ни один конец не корень

    Examples:
        >>> abs(bisection(lambda x: x * x - 2.0, 0.0, 2.0) - 2 ** 0.5) < 1e-3
        True
    """
    fa = func(a)
    if fa == 0.0:
        return a

    fb = func(b)
    if fb == 0.0:
        return b

    if same_sign(fa, fb):
        logger.warning(
            "bisection_root_not_bracketed",
            a=a,
            b=b,
            fa=fa,
            fb=fb,
        )
        raise RootNotBracketedError(a, b, fa, fb)

    c = (a + b) / 2.0
    while b - a >= epsilon:
        c = (a + b) / 2.0
        fc = func(c)

        if fc == 0.0:
            break

        if same_sign(fc, fa):
            a, fa = c, fc
        else:
            b = c

    return c


# =============================================================================
# NEWTON
# =============================================================================


def newton_method(
    x: float,
    epsilon: float,
    max_runs: int,
    fx: Callable[[float], float],
    dx: Callable[[float], float],
) -> float:
    """
    Newton's method: x ← x - fx(x) / dx(x).

    Останавливается когда |fx(x) / dx(x)| < epsilon или после max_runs
    итераций. Сходимость не гарантируется: начальное приближение x
    выбирает вызывающий код.

    Args:
        x: Начальное приближение
        epsilon: Порог для шага |h|
        max_runs: Максимум итераций
        fx: Функция
        dx: Производная fx

    Returns:
        Последняя итерация x (сошлась или нет)

    Examples:
        >>> root = newton_method(-4.0, 1e-8, 100, lambda x: x**3 - x**2 + 2, lambda x: 3 * x**2 - 2 * x)
        >>> round(root, 8)
        -1.0
    """
    runs = 0

    while runs < max_runs:
        slope = dx(x)
        if slope == 0.0:
            # Шаг не определён: дальнейшие итерации не сдвинут x
            logger.warning("newton_zero_derivative", x=x, runs=runs)
            return x

        h = fx(x) / slope
        x = x - h
        runs += 1

        if abs(h) < epsilon:
            return x

    logger.debug("newton_max_runs_reached", x=x, max_runs=max_runs)
    return x
