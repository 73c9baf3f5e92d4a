"""
Numerical Safeguards — Safe Math Primitives

Модуль обеспечивает численную устойчивость операций replication math:
- Безопасное обращение (1/x) с защитой от деления на ноль
- Безопасная экспонента без OverflowError
- Знаковые проверки для bracketed root finding
- Валидация параметров конфигурации

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на ноль никогда не поднимает ZeroDivisionError (возвращается +inf)
2. Переполнение exp никогда не поднимает OverflowError (возвращается +inf)
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для общих вычислений и сравнений
EPS_CALC: Final[float] = 1e-12

# Верхняя граница аргумента math.exp до переполнения float64
EXP_OVERFLOW_THRESHOLD: Final[float] = 709.78


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def non_negative(value: float) -> bool:
    """
    Проверка value >= 0.

    Examples:
        >>> non_negative(1.0)
        True
        >>> non_negative(-1.0)
        False
        >>> non_negative(0.0)
        True
    """
    return value >= 0


# =============================================================================
# БЕЗОПАСНЫЕ ОПЕРАЦИИ
# =============================================================================


def safe_reciprocal(value: float) -> float:
    """
    Обращение 1/value, где нулевое значение отображается в +inf.

    Используется для quantile' = 1 / pdf(quantile(p)): плотность в хвостах
    (и на ±inf) равна нулю, и результат по конвенции +inf.

    Args:
        value: Делитель (обычно плотность, т.е. >= 0)

    Returns:
        1 / value, либо +inf если value == 0

    Examples:
        >>> safe_reciprocal(0.5)
        2.0
        >>> safe_reciprocal(0.0)
        inf
    """
    if value == 0.0:
        return math.inf
    return 1.0 / value


def safe_exp(exponent: float) -> float:
    """
    math.exp без OverflowError.

    Args:
        exponent: Показатель (может быть ±inf)

    Returns:
        exp(exponent), либо +inf при переполнении; NaN пропускается как NaN

    Examples:
        >>> safe_exp(0.0)
        1.0
        >>> safe_exp(1000.0)
        inf
        >>> safe_exp(float('-inf'))
        0.0
    """
    if exponent > EXP_OVERFLOW_THRESHOLD:
        return math.inf
    return math.exp(exponent)


# =============================================================================
# ЗНАКОВЫЕ ПРОВЕРКИ
# =============================================================================


def sign(value: float) -> int:
    """
    Знак числа: -1, 0 или +1.

    Examples:
        >>> sign(-3.5)
        -1
        >>> sign(0.0)
        0
        >>> sign(2.0)
        1
    """
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def same_sign(a: float, b: float) -> bool:
    """
    True если a и b имеют одинаковый знак (в смысле sign()).

    Для bracketed поиска корня: интервал [a, b] содержит смену знака
    только если same_sign(f(a), f(b)) == False.
    """
    return sign(a) == sign(b)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_positive(value: float, name: str, eps: float = EPS_CALC) -> None:
    """
    Валидация, что значение положительное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        eps: Минимальный порог (default: EPS_CALC)

    Raises:
        ValueError: Если value <= eps или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value <= eps:
        raise ValueError(f"{name} must be positive (> {eps}), got {value}")


def validate_in_range(
    value: float,
    name: str,
    min_value: float | None = None,
    max_value: float | None = None,
) -> None:
    """
    Валидация, что значение в заданном диапазоне.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        min_value: Минимальное допустимое значение (optional)
        max_value: Максимальное допустимое значение (optional)

    Raises:
        ValueError: Если value вне диапазона или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if min_value is not None and value < min_value:
        raise ValueError(f"{name} must be >= {min_value}, got {value}")

    if max_value is not None and value > max_value:
        raise ValueError(f"{name} must be <= {max_value}, got {value}")
