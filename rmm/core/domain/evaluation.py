"""
Evaluation — результат численного вычисления с явной деградацией

Каждая функция replication math возвращает Evaluation:
- valid: value — полноценный результат
- degenerate: reason + legacy sentinel (0, ±inf, 1)

Legacy-потребители получают прежние числа через to_legacy(); новые
потребители различают "значение" и "конвенцию для вырожденного входа"
по полю reason.
"""

import math
from dataclasses import dataclass
from enum import Enum


# =============================================================================
# ENUMS
# =============================================================================


class DegenerateReason(str, Enum):
    """Причина, по которой вместо результата возвращён sentinel."""

    NON_POSITIVE_VOL = "non_positive_vol"  # sigma * sqrt(tau) <= 0
    NON_POSITIVE_STRIKE = "non_positive_strike"
    RESERVE_OUT_OF_RANGE = "reserve_out_of_range"  # risky reserve вне (0, 1)
    PROBABILITY_OUT_OF_RANGE = "probability_out_of_range"
    NEGATIVE_AMOUNT_IN = "negative_amount_in"
    ROOT_NOT_BRACKETED = "root_not_bracketed"  # нет смены знака invariant


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class Evaluation:
    """Результат вычисления: значение либо sentinel с причиной."""

    value: float
    reason: DegenerateReason | None = None

    @classmethod
    def valid(cls, value: float) -> "Evaluation":
        return cls(value=value)

    @classmethod
    def degenerate(cls, reason: DegenerateReason, sentinel: float) -> "Evaluation":
        return cls(value=sentinel, reason=reason)

    @property
    def is_valid(self) -> bool:
        return self.reason is None

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.value)

    def to_legacy(self) -> float:
        """
        Compat shim: число, которое возвращала legacy-функция.

        Для degenerate это sentinel (0, ±inf, 1), для valid — само значение.
        """
        return self.value
