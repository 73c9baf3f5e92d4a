"""
Pool — Модели параметров, резервов и котировки пула

Immutable Pydantic модели (value objects) без жизненного цикла:
существуют только на время вызова.
Полная совместимость с JSON Schema (core/contracts/schema/*.json).
"""

import math
from typing import Optional

from pydantic import BaseModel, Field, computed_field, field_serializer


# =============================================================================
# PARAMETERS
# =============================================================================


class PoolParameters(BaseModel):
    """
    Параметры covered-call пула.

    sigma = 0 и tau = 0 допустимы: это вырожденный (истёкший) пул, для
    которого trading function возвращает sentinel, а не ошибку.
    """

    strike: float = Field(..., gt=0, description="Strike K (stable за risky)")
    sigma: float = Field(..., ge=0, description="Implied volatility (десятичная доля)")
    tau: float = Field(..., ge=0, description="Время до экспирации (годы)")

    model_config = {"frozen": True}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def proportional_vol(self) -> float:
        """σ√τ"""
        return self.sigma * math.sqrt(self.tau)


# =============================================================================
# RESERVES
# =============================================================================


class PoolReserves(BaseModel):
    """Резервы пула на единицу ликвидности."""

    reserve_risky: float = Field(..., ge=0, description="Risky reserve (обычно 0-1)")
    reserve_stable: float = Field(..., ge=0, description="Stable reserve (обычно 0-K)")
    invariant_last: float = Field(
        0.0, description="Предыдущий invariant с тем же tau"
    )

    model_config = {"frozen": True}


# =============================================================================
# QUOTE
# =============================================================================


class PoolQuote(BaseModel):
    """
    Снапшот пула: invariant и spot price для одной distribution family.

    Неконечные значения (±inf, NaN) допустимы в модели и сериализуются
    в JSON как null.
    """

    flavor: str = Field(..., min_length=1, description="Distribution family (exact/approximate)")
    reserve_risky: float = Field(..., description="Risky reserve")
    reserve_stable: float = Field(..., description="Stable reserve")
    invariant: float = Field(..., description="R2 - forward(R1)")
    spot_price: float = Field(..., description="Spot price (stable за risky)")
    degenerate_reasons: list[str] = Field(
        default_factory=list, description="Причины sentinel-значений"
    )

    model_config = {"frozen": True}

    @property
    def is_degenerate(self) -> bool:
        return bool(self.degenerate_reasons)

    @field_serializer("invariant", "spot_price")
    def _serialize_non_finite(self, value: float) -> Optional[float]:
        return value if math.isfinite(value) else None
