"""
Domain models and value objects.

Contains the evaluation result type and pool value objects.
"""

from rmm.core.domain.evaluation import DegenerateReason, Evaluation
from rmm.core.domain.pool import PoolParameters, PoolQuote, PoolReserves

__all__ = [
    # Evaluation
    "DegenerateReason",
    "Evaluation",
    # Pool models
    "PoolParameters",
    "PoolQuote",
    "PoolReserves",
]
