"""
RMM — replication math для covered-call CFMM.

Численный слой без состояния: нормальное распределение (exact и
on-chain approximation), trading function, invariant, spot/marginal prices.
"""

__version__ = "0.3.0"
