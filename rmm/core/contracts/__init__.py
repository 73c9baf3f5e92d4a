"""
Contract Validation Module

Модуль для валидации JSON контрактов пула (параметры и котировка).
"""

from .validators import (
    ContractValidator,
    PoolParametersValidator,
    PoolQuoteValidator,
    SchemaLoader,
    validate_pool_parameters,
    validate_pool_quote,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PoolParametersValidator",
    "PoolQuoteValidator",
    # Functions
    "validate_pool_parameters",
    "validate_pool_quote",
]
