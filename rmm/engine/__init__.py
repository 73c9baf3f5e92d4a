"""
Replication Engine

Фасад над core.math для exact и approximate distribution family.
"""

from rmm.engine.replication_engine import ReplicationEngine

__all__ = [
    "ReplicationEngine",
]
