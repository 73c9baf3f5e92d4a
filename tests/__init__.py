"""
Test suite for RMM replication math

Contains:
- tests/unit/          : Unit tests for individual modules
"""
