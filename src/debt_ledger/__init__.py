"""Debt ledger aggregation and currency normalization engine."""

__version__ = "0.1.0"
