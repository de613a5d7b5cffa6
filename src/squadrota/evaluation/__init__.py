"""Evaluation layer (schedule tables, fairness audit)."""

from .aggregates import (
    ASSIGNMENT_COLUMNS,
    ROLE_COUNT_COLUMNS,
    SHIFT_COLUMNS,
    assignment_dataframe,
    role_count_dataframe,
    shift_dataframe,
)
from .fairness import FairnessViolation, audit_fairness, expected_role_counts, role_counts

__all__ = [
    "ASSIGNMENT_COLUMNS",
    "SHIFT_COLUMNS",
    "ROLE_COUNT_COLUMNS",
    "assignment_dataframe",
    "shift_dataframe",
    "role_count_dataframe",
    "FairnessViolation",
    "audit_fairness",
    "expected_role_counts",
    "role_counts",
]
