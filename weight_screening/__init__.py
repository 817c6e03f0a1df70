"""
Weight Screening Engine v1.0
============================
Weight-for-height compliance against the AR 600-9 screening table.

Usage:
    from weight_screening import evaluate, Gender
    from weight_screening.api import register_weight_screening_endpoints
"""

from weight_screening.engine import (
    ComplianceEvaluator,
    StandardsTable,
    StandardsTableError,
    Compliance,
    ComplianceResult,
    ComplianceStatus,
    Standard,
    TableRow,
    Gender,
    ScreeningReport,
    ScreenedSubject,
    age_group_for,
    evaluate,
    get_evaluator,
    get_table
)

from weight_screening.render import describe

__version__ = "1.0.0"
__all__ = [
    "ComplianceEvaluator",
    "StandardsTable",
    "StandardsTableError",
    "Compliance",
    "ComplianceResult",
    "ComplianceStatus",
    "Standard",
    "TableRow",
    "Gender",
    "ScreeningReport",
    "ScreenedSubject",
    "age_group_for",
    "evaluate",
    "get_evaluator",
    "get_table",
    "describe"
]
