"""
Validation module - kontroll av avvikelser före PAXML-export.

Exporterar de publika funktionerna.
"""

from .business_rules import check_business_rules, is_overtime_code
from .data_quality import check_data_quality, check_deviation
from .duplicates import check_duplicates, duplicate_key, group_duplicates
from .engine import approved_only, batch_label, validate, validate_export
from .issues import TEMPLATES, IssueCode, IssueTemplate, employee_display_name

__all__ = [
    # engine
    "validate",
    "validate_export",
    "approved_only",
    "batch_label",
    # passes
    "check_data_quality",
    "check_deviation",
    "check_business_rules",
    "is_overtime_code",
    "check_duplicates",
    "duplicate_key",
    "group_duplicates",
    # issue catalog
    "IssueCode",
    "IssueTemplate",
    "TEMPLATES",
    "employee_display_name",
]
