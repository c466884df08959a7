"""
Exportkontroll före överföring till Kontek Lön (PAXML).

validate() tar godkända avvikelser, anställda och tidkoder och returnerar en
rapport. Fel blockerar exporten, varningar ska granskas men stoppar inte.
Funktionen kastar aldrig för dålig affärsdata; allt blir rader i rapporten.
"""

import datetime
from collections.abc import Iterable

from avvikelser.core.constants import EXPORTABLE_STATUS
from avvikelser.core.logging_config import LogContext, get_logger
from avvikelser.core.models import (
    Deviation,
    Employee,
    TimeCode,
    ValidationIssue,
    ValidationResult,
    ValidationStats,
)
from avvikelser.core.utils import get_today
from avvikelser.core.validation import issues as catalog
from avvikelser.core.validation.business_rules import check_business_rules
from avvikelser.core.validation.data_quality import check_data_quality
from avvikelser.core.validation.duplicates import check_duplicates

logger = get_logger(__name__)


def approved_only(deviations: Iterable[Deviation]) -> list[Deviation]:
    return [d for d in deviations if d.status == EXPORTABLE_STATUS]


def _summarize(found: list[ValidationIssue]) -> ValidationIssue | None:
    error_count = sum(1 for issue in found if issue.type == "error")
    if error_count:
        return catalog.summary_errors(error_count)

    warning_count = sum(1 for issue in found if issue.type == "warning")
    if warning_count:
        return catalog.summary_warnings(warning_count)

    return None


def batch_label(approved: list[Deviation]) -> str:
    """Loggnamn för ett exportunderlag: datumspannet, t.ex. "2025-07-01..2025-07-31"."""
    dates = [d.date for d in approved if d.date is not None]
    if not dates:
        return "odaterad"
    return f"{min(dates).isoformat()}..{max(dates).isoformat()}"


def validate(
    deviations: Iterable[Deviation],
    employees: Iterable[Employee],
    time_codes: Iterable[TimeCode] = (),
    today: datetime.date | None = None,
    export_batch: str | None = None,
) -> ValidationResult:
    """
    Validerar ett exportunderlag.

    Args:
        deviations: Alla avvikelser för perioden; bara godkända kontrolleras
        employees: Anställda som avvikelserna får referera till
        time_codes: Tidkoder i lönesystemet. Tom lista hoppar över
            tidkodskontrollen.
        today: Datum för kontrollen av framtida datum (default dagens datum)
        export_batch: Namn på batchen i loggen (default datumspannet)

    Returns:
        ValidationResult med sammanfattningen först bland problemen.
    """
    approved = approved_only(deviations)
    if export_batch is None:
        export_batch = batch_label(approved)

    with LogContext(export_batch=export_batch):
        return _validate_approved(approved, employees, time_codes, today)


def _validate_approved(
    approved: list[Deviation],
    employees: Iterable[Employee],
    time_codes: Iterable[TimeCode],
    today: datetime.date | None,
) -> ValidationResult:
    stats = ValidationStats(total_deviations=len(approved))

    if not approved:
        logger.info("No approved deviations to export")
        return ValidationResult(
            is_valid=True,
            has_errors=False,
            has_warnings=False,
            issues=[catalog.no_approved_deviations()],
            stats=stats,
        )

    if today is None:
        today = get_today()

    employees_by_id = {e.employee_id: e for e in employees}
    time_codes_by_code = {tc.code: tc for tc in time_codes}

    found: list[ValidationIssue] = []
    found.extend(check_data_quality(approved, employees_by_id, time_codes_by_code, stats))
    found.extend(check_business_rules(approved, employees_by_id, stats, today))
    found.extend(check_duplicates(approved, employees_by_id, stats))

    has_errors = any(issue.type == "error" for issue in found)
    has_warnings = any(issue.type == "warning" for issue in found)

    summary = _summarize(found)
    if summary is not None:
        found.insert(0, summary)

    result = ValidationResult(
        is_valid=not has_errors,
        has_errors=has_errors,
        has_warnings=has_warnings,
        issues=found,
        stats=stats,
    )

    logger.info(
        "Export validation: %d approved, valid=%s, errors=%s, warnings=%s, duplicates=%d",
        stats.total_deviations,
        result.is_valid,
        has_errors,
        has_warnings,
        stats.duplicates,
    )
    return result


# Alias used by export handlers
validate_export = validate
