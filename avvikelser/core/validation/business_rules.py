"""Pass 2: svenska löne- och arbetstidsregler."""

import datetime

from avvikelser.core.config import EXCESSIVE_OVERTIME_HOURS, OVERTIME_CODE_PREFIX
from avvikelser.core.constants import WEEKEND_DAYS
from avvikelser.core.logging_config import get_logger
from avvikelser.core.models import Deviation, Employee, ValidationIssue, ValidationStats
from avvikelser.core.time_utils import span_hours
from avvikelser.core.validation import issues as catalog

logger = get_logger(__name__)


def is_overtime_code(time_code: str | None) -> bool:
    return bool(time_code) and time_code.startswith(OVERTIME_CODE_PREFIX)


def check_business_rules(
    approved: list[Deviation],
    employees: dict[str, Employee],
    stats: ValidationStats,
    today: datetime.date,
) -> list[ValidationIssue]:
    """
    Varningar för övertid, helgarbete och framtida datum.

    Avvikelser utan datum eller tider hoppas över, de är redan rapporterade
    i pass 1. En tid som inte går att tolka blir ett formatfel för just den
    avvikelsen; övriga avvikelser kontrolleras ändå.
    """
    found: list[ValidationIssue] = []

    for deviation in approved:
        if deviation.date is None or not deviation.start_time or not deviation.end_time:
            continue

        name = catalog.employee_display_name(deviation.employee_id, employees)

        try:
            hours = span_hours(deviation.date, deviation.start_time, deviation.end_time)
        except (TypeError, ValueError):
            logger.warning(
                "Deviation %s: cannot compute hours from %r-%r",
                deviation.id,
                deviation.start_time,
                deviation.end_time,
                extra={"deviation_id": deviation.id, "employee_id": deviation.employee_id},
            )
            found.append(catalog.invalid_time_format(deviation, name))
            stats.data_errors += 1
            continue

        overtime = is_overtime_code(deviation.time_code)

        if overtime and hours > EXCESSIVE_OVERTIME_HOURS:
            found.append(catalog.excessive_overtime(deviation, name, hours))

        if deviation.date.weekday() in WEEKEND_DAYS and not overtime:
            found.append(catalog.weekend_work(deviation, name))

        if deviation.date > today:
            found.append(catalog.future_date(deviation, name))

    logger.debug("Business rules: %d issues", len(found))
    return found
