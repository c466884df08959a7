"""Pass 1: obligatoriska fält och referenser till anställda och tidkoder."""

from avvikelser.core.logging_config import get_logger
from avvikelser.core.models import Deviation, Employee, TimeCode, ValidationIssue, ValidationStats
from avvikelser.core.validation import issues as catalog

logger = get_logger(__name__)


def check_deviation(
    deviation: Deviation,
    employees: dict[str, Employee],
    time_codes: dict[str, TimeCode],
) -> tuple[list[ValidationIssue], bool]:
    """
    Kontrollerar en avvikelse.

    Returns:
        (problem, ogiltig). Okänd tidkod är bara en varning och gör inte
        avvikelsen ogiltig.
    """
    found: list[ValidationIssue] = []
    invalid = False
    name = catalog.employee_display_name(deviation.employee_id, employees)

    if not deviation.time_code:
        found.append(catalog.missing_time_code(deviation, name))
        invalid = True

    if deviation.date is None:
        found.append(catalog.missing_date(deviation, name))
        invalid = True

    if not deviation.start_time or not deviation.end_time:
        found.append(catalog.missing_time(deviation, name))
        invalid = True

    if deviation.employee_id not in employees:
        found.append(catalog.unknown_employee(deviation))
        invalid = True

    # Tidkoder kontrolleras bara när listan från lönesystemet finns
    if deviation.time_code and time_codes and deviation.time_code not in time_codes:
        found.append(catalog.unknown_time_code(deviation))

    return found, invalid


def check_data_quality(
    approved: list[Deviation],
    employees: dict[str, Employee],
    time_codes: dict[str, TimeCode],
    stats: ValidationStats,
) -> list[ValidationIssue]:
    found: list[ValidationIssue] = []

    for deviation in approved:
        deviation_issues, invalid = check_deviation(deviation, employees, time_codes)
        found.extend(deviation_issues)

        if not deviation.time_code:
            stats.missing_time_codes += 1

        if invalid:
            stats.invalid_deviations += 1
            stats.data_errors += 1
        else:
            stats.valid_deviations += 1

    logger.debug(
        "Data quality: %d valid, %d invalid, %d issues",
        stats.valid_deviations,
        stats.invalid_deviations,
        len(found),
    )
    return found
