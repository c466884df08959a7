"""Pass 3: dubblettdetektering."""

from avvikelser.core.logging_config import get_logger
from avvikelser.core.models import Deviation, Employee, ValidationIssue, ValidationStats
from avvikelser.core.types import DuplicateKey
from avvikelser.core.validation import issues as catalog

logger = get_logger(__name__)


def duplicate_key(deviation: Deviation) -> DuplicateKey:
    return (deviation.employee_id, deviation.date, deviation.start_time, deviation.end_time)


def group_duplicates(approved: list[Deviation]) -> dict[DuplicateKey, list[Deviation]]:
    """Grupperar avvikelser per nyckel, i den ordning nycklarna först dyker upp."""
    groups: dict[DuplicateKey, list[Deviation]] = {}
    for deviation in approved:
        groups.setdefault(duplicate_key(deviation), []).append(deviation)
    return groups


def check_duplicates(
    approved: list[Deviation],
    employees: dict[str, Employee],
    stats: ValidationStats,
) -> list[ValidationIssue]:
    found: list[ValidationIssue] = []

    for key, group in group_duplicates(approved).items():
        if len(group) < 2:
            continue
        # Första förekomsten räknas inte som dubblett
        stats.duplicates += len(group) - 1
        name = catalog.employee_display_name(group[0].employee_id, employees)
        found.append(catalog.duplicate(key, len(group), name))
        logger.debug(
            "Duplicate group %s: ids %s", key, [d.id for d in group], extra={"employee_id": key[0]}
        )

    return found
