"""
Katalog över alla valideringsproblem som exportkontrollen kan rapportera.

Varje IssueCode har en mall (typ, kategori, rubrik, åtgärd) och en
byggfunktion som fyller i beskrivningen. Id:t byggs av koden och subjektet
(avvikelse-id eller dubblettnyckel) så att samma problem alltid får samma id.
"""

import datetime
from enum import Enum
from typing import Final, NamedTuple

from avvikelser.core.config import EXCESSIVE_OVERTIME_HOURS
from avvikelser.core.models import Deviation, Employee, ValidationIssue
from avvikelser.core.types import DuplicateKey, IssueCategory, IssueType


class IssueCode(str, Enum):
    NO_APPROVED_DEVIATIONS = "no-approved-deviations"
    MISSING_TIME_CODE = "missing-timecode"
    MISSING_DATE = "missing-date"
    MISSING_TIME = "missing-time"
    UNKNOWN_EMPLOYEE = "invalid-employee"
    UNKNOWN_TIME_CODE = "invalid-timecode"
    INVALID_TIME_FORMAT = "invalid-time-format"
    EXCESSIVE_OVERTIME = "excessive-overtime"
    WEEKEND_WORK = "weekend-work"
    FUTURE_DATE = "future-date"
    DUPLICATE = "duplicate"
    SUMMARY_ERRORS = "validation-summary-errors"
    SUMMARY_WARNINGS = "validation-summary-warnings"


class IssueTemplate(NamedTuple):
    type: IssueType
    category: IssueCategory
    title: str
    action: str


TEMPLATES: Final[dict[IssueCode, IssueTemplate]] = {
    IssueCode.NO_APPROVED_DEVIATIONS: IssueTemplate("info", "data", "Inga godkända avvikelser", "Godkänn avvikelser först"),
    IssueCode.MISSING_TIME_CODE: IssueTemplate("error", "data", "Saknar tidkod", "Lägg till tidkod"),
    IssueCode.MISSING_DATE: IssueTemplate("error", "data", "Saknar datum", "Lägg till datum"),
    IssueCode.MISSING_TIME: IssueTemplate("error", "data", "Saknar tid", "Lägg till tider"),
    IssueCode.UNKNOWN_EMPLOYEE: IssueTemplate("error", "data", "Okänd anställd", "Kontrollera anställd"),
    IssueCode.UNKNOWN_TIME_CODE: IssueTemplate("warning", "format", "Okänd tidkod", "Kontrollera tidkod"),
    IssueCode.INVALID_TIME_FORMAT: IssueTemplate("error", "format", "Ogiltigt tidsformat", "Korrigera tidsformat"),
    IssueCode.EXCESSIVE_OVERTIME: IssueTemplate("warning", "business", "Mycket övertid", "Kontrollera arbetstidslagen"),
    IssueCode.WEEKEND_WORK: IssueTemplate("warning", "business", "Helgarbete", "Kontrollera tidkod för helgarbete"),
    IssueCode.FUTURE_DATE: IssueTemplate("warning", "business", "Framtida datum", "Kontrollera datum"),
    IssueCode.DUPLICATE: IssueTemplate("error", "data", "Dubblett upptäckt", "Ta bort dubbletter"),
    IssueCode.SUMMARY_ERRORS: IssueTemplate("error", "data", "Export blockerad", "Fixa fel nedan"),
    IssueCode.SUMMARY_WARNINGS: IssueTemplate("warning", "business", "Export möjlig men varningar finns", "Granska varningar"),
}


def employee_display_name(employee_id: str, employees: dict[str, Employee]) -> str:
    """Namn på den anställde, eller id:t om personen inte finns."""
    employee = employees.get(employee_id)
    return employee.full_name if employee else employee_id


def _issue(
    code: IssueCode,
    description: str,
    subject: object = None,
    employee_id: str | None = None,
    deviation_id: int | None = None,
) -> ValidationIssue:
    template = TEMPLATES[code]
    return ValidationIssue(
        id=code.value if subject is None else f"{code.value}-{subject}",
        code=code.value,
        type=template.type,
        category=template.category,
        title=template.title,
        description=description,
        employee_id=employee_id,
        deviation_id=deviation_id,
        action=template.action,
    )


def _for_deviation(code: IssueCode, deviation: Deviation, description: str) -> ValidationIssue:
    return _issue(
        code,
        description,
        subject=deviation.id,
        employee_id=deviation.employee_id,
        deviation_id=deviation.id,
    )


# === Datakvalitet ===


def no_approved_deviations() -> ValidationIssue:
    return _issue(
        IssueCode.NO_APPROVED_DEVIATIONS,
        "Det finns inga godkända avvikelser att exportera till Kontek Lön.",
    )


def missing_time_code(deviation: Deviation, name: str) -> ValidationIssue:
    return _for_deviation(IssueCode.MISSING_TIME_CODE, deviation, f"Avvikelse för {name} saknar tidkod")


def missing_date(deviation: Deviation, name: str) -> ValidationIssue:
    return _for_deviation(IssueCode.MISSING_DATE, deviation, f"Avvikelse för {name} saknar datum")


def missing_time(deviation: Deviation, name: str) -> ValidationIssue:
    return _for_deviation(
        IssueCode.MISSING_TIME, deviation, f"Avvikelse för {name} saknar start- eller sluttid"
    )


def unknown_employee(deviation: Deviation) -> ValidationIssue:
    return _for_deviation(
        IssueCode.UNKNOWN_EMPLOYEE, deviation, f"Anställd {deviation.employee_id} finns inte i systemet"
    )


def unknown_time_code(deviation: Deviation) -> ValidationIssue:
    return _for_deviation(
        IssueCode.UNKNOWN_TIME_CODE, deviation, f"Tidkod {deviation.time_code} finns inte i Kontek Lön"
    )


def invalid_time_format(deviation: Deviation, name: str) -> ValidationIssue:
    return _for_deviation(IssueCode.INVALID_TIME_FORMAT, deviation, f"Kan inte beräkna tid för {name}")


# === Affärsregler ===


def excessive_overtime(deviation: Deviation, name: str, hours: float) -> ValidationIssue:
    return _for_deviation(
        IssueCode.EXCESSIVE_OVERTIME,
        deviation,
        f"{name} har {hours:.1f}h övertid (>{EXCESSIVE_OVERTIME_HOURS:g}h kan kräva speciell hantering)",
    )


def weekend_work(deviation: Deviation, name: str) -> ValidationIssue:
    return _for_deviation(IssueCode.WEEKEND_WORK, deviation, f"{name} arbetar helg utan övertidskod")


def future_date(deviation: Deviation, name: str) -> ValidationIssue:
    return _for_deviation(IssueCode.FUTURE_DATE, deviation, f"Avvikelse för {name} har framtida datum")


# === Dubbletter ===


def duplicate_key_id(key: DuplicateKey) -> str:
    employee_id, date, start_time, end_time = key
    return f"{employee_id}-{date}-{start_time}-{end_time}"


def duplicate(key: DuplicateKey, count: int, name: str) -> ValidationIssue:
    employee_id, date, _, _ = key
    day = date.isoformat() if isinstance(date, datetime.date) else "okänt datum"
    return _issue(
        IssueCode.DUPLICATE,
        f"{count} identiska avvikelser för {name} på {day}",
        subject=duplicate_key_id(key),
        employee_id=employee_id,
    )


# === Sammanfattning ===


def summary_errors(error_count: int) -> ValidationIssue:
    return _issue(
        IssueCode.SUMMARY_ERRORS,
        f"{error_count} kritiska fel måste fixas innan export till Kontek Lön",
    )


def summary_warnings(warning_count: int) -> ValidationIssue:
    return _issue(
        IssueCode.SUMMARY_WARNINGS,
        f"{warning_count} varningar upptäckta - kontrollera data innan export",
    )
