"""
Semesteravdrag: svenska arbetsdagar och hur många semesterdagar en
ledighetsansökan ska dra från saldot.

Inget här kastar undantag för dålig indata. Ett ogiltigt datum ger avdraget
0 och en varning i loggen, eftersom ett kraschat lönebatchjobb eller NaN i
ett saldo är värre än ett underavdrag som stäms av manuellt.
"""

import datetime

from avvikelser.core.config import FULL_DAY_FACTOR, HALF_DAY_FACTOR, NO_DEDUCTION
from avvikelser.core.constants import HALF_DAY_SCOPES, LEAVE_TYPE_VACATION, SCOPE_FULL_DAY, WEEKEND_DAYS
from avvikelser.core.holidays import is_fixed_holiday
from avvikelser.core.logging_config import get_logger
from avvikelser.core.models import LeaveRequest
from avvikelser.core.types import VacationDays
from avvikelser.core.utils import to_date

logger = get_logger(__name__)

DateInput = datetime.date | datetime.datetime | str


def is_weekend(date: datetime.date) -> bool:
    return date.weekday() in WEEKEND_DAYS


def is_working_day(date: datetime.date) -> bool:
    """Vardag som inte är en av de datumfasta helgdagarna."""
    if isinstance(date, datetime.datetime):
        date = date.date()
    return not is_weekend(date) and not is_fixed_holiday(date)


def calculate_working_days(start_date: datetime.date, end_date: datetime.date) -> int:
    """
    Antal arbetsdagar i intervallet [start_date, end_date], båda inklusive.

    start_date efter end_date ger 0. Klockslag i datetime ignoreras.
    """
    start = to_date(start_date)
    end = to_date(end_date)
    # Intervallet får sluta på date.max
    return sum(
        1
        for offset in range((end - start).days + 1)
        if is_working_day(start + datetime.timedelta(days=offset))
    )


def calculate_vacation_deduction(
    leave_type: str,
    start_date: DateInput,
    end_date: DateInput,
    scope: str = SCOPE_FULL_DAY,
) -> VacationDays:
    """
    Beräknar semesterdagar att dra för en ledighet.

    Args:
        leave_type: Ledighetstyp, endast "vacation" ger avdrag
        start_date: Första dag (date, datetime eller "YYYY-MM-DD")
        end_date: Sista dag, inklusive
        scope: "full-day", "morning", "afternoon" eller "custom"

    Returns:
        Antal dagar att dra. Halvdag ger 0.5 per arbetsdag, övriga
        omfattningar räknas som heldag.
    """
    if leave_type != LEAVE_TYPE_VACATION:
        return NO_DEDUCTION

    try:
        start = to_date(start_date)
        end = to_date(end_date)
    except ValueError:
        logger.warning(
            "Invalid dates for vacation deduction, deducting 0. start=%r end=%r",
            start_date,
            end_date,
        )
        return NO_DEDUCTION

    if start > end:
        logger.warning("Vacation start %s is after end %s, deducting 0", start, end)
        return NO_DEDUCTION

    working_days = calculate_working_days(start, end)

    if scope in HALF_DAY_SCOPES:
        return working_days * HALF_DAY_FACTOR

    return working_days * FULL_DAY_FACTOR


def calculate_leave_request_deduction(request: LeaveRequest) -> VacationDays:
    """Avdrag för en sparad ledighetsansökan."""
    days = calculate_vacation_deduction(
        request.leave_type,
        request.start_date,
        request.end_date,
        request.scope,
    )
    if days:
        logger.info(
            "Leave request %s: deducting %s vacation days",
            request.id,
            days,
            extra={"leave_request_id": request.id, "employee_id": request.employee_id},
        )
    return days


def deduct_vacation_balance(current_days: float, days_to_deduct: float) -> float:
    """
    Nytt semestersaldo efter avdrag, aldrig under 0.

    Avdrag <= 0 lämnar saldot orört. Själva sparningen sköts av anroparen.
    """
    if days_to_deduct <= 0:
        return current_days
    new_balance = max(0.0, current_days - days_to_deduct)
    if new_balance == 0 and current_days < days_to_deduct:
        logger.warning(
            "Vacation deduction %s exceeds balance %s, flooring at 0",
            days_to_deduct,
            current_days,
        )
    return new_balance
