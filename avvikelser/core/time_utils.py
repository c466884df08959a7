import datetime
import logging

from avvikelser.core.config import TIME_FORMAT_HM, TIME_FORMAT_HMS
from avvikelser.core.constants import SECONDS_PER_HOUR
from avvikelser.core.types import Hours

logger = logging.getLogger(__name__)


def parse_time(value: str | datetime.time, field_name: str = "time") -> datetime.time:
    """Parse a clock time given as "HH:MM", "HH:MM:SS" or datetime.time.

    Raises ValueError for empty strings, malformed strings and unsupported
    types. Failures are logged here; callers decide whether to recover.
    """
    if isinstance(value, datetime.time):
        return value

    if isinstance(value, str):
        s = value.strip()
        if not s:
            logger.error("%s is empty string", field_name)
            raise ValueError(f"{field_name} is empty")

        fmt = TIME_FORMAT_HM if len(s.split(":")) == 2 else TIME_FORMAT_HMS
        try:
            return datetime.datetime.strptime(s, fmt).time()
        except ValueError as e:
            logger.warning("Failed parsing %s as time string. value=%r", field_name, value)
            raise ValueError(f"Invalid {field_name} format: {value!r}") from e

    logger.error("Unsupported %s type. type=%s value=%r", field_name, type(value).__name__, value)
    raise ValueError(f"Unsupported {field_name} type: {type(value).__name__}")


def span_hours(
    date: datetime.date,
    start: str | datetime.time,
    end: str | datetime.time,
) -> Hours:
    """
    Timmar mellan start och slut på samma datum.

    Ingen hantering av pass över midnatt: en sluttid före starttiden ger
    negativt antal timmar, precis som lönesystemet räknar avvikelsen.
    """
    start_dt = datetime.datetime.combine(date, parse_time(start, "start_time"))
    end_dt = datetime.datetime.combine(date, parse_time(end, "end_time"))
    return (end_dt - start_dt).total_seconds() / SECONDS_PER_HOUR
