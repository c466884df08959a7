# avvikelser/core/utils.py
import datetime

from avvikelser.core.config import DATE_FORMAT_ISO


def get_today() -> datetime.date:
    """Dagens datum. Egen funktion så att tester kan ersätta klockan."""
    return datetime.date.today()


def to_date(value: datetime.date | datetime.datetime | str) -> datetime.date:
    """
    Normaliserar ett datum från anroparen.

    - datetime.datetime: datumdelen
    - datetime.date: oförändrad
    - str: "YYYY-MM-DD", eventuellt följt av tidsdel ("2025-07-05T00:00:00")

    Kastar ValueError för allt annat.
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        return datetime.datetime.strptime(value.strip()[:10], DATE_FORMAT_ISO).date()
    raise ValueError(f"Unsupported date type: {type(value).__name__}")
