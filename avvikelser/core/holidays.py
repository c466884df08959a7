"""Svenska helgdagar med fast datum."""

import datetime
from functools import lru_cache


def nyarsdagen(year: int) -> datetime.date:
    """New Year's Day: January 1st."""
    return datetime.date(year, 1, 1)


def trettondagen(year: int) -> datetime.date:
    """Epiphany / January 6."""
    return datetime.date(year, 1, 6)


def forsta_maj(year: int) -> datetime.date:
    """May 1st (Labour Day)."""
    return datetime.date(year, 5, 1)


def nationaldagen(year: int) -> datetime.date:
    """Swedish National Day, June 6th."""
    return datetime.date(year, 6, 6)


def julafton(year: int) -> datetime.date:
    """Christmas Eve: December 24th."""
    return datetime.date(year, 12, 24)


def juldagen(year: int) -> datetime.date:
    """Christmas Day: December 25th."""
    return datetime.date(year, 12, 25)


def annandag_jul(year: int) -> datetime.date:
    """Boxing Day: December 26th."""
    return datetime.date(year, 12, 26)


def nyarsafton(year: int) -> datetime.date:
    """New Year's Eve: December 31st."""
    return datetime.date(year, 12, 31)


@lru_cache(maxsize=64)
def fixed_holidays(year: int) -> frozenset[datetime.date]:
    """
    Helgdagar som ger semesterfri dag vid avdrag.

    Endast de åtta datumfasta dagarna. Rörliga helger (påsk, Kristi
    himmelsfärd, midsommar, alla helgons dag) ingår inte; lönesystemet
    stämmer av den skillnaden manuellt.
    """
    return frozenset(
        (
            nyarsdagen(year),
            trettondagen(year),
            forsta_maj(year),
            nationaldagen(year),
            julafton(year),
            juldagen(year),
            annandag_jul(year),
            nyarsafton(year),
        )
    )


def is_fixed_holiday(date_: datetime.date) -> bool:
    # datetime är en underklass till date men jämförs aldrig lika med en date
    if isinstance(date_, datetime.datetime):
        date_ = date_.date()
    return date_ in fixed_holidays(date_.year)
