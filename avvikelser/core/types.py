# avvikelser/core/types.py

"""
Custom type definitions shared by the validation engine and the calculators.
"""

import datetime
from typing import Literal

# Type aliases for common structures
Hours = float
VacationDays = float

IssueType = Literal["error", "warning", "info"]
IssueCategory = Literal["data", "business", "format"]

#: Nyckel för dubblettdetektering: (anställd, datum, starttid, sluttid).
DuplicateKey = tuple[str, datetime.date | None, str | None, str | None]
