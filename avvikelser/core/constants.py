# avvikelser/core/constants.py
from typing import Final, Literal

# ==========================
# Status för avvikelser och ledighet
# ==========================

DeviationStatus = Literal["draft", "pending", "approved", "rejected", "returned"]
LeaveStatus = Literal["draft", "pending", "approved", "rejected"]

STATUS_DRAFT: Final[str] = "draft"
STATUS_PENDING: Final[str] = "pending"
STATUS_APPROVED: Final[str] = "approved"
STATUS_REJECTED: Final[str] = "rejected"
STATUS_RETURNED: Final[str] = "returned"

#: Endast avvikelser med denna status får exporteras till Kontek Lön.
EXPORTABLE_STATUS: Final[str] = STATUS_APPROVED

#: Ledighetsansökningar som blockerar nya ansökningar för samma dagar.
BOOKED_LEAVE_STATUSES: Final[tuple[str, ...]] = (STATUS_APPROVED, STATUS_PENDING)


# ==========================
# Ledighetstyper och omfattning
# ==========================

#: Ledighetstyp som ger semesteravdrag. Övriga typer (sjuk, föräldraledig,
#: tjänstledig ...) dras aldrig från semestersaldot.
LEAVE_TYPE_VACATION: Final[str] = "vacation"

LeaveScope = Literal["full-day", "morning", "afternoon", "custom"]

SCOPE_FULL_DAY: Final[str] = "full-day"
SCOPE_MORNING: Final[str] = "morning"
SCOPE_AFTERNOON: Final[str] = "afternoon"
SCOPE_CUSTOM: Final[str] = "custom"

#: Omfattningar som räknas som halvdag.
HALF_DAY_SCOPES: Final[tuple[str, ...]] = (SCOPE_MORNING, SCOPE_AFTERNOON)


# ==========================
# Attestflöden per tidkod
# ==========================

APPROVAL_PRE: Final[str] = "pre_approval"
APPROVAL_POST: Final[str] = "post_approval"
APPROVAL_ATTESTATION: Final[str] = "attestation"
APPROVAL_FLEXIBLE: Final[str] = "flexible"

#: Tidkoder utan angivet flöde attesteras i efterhand.
DEFAULT_APPROVAL_TYPE: Final[str] = APPROVAL_ATTESTATION


# ==========================
# Veckostruktur
# ==========================

#: Index för lördag i Python datetime (0 = måndag).
SATURDAY: Final[int] = 5

#: Index för söndag i Python datetime.
SUNDAY: Final[int] = 6

#: Veckodagar som räknas som helg.
WEEKEND_DAYS: Final[tuple[int, ...]] = (SATURDAY, SUNDAY)

#: Antal sekunder per timme. Används vid konvertering från delta till timmar.
SECONDS_PER_HOUR: Final[int] = 3600
