# avvikelser/core/config.py

from typing import Final


# ==========================
# Datum och tidformat
# ==========================

#: ISO-format för datumsträngar (till exempel deviation.date "2025-07-05").
DATE_FORMAT_ISO: Final[str] = "%Y-%m-%d"

#: Format för klockslag i avvikelser ("08:00").
TIME_FORMAT_HM: Final[str] = "%H:%M"

#: Format för klockslag med sekunder ("08:00:00"), som databasen levererar.
TIME_FORMAT_HMS: Final[str] = "%H:%M:%S"


# ==========================
# Affärsregler för export
# ==========================

#: Tidkoder för övertid börjar med "2" i Kontek Lön (till exempel "210", "220").
OVERTIME_CODE_PREFIX: Final[str] = "2"

#: Gräns i timmar för en enskild övertidsavvikelse innan varning ges.
#: Över 12 timmar kan kräva särskild hantering enligt arbetstidslagen.
EXCESSIVE_OVERTIME_HOURS: Final[float] = 12.0


# ==========================
# Semesteravdrag
# ==========================

#: Andel av en dag som dras vid förmiddag/eftermiddag.
HALF_DAY_FACTOR: Final[float] = 0.5

#: Andel av en dag som dras vid heldag (och som fallback för okänd omfattning).
FULL_DAY_FACTOR: Final[float] = 1.0

#: Avdraget när ledigheten inte är semester eller datumen är ogiltiga.
NO_DEDUCTION: Final[float] = 0.0
