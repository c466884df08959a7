"""
Pytest configuration and shared fixtures for testing.

Provides reusable test fixtures:
- employees: Two employees known to the payroll system
- time_codes: Time codes as exported from Kontek Lön
- make_deviation: Factory for approved deviations with sensible defaults
- today: Fixed "today" so future-date checks are deterministic
"""

import datetime
import sys
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from avvikelser.core.models import Deviation, Employee, TimeCode

#: Måndag i en vecka utan helgdagar.
WEEKDAY = datetime.date(2025, 7, 7)

#: Lördag.
SATURDAY = datetime.date(2025, 7, 5)

#: "Idag" i alla valideringstester.
TODAY = datetime.date(2025, 8, 1)


@pytest.fixture
def employees():
    return [
        Employee(employee_id="E001", first_name="Anna", last_name="Andersson"),
        Employee(employee_id="E002", first_name="Erik", last_name="Svensson"),
    ]


@pytest.fixture
def time_codes():
    return [
        TimeCode(code="100", name_sv="Sjukdom", name_en="Sick leave", category="sick"),
        TimeCode(code="210", name_sv="Övertid enkel", name_en="Overtime", category="overtime"),
        TimeCode(code="300", name_sv="VAB", name_en="Care of child", category="vab", approval_type="post_approval"),
    ]


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def make_deviation():
    """
    Factory for deviations.

    Defaults to an approved, complete 08:00-17:00 deviation for E001 on a
    plain Monday with time code 100. Override any field by keyword.
    """

    counter = {"next_id": 1}

    def _make(**overrides) -> Deviation:
        fields = {
            "id": counter["next_id"],
            "employee_id": "E001",
            "date": WEEKDAY,
            "start_time": "08:00",
            "end_time": "17:00",
            "time_code": "100",
            "status": "approved",
        }
        fields.update(overrides)
        counter["next_id"] = max(counter["next_id"], fields["id"]) + 1
        return Deviation(**fields)

    return _make
