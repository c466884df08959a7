"""
Unit tests for the export validation engine.

Tests verify that approved deviations are checked for data quality,
Swedish payroll business rules and duplicates before PAXML export, and
that errors block the export while warnings do not.
"""

import datetime
import logging

import pytest

from avvikelser.core.models import Deviation
from avvikelser.core.validation import IssueCode, validate
from tests.conftest import SATURDAY, TODAY, WEEKDAY


def codes(result):
    return [issue.code for issue in result.issues]


class TestNoApprovedDeviations:
    """An export batch without approved deviations is empty, not invalid."""

    def test_empty_input_is_vacuously_valid(self, employees, time_codes):
        result = validate([], employees, time_codes, today=TODAY)

        assert result.is_valid is True
        assert result.has_errors is False
        assert result.has_warnings is False
        assert codes(result) == [IssueCode.NO_APPROVED_DEVIATIONS.value]
        assert result.issues[0].type == "info"
        assert result.stats.total_deviations == 0

    def test_only_unapproved_statuses_are_ignored(self, make_deviation, employees, time_codes):
        """Pending, draft, rejected and returned deviations never reach the checks."""
        deviations = [
            make_deviation(status="pending", time_code=None),
            make_deviation(status="draft", employee_id="UNKNOWN"),
            make_deviation(status="rejected"),
            make_deviation(status="returned"),
        ]

        result = validate(deviations, employees, time_codes, today=TODAY)

        assert result.is_valid is True
        assert len(result.issues) == 1
        assert result.issues[0].type == "info"
        assert result.stats.total_deviations == 0


class TestCleanBatch:
    def test_complete_deviations_produce_no_issues(self, make_deviation, employees, time_codes):
        deviations = [
            make_deviation(),
            make_deviation(employee_id="E002", time_code="210", start_time="17:00", end_time="20:00"),
        ]

        result = validate(deviations, employees, time_codes, today=TODAY)

        assert result.is_valid is True
        assert result.has_errors is False
        assert result.has_warnings is False
        assert result.issues == []
        assert result.stats.total_deviations == 2
        assert result.stats.valid_deviations == 2
        assert result.stats.invalid_deviations == 0

    def test_only_approved_are_counted(self, make_deviation, employees, time_codes):
        deviations = [make_deviation(), make_deviation(status="pending")]

        result = validate(deviations, employees, time_codes, today=TODAY)

        assert result.stats.total_deviations == 1

    def test_inputs_are_not_mutated(self, make_deviation, employees, time_codes):
        deviations = [make_deviation(time_code=None), make_deviation()]
        before = [d.model_dump() for d in deviations]

        validate(deviations, employees, time_codes, today=TODAY)

        assert [d.model_dump() for d in deviations] == before


class TestDataQuality:
    """Pass 1: required fields and references."""

    def test_missing_time_code_is_counted_once(self, make_deviation, employees, time_codes):
        result = validate([make_deviation(time_code=None)], employees, time_codes, today=TODAY)

        assert result.stats.missing_time_codes == 1
        assert result.stats.valid_deviations == 0
        assert result.stats.invalid_deviations == 1
        assert result.stats.data_errors == 1
        assert codes(result) == [IssueCode.SUMMARY_ERRORS.value, IssueCode.MISSING_TIME_CODE.value]
        assert result.issues[1].id == "missing-timecode-1"
        assert result.is_valid is False

    def test_empty_string_time_code_counts_as_missing(self, make_deviation, employees, time_codes):
        result = validate([make_deviation(time_code="")], employees, time_codes, today=TODAY)

        assert result.stats.missing_time_codes == 1
        assert IssueCode.UNKNOWN_TIME_CODE.value not in codes(result)

    def test_missing_date(self, make_deviation, employees, time_codes):
        result = validate([make_deviation(date=None)], employees, time_codes, today=TODAY)

        assert IssueCode.MISSING_DATE.value in codes(result)
        assert result.stats.invalid_deviations == 1

    @pytest.mark.parametrize("field", ["start_time", "end_time"])
    def test_missing_start_or_end_time(self, make_deviation, employees, time_codes, field):
        result = validate([make_deviation(**{field: None})], employees, time_codes, today=TODAY)

        assert codes(result).count(IssueCode.MISSING_TIME.value) == 1
        assert result.stats.invalid_deviations == 1

    def test_several_problems_count_as_one_data_error(self, make_deviation, employees, time_codes):
        """A deviation with many problems is one invalid deviation."""
        deviation = make_deviation(time_code=None, start_time=None, end_time=None, employee_id="E999")

        result = validate([deviation], employees, time_codes, today=TODAY)

        assert result.stats.invalid_deviations == 1
        assert result.stats.data_errors == 1
        error_codes = [i.code for i in result.issues if i.code != IssueCode.SUMMARY_ERRORS.value]
        assert error_codes == [
            IssueCode.MISSING_TIME_CODE.value,
            IssueCode.MISSING_TIME.value,
            IssueCode.UNKNOWN_EMPLOYEE.value,
        ]
        assert "3 kritiska fel" in result.issues[0].description

    def test_unknown_employee_is_error(self, make_deviation, employees, time_codes):
        result = validate([make_deviation(employee_id="E999")], employees, time_codes, today=TODAY)

        issue = next(i for i in result.issues if i.code == IssueCode.UNKNOWN_EMPLOYEE.value)
        assert issue.type == "error"
        assert issue.category == "data"
        assert issue.employee_id == "E999"
        assert "E999" in issue.description
        assert result.has_errors is True

    def test_unknown_time_code_is_warning_only(self, make_deviation, employees, time_codes):
        result = validate([make_deviation(time_code="999")], employees, time_codes, today=TODAY)

        issue = next(i for i in result.issues if i.code == IssueCode.UNKNOWN_TIME_CODE.value)
        assert issue.type == "warning"
        assert issue.category == "format"
        assert result.stats.valid_deviations == 1
        assert result.has_errors is False
        assert result.is_valid is True
        assert result.issues[0].code == IssueCode.SUMMARY_WARNINGS.value

    def test_time_codes_not_checked_without_catalog(self, make_deviation, employees):
        result = validate([make_deviation(time_code="999")], employees, [], today=TODAY)

        assert result.issues == []

    def test_description_uses_employee_name(self, make_deviation, employees, time_codes):
        result = validate([make_deviation(time_code=None)], employees, time_codes, today=TODAY)

        assert "Anna Andersson" in result.issues[1].description


class TestBusinessRules:
    """Pass 2: overtime, weekend work and future dates."""

    def test_excessive_overtime_warning(self, make_deviation, employees, time_codes):
        deviation = make_deviation(time_code="210", start_time="06:00", end_time="19:30")

        result = validate([deviation], employees, time_codes, today=TODAY)

        issue = next(i for i in result.issues if i.code == IssueCode.EXCESSIVE_OVERTIME.value)
        assert issue.type == "warning"
        assert issue.category == "business"
        assert "13.5h" in issue.description
        assert result.is_valid is True

    def test_twelve_hours_overtime_is_allowed(self, make_deviation, employees, time_codes):
        deviation = make_deviation(time_code="210", start_time="06:00", end_time="18:00")

        result = validate([deviation], employees, time_codes, today=TODAY)

        assert result.issues == []

    def test_long_non_overtime_deviation_is_not_flagged(self, make_deviation, employees, time_codes):
        deviation = make_deviation(time_code="100", start_time="06:00", end_time="20:00")

        result = validate([deviation], employees, time_codes, today=TODAY)

        assert IssueCode.EXCESSIVE_OVERTIME.value not in codes(result)

    def test_weekend_without_overtime_code(self, make_deviation, employees, time_codes):
        """Saturday deviation with time code 100 gives exactly one weekend warning."""
        deviation = make_deviation(
            id=1, employee_id="E001", date="2025-07-05", start_time="08:00", end_time="17:00", time_code="100"
        )

        result = validate([deviation], employees, time_codes, today=TODAY)

        assert codes(result).count(IssueCode.WEEKEND_WORK.value) == 1
        assert result.has_errors is False
        assert result.has_warnings is True
        assert result.is_valid is True
        assert codes(result) == [IssueCode.SUMMARY_WARNINGS.value, IssueCode.WEEKEND_WORK.value]
        assert "1 varningar" in result.issues[0].description

    def test_sunday_is_weekend(self, make_deviation, employees, time_codes):
        deviation = make_deviation(date=SATURDAY + datetime.timedelta(days=1))

        result = validate([deviation], employees, time_codes, today=TODAY)

        assert IssueCode.WEEKEND_WORK.value in codes(result)

    def test_weekend_with_overtime_code_is_fine(self, make_deviation, employees, time_codes):
        deviation = make_deviation(date=SATURDAY, time_code="210")

        result = validate([deviation], employees, time_codes, today=TODAY)

        assert result.issues == []

    def test_future_date_warning(self, make_deviation, employees, time_codes):
        deviation = make_deviation(date=TODAY + datetime.timedelta(days=3))

        result = validate([deviation], employees, time_codes, today=TODAY)

        assert IssueCode.FUTURE_DATE.value in codes(result)

    def test_today_is_not_future(self, make_deviation, employees, time_codes):
        # TODAY is a Friday
        deviation = make_deviation(date=TODAY)

        result = validate([deviation], employees, time_codes, today=TODAY)

        assert result.issues == []

    def test_default_clock_is_used(self, make_deviation, employees, time_codes, monkeypatch):
        import avvikelser.core.validation.engine as engine_module

        monkeypatch.setattr(engine_module, "get_today", lambda: datetime.date(2025, 7, 1))

        result = validate([make_deviation(date=WEEKDAY)], employees, time_codes)

        assert IssueCode.FUTURE_DATE.value in codes(result)

    def test_warnings_are_independent(self, make_deviation, employees, time_codes):
        """A future Saturday with non-overtime code gives two warnings."""
        deviation = make_deviation(date=datetime.date(2025, 8, 9), time_code="100")

        result = validate([deviation], employees, time_codes, today=TODAY)

        assert IssueCode.WEEKEND_WORK.value in codes(result)
        assert IssueCode.FUTURE_DATE.value in codes(result)
        assert "2 varningar" in result.issues[0].description

    def test_invalid_time_format_is_error(self, make_deviation, employees, time_codes):
        result = validate([make_deviation(start_time="25:99")], employees, time_codes, today=TODAY)

        issue = next(i for i in result.issues if i.code == IssueCode.INVALID_TIME_FORMAT.value)
        assert issue.type == "error"
        assert issue.category == "format"
        assert issue.id == "invalid-time-format-1"
        assert result.stats.data_errors == 1
        # Pass 1 only checks presence, so the deviation still counts as valid there
        assert result.stats.valid_deviations == 1
        assert result.is_valid is False

    def test_bad_record_does_not_stop_the_others(self, make_deviation, employees, time_codes):
        deviations = [
            make_deviation(id=1, start_time="kl 8"),
            make_deviation(id=2, date=SATURDAY),
        ]

        result = validate(deviations, employees, time_codes, today=TODAY)

        assert IssueCode.INVALID_TIME_FORMAT.value in codes(result)
        weekend = next(i for i in result.issues if i.code == IssueCode.WEEKEND_WORK.value)
        assert weekend.deviation_id == 2

    def test_incomplete_deviation_is_skipped(self, make_deviation, employees, time_codes):
        """No business-rule issues for deviations already flagged as incomplete."""
        result = validate([make_deviation(date=SATURDAY, end_time=None)], employees, time_codes, today=TODAY)

        assert IssueCode.WEEKEND_WORK.value not in codes(result)


class TestDuplicates:
    def test_three_identical_count_two_duplicates(self, make_deviation, employees, time_codes):
        deviations = [make_deviation() for _ in range(3)]

        result = validate(deviations, employees, time_codes, today=TODAY)

        duplicates = [i for i in result.issues if i.code == IssueCode.DUPLICATE.value]
        assert result.stats.duplicates == 2
        assert len(duplicates) == 1
        assert duplicates[0].type == "error"
        assert duplicates[0].id == "duplicate-E001-2025-07-07-08:00-17:00"
        assert duplicates[0].deviation_id is None
        assert "3 identiska avvikelser för Anna Andersson på 2025-07-07" in duplicates[0].description
        assert result.is_valid is False

    def test_different_times_are_not_duplicates(self, make_deviation, employees, time_codes):
        deviations = [
            make_deviation(start_time="08:00", end_time="12:00"),
            make_deviation(start_time="13:00", end_time="17:00"),
        ]

        result = validate(deviations, employees, time_codes, today=TODAY)

        assert result.stats.duplicates == 0
        assert result.issues == []

    def test_one_issue_per_group(self, make_deviation, employees, time_codes):
        deviations = [
            make_deviation(),
            make_deviation(),
            make_deviation(employee_id="E002"),
            make_deviation(employee_id="E002"),
        ]

        result = validate(deviations, employees, time_codes, today=TODAY)

        assert codes(result).count(IssueCode.DUPLICATE.value) == 2
        assert result.stats.duplicates == 2

    def test_duplicates_ignore_time_code(self, make_deviation, employees, time_codes):
        deviations = [make_deviation(time_code="100"), make_deviation(time_code="300")]

        result = validate(deviations, employees, time_codes, today=TODAY)

        assert result.stats.duplicates == 1


class TestVerdict:
    """Pass 4: summary issue and overall verdict."""

    def test_summary_counts_errors_only(self, make_deviation, employees, time_codes):
        deviations = [
            make_deviation(time_code=None),
            make_deviation(date=SATURDAY, start_time="09:00"),
        ]

        result = validate(deviations, employees, time_codes, today=TODAY)

        summary = result.issues[0]
        assert summary.code == IssueCode.SUMMARY_ERRORS.value
        assert summary.id == "validation-summary-errors"
        assert "1 kritiska fel" in summary.description
        assert result.has_errors is True
        assert result.has_warnings is True
        assert len(result.errors) == 2
        assert len(result.warnings) == 1

    @pytest.mark.parametrize(
        "overrides",
        [
            {},
            {"time_code": None},
            {"time_code": "999"},
            {"date": SATURDAY},
            {"employee_id": "E999"},
            {"start_time": "xx"},
            {"status": "pending"},
        ],
    )
    def test_valid_iff_no_errors_and_something_to_export(self, make_deviation, employees, time_codes, overrides):
        deviations = [make_deviation(**overrides)]

        result = validate(deviations, employees, time_codes, today=TODAY)

        approved_count = sum(1 for d in deviations if d.status == "approved")
        if approved_count:
            assert result.is_valid == (not result.has_errors)
        else:
            assert result.is_valid is True

    def test_camel_case_output(self, make_deviation, employees, time_codes):
        result = validate([make_deviation(time_code=None)], employees, time_codes, today=TODAY)

        dumped = result.model_dump(by_alias=True)

        assert dumped["isValid"] is False
        assert dumped["hasErrors"] is True
        assert dumped["stats"]["missingTimeCodes"] == 1
        assert dumped["issues"][1]["deviationId"] == 1

    def test_accepts_camel_case_records(self, employees, time_codes):
        deviation = Deviation.model_validate(
            {
                "id": 7,
                "employeeId": "E002",
                "date": "2025-07-08",
                "startTime": "08:00",
                "endTime": "16:00",
                "timeCode": "100",
                "status": "approved",
            }
        )

        result = validate([deviation], employees, time_codes, today=TODAY)

        assert result.is_valid is True
        assert result.issues == []


class TestBatchLogging:
    """Loggrader från en validering bär batchnamnet och berörd avvikelse."""

    def test_invalid_time_warning_names_the_deviation(self, make_deviation, employees, time_codes, caplog):
        deviations = [make_deviation(id=5, employee_id="E002", start_time="25:99")]

        with caplog.at_level("WARNING", logger="avvikelser.core.validation"):
            validate(deviations, employees, time_codes, today=TODAY, export_batch="2025-07")

        record = next(r for r in caplog.records if r.name.endswith("business_rules"))
        assert record.deviation_id == 5
        assert record.employee_id == "E002"
        assert record.log_context == {"export_batch": "2025-07"}

    def test_batch_defaults_to_date_span(self, make_deviation, employees, time_codes, caplog):
        deviations = [make_deviation(), make_deviation(date=SATURDAY, time_code="210")]

        with caplog.at_level("INFO", logger="avvikelser.core.validation"):
            validate(deviations, employees, time_codes, today=TODAY)

        verdict = caplog.records[-1]
        assert verdict.getMessage().startswith("Export validation")
        assert verdict.log_context["export_batch"] == "2025-07-05..2025-07-07"

    def test_context_is_cleared_after_validation(self, make_deviation, employees, time_codes, caplog):
        validate([make_deviation()], employees, time_codes, today=TODAY, export_batch="2025-07")

        with caplog.at_level("INFO"):
            logging.getLogger("avvikelser.test").info("after export")

        assert not hasattr(caplog.records[-1], "log_context")
