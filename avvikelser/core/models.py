import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from avvikelser.core.constants import (
    DEFAULT_APPROVAL_TYPE,
    SCOPE_FULL_DAY,
    STATUS_PENDING,
    DeviationStatus,
    LeaveStatus,
)
from avvikelser.core.types import IssueCategory, IssueType


class Record(BaseModel):
    """Base for immutable snapshots handed to the core by the storage layer.

    Accepts both snake_case and camelCase keys; attributes are snake_case.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Employee(Record):
    """Employee as known to the payroll system (Anst.id in Kontek)."""
    employee_id: str
    first_name: str
    last_name: str
    personnummer: str | None = None
    email: str | None = None
    work_email: str | None = None
    department: str | None = None
    position: str | None = None
    manager: str | None = None  # employee_id of manager
    status: str = "active"
    role: str = "employee"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class TimeCode(Record):
    """Time code shared with Kontek Lön."""
    code: str
    name: str | None = None
    name_sv: str | None = Field(default=None, validation_alias=AliasChoices("name_sv", "nameSv", "nameSV"))
    name_en: str | None = Field(default=None, validation_alias=AliasChoices("name_en", "nameEn", "nameEN"))
    category: str | None = None
    # Fri sträng: tidkoder från lönesystemet kan ha flöden som saknas i WORKFLOWS
    approval_type: str = DEFAULT_APPROVAL_TYPE


class Deviation(Record):
    """
    A single time deviation (overtime, sick leave, VAB ...).

    start_time/end_time are kept as the raw "HH:MM" strings the client sent;
    they are parsed by the validation engine, which reports malformed values
    instead of refusing the record.
    """

    id: int
    employee_id: str
    date: datetime.date | None = None
    start_time: str | None = None
    end_time: str | None = None
    time_code: str | None = None
    comment: str | None = None
    status: DeviationStatus = STATUS_PENDING  # type: ignore[assignment]
    manager_comment: str | None = None
    submitted: datetime.datetime | None = None
    approved_by: str | None = None
    approved_at: datetime.datetime | None = None
    rejected_by: str | None = None
    rejected_at: datetime.datetime | None = None

    @model_validator(mode="after")
    def _approval_xor_rejection(self) -> "Deviation":
        approved = self.approved_by is not None or self.approved_at is not None
        rejected = self.rejected_by is not None or self.rejected_at is not None
        if approved and rejected:
            raise ValueError(f"Deviation {self.id} cannot be both approved and rejected")
        return self


class LeaveRequest(Record):
    """Leave request covering an inclusive date range."""
    id: int
    employee_id: str
    start_date: datetime.date
    end_date: datetime.date
    leave_type: str
    scope: str = SCOPE_FULL_DAY
    custom_start_time: str | None = None
    custom_end_time: str | None = None
    comment: str | None = None
    status: LeaveStatus = STATUS_PENDING  # type: ignore[assignment]
    manager_comment: str | None = None
    approved_by: str | None = None
    approved_at: datetime.datetime | None = None
    rejected_by: str | None = None
    rejected_at: datetime.datetime | None = None

    @model_validator(mode="after")
    def _end_not_before_start(self) -> "LeaveRequest":
        if self.end_date < self.start_date:
            raise ValueError(
                f"Leave request {self.id}: end_date {self.end_date} is before start_date {self.start_date}"
            )
        return self


# ==========================
# Valideringsrapport
# ==========================


class ValidationIssue(Record):
    """One line in the export validation report."""
    id: str
    code: str
    type: IssueType
    category: IssueCategory
    title: str
    description: str
    employee_id: str | None = None
    deviation_id: int | None = None
    action: str | None = None


class ValidationStats(BaseModel):
    """Counters collected while validating. Mutated only by the engine."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_deviations: int = 0
    valid_deviations: int = 0
    invalid_deviations: int = 0
    missing_time_codes: int = 0
    duplicates: int = 0
    data_errors: int = 0


class ValidationResult(BaseModel):
    """Outcome of one validation pass over a candidate export batch."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_valid: bool
    has_errors: bool
    has_warnings: bool
    issues: list[ValidationIssue] = Field(default_factory=list)
    stats: ValidationStats = Field(default_factory=ValidationStats)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.type == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.type == "warning"]
