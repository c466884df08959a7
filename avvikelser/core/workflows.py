"""Attestflöden per tidkod (förhandsgodkännande, efterhand, attest, flexibel)."""

from typing import Final, NamedTuple

from avvikelser.core.constants import (
    APPROVAL_ATTESTATION,
    APPROVAL_FLEXIBLE,
    APPROVAL_POST,
    APPROVAL_PRE,
    STATUS_APPROVED,
    STATUS_DRAFT,
    STATUS_PENDING,
    STATUS_REJECTED,
    STATUS_RETURNED,
)
from avvikelser.core.models import TimeCode


class WorkflowInfo(NamedTuple):
    type: str
    title: str
    description: str
    can_create_in_advance: bool
    can_create_retroactively: bool
    requires_manager_approval: bool = True


WORKFLOWS: Final[dict[str, WorkflowInfo]] = {
    APPROVAL_PRE: WorkflowInfo(
        type=APPROVAL_PRE,
        title="Förhandsgodkännande",
        description="Måste ansökas och godkännas innan ledigheten tas",
        can_create_in_advance=True,
        can_create_retroactively=False,
    ),
    APPROVAL_POST: WorkflowInfo(
        type=APPROVAL_POST,
        title="Efterhandsgodkännande",
        description="Kan registreras i efterhand men måste godkännas innan månadsstäng",
        can_create_in_advance=True,
        can_create_retroactively=True,
    ),
    APPROVAL_ATTESTATION: WorkflowInfo(
        type=APPROVAL_ATTESTATION,
        title="Attestering",
        description="Registreras i efterhand och attesteras av chef",
        can_create_in_advance=False,
        can_create_retroactively=True,
    ),
    APPROVAL_FLEXIBLE: WorkflowInfo(
        type=APPROVAL_FLEXIBLE,
        title="Flexibel hantering",
        description="Kan hanteras både innan och efter beroende på situation",
        can_create_in_advance=True,
        can_create_retroactively=True,
    ),
}

#: Används när tidkoden har ett okänt flöde.
DEFAULT_WORKFLOW: Final[WorkflowInfo] = WorkflowInfo(
    type=APPROVAL_ATTESTATION,
    title="Standard attestering",
    description="Standard process för attestering",
    can_create_in_advance=False,
    can_create_retroactively=True,
)

PENDING_TEXT: Final[dict[str, str]] = {
    APPROVAL_PRE: "Väntar på godkännande",
    APPROVAL_POST: "Väntar på efterhandsgodkännande",
    APPROVAL_ATTESTATION: "Väntar på attestering",
    APPROVAL_FLEXIBLE: "Väntar på hantering",
}

STATUS_TEXT: Final[dict[str, str]] = {
    STATUS_APPROVED: "Godkänd",
    STATUS_REJECTED: "Avvisad",
    STATUS_DRAFT: "Utkast",
    STATUS_RETURNED: "Returnerad",
}


def get_workflow_info(time_code: TimeCode) -> WorkflowInfo:
    return WORKFLOWS.get(time_code.approval_type, DEFAULT_WORKFLOW)


def can_create_retroactively(time_code: TimeCode) -> bool:
    return get_workflow_info(time_code).can_create_retroactively


def can_create_in_advance(time_code: TimeCode) -> bool:
    return get_workflow_info(time_code).can_create_in_advance


def get_status_text(status: str, approval_type: str) -> str:
    """Statustext för listor; väntande ärenden beskrivs utifrån flödet."""
    if status == STATUS_PENDING:
        return PENDING_TEXT.get(approval_type, "Väntar på granskning")
    return STATUS_TEXT.get(status, status)
