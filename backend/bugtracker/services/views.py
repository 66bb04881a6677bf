# backend/bugtracker/services/views.py

from datetime import datetime
from typing import List, Union

from pydantic import BaseModel, ConfigDict

from bugtracker.models.records import Account, BugRecord, BugStatus, Priority, Role, Severity
from bugtracker.services.tracker import Tracker


class _BugRowBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    category: str
    priority: Priority
    severity: Severity
    status: BugStatus
    project: str
    created_at: datetime


class AdminBugRow(_BugRowBase):
    """Admin and project manager tables: every column."""

    assigned_developer: str
    reported_by: str


class TesterBugRow(_BugRowBase):
    # testers only ever see their own reports
    assigned_developer: str


class DeveloperBugRow(_BugRowBase):
    # developers only ever see their own assignments
    reported_by: str


BugView = Union[AdminBugRow, TesterBugRow, DeveloperBugRow]

_ROW_FOR_ROLE = {
    Role.ADMIN: AdminBugRow,
    Role.PROJECT_MANAGER: AdminBugRow,
    Role.TESTER: TesterBugRow,
    Role.DEVELOPER: DeveloperBugRow,
}


def project(role: Role, bug: BugRecord) -> BugView:
    return _ROW_FOR_ROLE[role].model_validate(bug)


def visible_to(actor: Account, bug: BugRecord) -> bool:
    if actor.role == Role.TESTER:
        return bug.reported_by == actor.username
    if actor.role == Role.DEVELOPER:
        return bug.assigned_developer == actor.username
    return True


def dashboard_for(actor: Account, tracker: Tracker) -> List[BugView]:
    if actor.role == Role.TESTER:
        bugs = tracker.list_for_reporter(actor.username)
    elif actor.role == Role.DEVELOPER:
        bugs = tracker.list_for_developer(actor.username)
    else:
        bugs = tracker.list_all()
    return [project(actor.role, b) for b in bugs]
