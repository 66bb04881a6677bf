# backend/bugtracker/api/routes.py

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from bugtracker.api.auth_routes import UserOut
from bugtracker.api.deps_auth import (
    get_current_user,
    get_directory,
    get_tracker,
    require_admin,
    require_developer,
    require_project_manager,
)
from bugtracker.core.errors import NotFoundError
from bugtracker.models.records import (
    UNASSIGNED,
    Account,
    BugRecord,
    BugStatus,
    Priority,
    Role,
    Severity,
)
from bugtracker.services.directory import Directory
from bugtracker.services.tracker import Tracker, clean_title
from bugtracker.services.views import dashboard_for, project, visible_to

router = APIRouter()

# ---------- SCHEMAS ----------


class BugCreate(BaseModel):
    title: str
    category: str = ""
    priority: Priority = Priority.LOW
    severity: Severity = Severity.MINOR
    project: str = ""
    attachment_path: str = ""
    assigned_developer: Optional[str] = None


class AssignIn(BaseModel):
    developer: str


class StatusIn(BaseModel):
    status: BugStatus


class UserUpdate(BaseModel):
    password: str
    role: Role


# ---------- ROUTES ----------


@router.get("/ping")
def ping():
    return {"message": "pong"}


# ---------- BUGS (every role reads its own dashboard) ----------


@router.get("/bugs")
def list_bugs(
    tracker: Tracker = Depends(get_tracker),
    user: Account = Depends(get_current_user),
):
    return dashboard_for(user, tracker)


@router.get("/bugs/{bug_id}")
def get_bug(
    bug_id: int,
    tracker: Tracker = Depends(get_tracker),
    user: Account = Depends(get_current_user),
):
    bug = tracker.get(bug_id)
    if not visible_to(user, bug):
        raise NotFoundError(f"Bug not found: {bug_id}")
    return project(user.role, bug)


@router.post("/bugs", response_model=BugRecord, status_code=status.HTTP_201_CREATED)
def report_bug(
    payload: BugCreate,
    tracker: Tracker = Depends(get_tracker),
    directory: Directory = Depends(get_directory),
    user: Account = Depends(get_current_user),
):
    # a blank title is rejected before the assignee is resolved
    clean_title(payload.title)

    assignee = (payload.assigned_developer or "").strip() or UNASSIGNED
    if assignee != UNASSIGNED:
        directory.require_developer(assignee)

    return tracker.report(
        user,
        title=payload.title,
        category=payload.category,
        priority=payload.priority,
        severity=payload.severity,
        project=payload.project,
        attachment_path=payload.attachment_path,
        assigned_developer=assignee,
    )


# ---------- ASSIGNMENT (project manager only) ----------


@router.patch("/bugs/{bug_id}/assignee", response_model=BugRecord)
def assign_bug(
    bug_id: int,
    payload: AssignIn,
    tracker: Tracker = Depends(get_tracker),
    directory: Directory = Depends(get_directory),
    user: Account = Depends(require_project_manager),
):
    developer = directory.require_developer(payload.developer.strip())
    return tracker.assign(user, bug_id, developer.username)


# ---------- STATUS (assigned developer only) ----------


@router.patch("/bugs/{bug_id}/status", response_model=BugRecord)
def update_bug_status(
    bug_id: int,
    payload: StatusIn,
    tracker: Tracker = Depends(get_tracker),
    user: Account = Depends(require_developer),
):
    return tracker.update_status(user, bug_id, payload.status)


# ---------- USERS ----------


@router.get("/developers", response_model=List[UserOut])
def list_developers(
    directory: Directory = Depends(get_directory),
    _user: Account = Depends(get_current_user),
):
    return [UserOut.model_validate(a) for a in directory.list_by_role(Role.DEVELOPER)]


@router.get("/users", response_model=List[UserOut])
def list_users(
    directory: Directory = Depends(get_directory),
    _admin: Account = Depends(require_admin),
):
    return [UserOut.model_validate(a) for a in directory.list_all()]


@router.patch("/users/{username}", response_model=UserOut)
def update_user(
    username: str,
    payload: UserUpdate,
    directory: Directory = Depends(get_directory),
    admin: Account = Depends(require_admin),
):
    return UserOut.model_validate(directory.update_account(admin, username, payload.password, payload.role))


@router.delete("/users/{username}")
def delete_user(
    username: str,
    directory: Directory = Depends(get_directory),
    user: Account = Depends(get_current_user),
):
    directory.delete_account(user, username)
    return {"ok": True}
