# backend/bugtracker/models/records.py

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# placeholder for assigned_developer when nobody is responsible
UNASSIGNED = "Unassigned"


class Role(str, Enum):
    ADMIN = "admin"
    TESTER = "tester"
    DEVELOPER = "developer"
    PROJECT_MANAGER = "project_manager"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Severity(str, Enum):
    MINOR = "minor"
    MAJOR = "major"
    BLOCKER = "blocker"


class BugStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"


def utcnow() -> datetime:
    # naive UTC; SQLite DateTime columns drop tzinfo
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Account(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    username: str
    password_hash: str
    role: Role


class BugRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    category: str = ""
    priority: Priority
    severity: Severity
    project: str = ""
    created_at: datetime = Field(default_factory=utcnow)
    status: BugStatus = BugStatus.OPEN
    assigned_developer: str = UNASSIGNED
    attachment_path: str = ""
    reported_by: str

    @property
    def is_assigned(self) -> bool:
        return bool(self.assigned_developer) and self.assigned_developer != UNASSIGNED
