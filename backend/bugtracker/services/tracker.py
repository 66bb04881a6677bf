"""
Tracker
=======
Owns the bug record collection: reporting, assignment, status changes and
the per-role listings.

Ids are assigned as max(existing ids) + 1, starting at 1. Status is a flat
enumeration: any status may be set from any other. Assignees are stored by
username only; checking that a username names a developer is the caller's
job (see Directory.require_developer).
"""
import logging
import threading
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from bugtracker.core.errors import AuthorizationError, EmptyTitle, NotFoundError
from bugtracker.core.permissions import require_role
from bugtracker.models.records import (
    UNASSIGNED,
    Account,
    BugRecord,
    BugStatus,
    Priority,
    Role,
    Severity,
    utcnow,
)
from bugtracker.services.gateway import SnapshotGateway
from bugtracker.services.notifier import ASSIGNED_SUBJECT, EmailNotifier, assigned_body, reported_body

logger = logging.getLogger(__name__)

REPORTER_ROLES = (Role.ADMIN, Role.TESTER, Role.DEVELOPER, Role.PROJECT_MANAGER)


def clean_title(title: str) -> str:
    title = (title or "").strip()
    if not title:
        raise EmptyTitle()
    return title


class Tracker:
    def __init__(self, gateway: SnapshotGateway, notifier: Optional[EmailNotifier] = None) -> None:
        self.gateway = gateway
        self.notifier = notifier or EmailNotifier()
        self._lock = threading.RLock()
        try:
            self._bugs: List[BugRecord] = sorted(gateway.load_bugs(), key=lambda b: b.id)
        except SQLAlchemyError as e:
            logger.warning("Could not load bugs, starting empty: %s", e)
            self._bugs = []
        logger.info("Loaded %d bug(s)", len(self._bugs))

    # ---------- QUERIES ----------

    def get(self, bug_id: int) -> BugRecord:
        for b in self._bugs:
            if b.id == bug_id:
                return b
        raise NotFoundError(f"Bug not found: {bug_id}")

    def list_all(self) -> List[BugRecord]:
        return list(self._bugs)

    def list_for_reporter(self, username: str) -> List[BugRecord]:
        return [b for b in self._bugs if b.reported_by == username]

    def list_for_developer(self, username: str) -> List[BugRecord]:
        return [b for b in self._bugs if b.assigned_developer == username]

    def next_id(self) -> int:
        return max((b.id for b in self._bugs), default=0) + 1

    # ---------- MUTATIONS ----------

    def report(
        self,
        actor: Account,
        title: str,
        category: str,
        priority: Priority,
        severity: Severity,
        project: str,
        attachment_path: str = "",
        assigned_developer: Optional[str] = UNASSIGNED,
    ) -> BugRecord:
        require_role(actor, *REPORTER_ROLES)

        title = clean_title(title)

        with self._lock:
            bug = BugRecord(
                id=self.next_id(),
                title=title,
                category=(category or "").strip(),
                priority=priority,
                severity=severity,
                project=(project or "").strip(),
                created_at=utcnow(),
                status=BugStatus.OPEN,
                assigned_developer=assigned_developer or UNASSIGNED,
                attachment_path=(attachment_path or "").strip(),
                reported_by=actor.username,
            )
            self._bugs.append(bug)
            self._save(rollback=lambda: self._bugs.remove(bug))

        logger.info("Bug #%d reported by %s", bug.id, actor.username)
        if bug.is_assigned:
            self.notifier.notify(bug.assigned_developer, ASSIGNED_SUBJECT, reported_body(bug.title))
        return bug

    def assign(self, actor: Account, bug_id: int, developer: str) -> BugRecord:
        require_role(actor, Role.PROJECT_MANAGER)

        with self._lock:
            bug = self.get(bug_id)
            prev = bug.assigned_developer
            bug.assigned_developer = developer

            def rollback():
                bug.assigned_developer = prev

            self._save(rollback=rollback)

        logger.info("Bug #%d assigned to %s by %s", bug.id, developer, actor.username)
        self.notifier.notify(developer, ASSIGNED_SUBJECT, assigned_body(bug.title))
        return bug

    def update_status(self, actor: Account, bug_id: int, new_status: BugStatus) -> BugRecord:
        require_role(actor, Role.DEVELOPER)

        with self._lock:
            bug = self.get(bug_id)
            if bug.assigned_developer != actor.username:
                raise AuthorizationError(f"Bug #{bug_id} is not assigned to {actor.username}")

            prev = bug.status
            bug.status = new_status

            def rollback():
                bug.status = prev

            self._save(rollback=rollback)

        logger.info("Bug #%d status %s -> %s", bug.id, prev.value, new_status.value)
        return bug

    def _save(self, rollback) -> None:
        try:
            self.gateway.save_bugs(self._bugs)
        except Exception:
            rollback()
            raise
