"""
Snapshot persistence for accounts and bug records.

Every save replaces the whole stored collection inside one transaction;
there are no partial updates. Loads return the collections in the order
they were saved (accounts by insertion position, bugs by id).
"""
import logging
from typing import List, Sequence

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from bugtracker.core.database import Base, make_sessionmaker
from bugtracker.core.errors import PersistenceError
from bugtracker.models.account import AccountRow
from bugtracker.models.bug import BugRow
from bugtracker.models.records import Account, BugRecord

logger = logging.getLogger(__name__)


class SnapshotGateway:
    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self.SessionLocal = make_sessionmaker(engine)
        # make sure tables exist
        try:
            Base.metadata.create_all(bind=engine)
        except SQLAlchemyError as e:
            logger.warning("Could not prepare snapshot tables: %s", e)

    # ---------- ACCOUNTS ----------

    def load_accounts(self) -> List[Account]:
        db = self.SessionLocal()
        try:
            rows = db.query(AccountRow).order_by(AccountRow.position).all()
            return [Account.model_validate(r) for r in rows]
        finally:
            db.close()

    def save_accounts(self, accounts: Sequence[Account]) -> None:
        rows = [
            AccountRow(
                position=i,
                username=a.username,
                role=a.role.value,
                password_hash=a.password_hash,
            )
            for i, a in enumerate(accounts, start=1)
        ]
        self._replace_all(AccountRow, rows)
        logger.debug("Saved %d account(s)", len(rows))

    # ---------- BUGS ----------

    def load_bugs(self) -> List[BugRecord]:
        db = self.SessionLocal()
        try:
            rows = db.query(BugRow).order_by(BugRow.id).all()
            return [BugRecord.model_validate(r) for r in rows]
        finally:
            db.close()

    def save_bugs(self, bugs: Sequence[BugRecord]) -> None:
        rows = [
            BugRow(
                id=b.id,
                title=b.title,
                category=b.category,
                project=b.project,
                priority=b.priority.value,
                severity=b.severity.value,
                status=b.status.value,
                assigned_developer=b.assigned_developer,
                reported_by=b.reported_by,
                attachment_path=b.attachment_path,
                created_at=b.created_at,
            )
            for b in bugs
        ]
        self._replace_all(BugRow, rows)
        logger.debug("Saved %d bug(s)", len(rows))

    def _replace_all(self, model, rows) -> None:
        db = self.SessionLocal()
        try:
            db.query(model).delete()
            db.add_all(rows)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to write %s snapshot: %s", model.__tablename__, e)
            raise PersistenceError(f"Could not save {model.__tablename__}") from e
        finally:
            db.close()
