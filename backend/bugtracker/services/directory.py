"""
Directory
=========
Owns the account collection: authentication, registration, role listings
and the administrator's edit/delete operations.

Every mutation is applied in memory, then the whole collection is written
through the gateway. If that write fails the in-memory change is undone
and the PersistenceError propagates.
"""
import logging
import threading
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from bugtracker.core.errors import (
    EmptyField,
    InvalidCredentials,
    NotFoundError,
    SelfDeleteError,
    UsernameTaken,
    ValidationError,
)
from bugtracker.core.permissions import require_role
from bugtracker.core.security import hash_password, verify_password
from bugtracker.models.records import Account, Role
from bugtracker.services.gateway import SnapshotGateway

logger = logging.getLogger(__name__)


class Directory:
    def __init__(self, gateway: SnapshotGateway) -> None:
        self.gateway = gateway
        self._lock = threading.RLock()
        try:
            self._accounts: List[Account] = gateway.load_accounts()
        except SQLAlchemyError as e:
            logger.warning("Could not load accounts, starting empty: %s", e)
            self._accounts = []
        logger.info("Loaded %d account(s)", len(self._accounts))

    # ---------- QUERIES ----------

    def _find(self, username: str) -> Optional[Account]:
        for a in self._accounts:
            if a.username == username:
                return a
        return None

    def get(self, username: str) -> Account:
        account = self._find(username)
        if account is None:
            raise NotFoundError(f"User not found: {username}")
        return account

    def list_all(self) -> List[Account]:
        return list(self._accounts)

    def list_by_role(self, role: Role) -> List[Account]:
        return [a for a in self._accounts if a.role == role]

    def authenticate(self, username: str, password: str) -> Account:
        account = self._find(username)
        if account is None or not verify_password(password, account.password_hash):
            logger.info("Failed login for %r", username)
            raise InvalidCredentials()
        return account

    def require_developer(self, username: str) -> Account:
        """Resolve ``username`` to an existing developer account."""
        account = self.get(username)
        if account.role != Role.DEVELOPER:
            raise ValidationError(f"{username} is not a developer")
        return account

    # ---------- MUTATIONS ----------

    def ensure_bootstrap_admin(self, username: str = "admin", password: str = "admin123") -> bool:
        """Create the built-in administrator if it is missing. Returns True if created."""
        with self._lock:
            for a in self._accounts:
                if a.username == username and a.role == Role.ADMIN:
                    return False
            if self._find(username) is not None:
                # the name is held by a non-admin account; uniqueness wins
                logger.warning("Bootstrap account %r exists without admin role", username)
                return False
            account = Account(username=username, password_hash=hash_password(password), role=Role.ADMIN)
            self._accounts.append(account)
            self._save(rollback=lambda: self._accounts.remove(account))
            logger.info("Created bootstrap administrator %r", username)
            return True

    def register(self, actor: Account, username: str, password: str, role: Role) -> Account:
        require_role(actor, Role.ADMIN)

        username = (username or "").strip()
        if not username:
            raise EmptyField("username")
        if not password:
            raise EmptyField("password")

        with self._lock:
            if self._find(username) is not None:
                raise UsernameTaken(username)

            account = Account(username=username, password_hash=hash_password(password), role=role)
            self._accounts.append(account)
            self._save(rollback=lambda: self._accounts.remove(account))

        logger.info("%s registered %r (%s)", actor.username, username, role.value)
        return account

    def update_account(self, actor: Account, username: str, new_password: str, new_role: Role) -> Account:
        require_role(actor, Role.ADMIN)
        if not new_password:
            raise EmptyField("password")

        with self._lock:
            account = self.get(username)
            prev_hash, prev_role = account.password_hash, account.role

            account.password_hash = hash_password(new_password)
            account.role = new_role

            def rollback():
                account.password_hash = prev_hash
                account.role = prev_role

            self._save(rollback=rollback)

        logger.info("%s updated %r (%s)", actor.username, username, new_role.value)
        return account

    def delete_account(self, actor: Account, username: str) -> None:
        if username == actor.username:
            raise SelfDeleteError()
        require_role(actor, Role.ADMIN)

        with self._lock:
            account = self.get(username)
            index = self._accounts.index(account)
            del self._accounts[index]
            self._save(rollback=lambda: self._accounts.insert(index, account))

        logger.info("%s deleted %r", actor.username, username)

    def _save(self, rollback) -> None:
        try:
            self.gateway.save_accounts(self._accounts)
        except Exception:
            rollback()
            raise
