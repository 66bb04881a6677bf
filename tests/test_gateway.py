"""
Snapshot Gateway Tests
======================
Whole-collection save/load fidelity, including created_at precision.
"""
from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from bugtracker.core.errors import PersistenceError
from bugtracker.core.security import hash_password
from bugtracker.models.records import Account, BugRecord, BugStatus, Priority, Role, Severity
from bugtracker.services.directory import Directory
from bugtracker.services.gateway import SnapshotGateway


def test_empty_store_loads_empty(gateway):
    assert gateway.load_accounts() == []
    assert gateway.load_bugs() == []


def test_accounts_round_trip(gateway):
    accounts = [
        Account(username="zed", password_hash=hash_password("a"), role=Role.DEVELOPER),
        Account(username="amy", password_hash=hash_password("c"), role=Role.TESTER),
        Account(username="admin", password_hash=hash_password("b"), role=Role.ADMIN),
    ]
    gateway.save_accounts(accounts)
    first = gateway.load_accounts()

    gateway.save_accounts(first)
    second = gateway.load_accounts()

    assert first == accounts
    assert second == accounts


def test_bugs_round_trip_keeps_microseconds(gateway):
    bugs = [
        BugRecord(
            id=2,
            title="Login fails",
            category="Auth",
            priority=Priority.CRITICAL,
            severity=Severity.BLOCKER,
            project="Portal",
            created_at=datetime(2024, 2, 29, 23, 59, 59, 123456),
            status=BugStatus.IN_PROGRESS,
            assigned_developer="alice",
            attachment_path="/tmp/shot.png",
            reported_by="bob",
        ),
        BugRecord(
            id=1,
            title="Typo",
            priority=Priority.LOW,
            severity=Severity.MINOR,
            reported_by="bob",
        ),
    ]
    gateway.save_bugs(bugs)
    loaded = gateway.load_bugs()

    assert [b.id for b in loaded] == [1, 2]
    assert loaded[1] == bugs[0]
    assert loaded[0] == bugs[1]
    assert loaded[1].created_at.microsecond == 123456


def test_save_replaces_whole_snapshot(gateway):
    gateway.save_accounts([Account(username="a", password_hash="x", role=Role.TESTER)])
    gateway.save_accounts([Account(username="b", password_hash="y", role=Role.DEVELOPER)])

    assert [a.username for a in gateway.load_accounts()] == ["b"]


def test_save_failure_raises_persistence_error(gateway, monkeypatch):
    def broken_commit(self):
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    monkeypatch.setattr("sqlalchemy.orm.Session.commit", broken_commit)

    with pytest.raises(PersistenceError):
        gateway.save_accounts([Account(username="a", password_hash="x", role=Role.TESTER)])


def test_unreadable_store_treated_as_empty(gateway, monkeypatch):
    def broken_load():
        raise OperationalError("SELECT", {}, Exception("no such table"))

    monkeypatch.setattr(gateway, "load_accounts", broken_load)

    directory = Directory(gateway)
    assert directory.list_all() == []


def test_gateways_share_one_store(engine):
    SnapshotGateway(engine).save_accounts([Account(username="a", password_hash="x", role=Role.TESTER)])
    assert [a.username for a in SnapshotGateway(engine).load_accounts()] == ["a"]
