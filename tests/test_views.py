from bugtracker.models.records import Priority, Severity
from bugtracker.services.views import (
    AdminBugRow,
    DeveloperBugRow,
    TesterBugRow,
    dashboard_for,
    visible_to,
)


def _seed(tracker, tester, manager):
    tracker.report(tester, "mine, assigned", "UI", Priority.HIGH, Severity.MAJOR, "P", "", "alice")
    tracker.report(manager, "theirs", "API", Priority.LOW, Severity.MINOR, "P", "", "carol")
    tracker.report(tester, "mine, open", "UI", Priority.MEDIUM, Severity.MINOR, "P")


def test_tester_sees_own_reports_without_reporter(tracker, tester, manager):
    _seed(tracker, tester, manager)

    rows = dashboard_for(tester, tracker)

    assert [r.id for r in rows] == [1, 3]
    assert all(isinstance(r, TesterBugRow) for r in rows)
    assert "reported_by" not in rows[0].model_dump()
    assert rows[0].assigned_developer == "alice"


def test_developer_sees_assignments_without_assignee(tracker, tester, manager, developer):
    _seed(tracker, tester, manager)

    rows = dashboard_for(developer, tracker)

    assert [r.id for r in rows] == [1]
    assert isinstance(rows[0], DeveloperBugRow)
    assert "assigned_developer" not in rows[0].model_dump()
    assert rows[0].reported_by == "bob"


def test_manager_and_admin_see_everything(tracker, tester, manager, admin):
    _seed(tracker, tester, manager)

    for actor in (manager, admin):
        rows = dashboard_for(actor, tracker)
        assert [r.id for r in rows] == [1, 2, 3]
        assert all(isinstance(r, AdminBugRow) for r in rows)
        assert rows[1].reported_by == "pm"


def test_projection_does_not_touch_record(tracker, tester, manager):
    _seed(tracker, tester, manager)
    before = tracker.get(1).model_copy()

    dashboard_for(tester, tracker)

    assert tracker.get(1) == before


def test_visible_to(tracker, tester, manager, developer):
    _seed(tracker, tester, manager)

    assert visible_to(tester, tracker.get(1))
    assert not visible_to(tester, tracker.get(2))
    assert visible_to(developer, tracker.get(1))
    assert not visible_to(developer, tracker.get(3))
    assert visible_to(manager, tracker.get(3))
