import pytest
from fastapi.testclient import TestClient

from bugtracker.core.config import Settings
from bugtracker.core.database import make_engine
from bugtracker.core.security import hash_password
from bugtracker.main import create_app
from bugtracker.models.records import Account, Role
from bugtracker.services.directory import Directory
from bugtracker.services.gateway import SnapshotGateway
from bugtracker.services.tracker import Tracker


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def notify(self, recipient, subject, body):
        self.sent.append((recipient, subject, body))


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'tracker.db'}"


@pytest.fixture
def engine(database_url):
    engine = make_engine(database_url)
    yield engine
    engine.dispose()


@pytest.fixture
def gateway(engine):
    return SnapshotGateway(engine)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def directory(gateway):
    d = Directory(gateway)
    d.ensure_bootstrap_admin()
    return d


@pytest.fixture
def tracker(gateway, notifier):
    return Tracker(gateway, notifier)


@pytest.fixture
def admin(directory):
    return directory.get("admin")


def make_account(username, role, password="secret"):
    return Account(username=username, password_hash=hash_password(password), role=role)


@pytest.fixture
def tester():
    return make_account("bob", Role.TESTER)


@pytest.fixture
def developer():
    return make_account("alice", Role.DEVELOPER)


@pytest.fixture
def manager():
    return make_account("pm", Role.PROJECT_MANAGER)


@pytest.fixture
def settings(database_url):
    return Settings(database_url=database_url, admin_password="admin123", log_level="WARNING")


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def login(client):
    def _login(username, password):
        resp = client.post("/api/auth/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}

    return _login


@pytest.fixture
def admin_headers(login):
    return login("admin", "admin123")
