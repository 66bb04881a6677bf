# backend/bugtracker/seed_users.py

from typing import Optional

from bugtracker.core.config import Settings, settings as default_settings
from bugtracker.core.database import make_engine
from bugtracker.core.errors import NotFoundError
from bugtracker.models.records import Role
from bugtracker.services.directory import Directory
from bugtracker.services.gateway import SnapshotGateway

SEEDS = [
    {"username": "tester", "role": Role.TESTER, "password": "tester123"},
    {"username": "developer", "role": Role.DEVELOPER, "password": "developer123"},
    {"username": "manager", "role": Role.PROJECT_MANAGER, "password": "manager123"},
]


def seed_users(settings: Optional[Settings] = None) -> Directory:
    settings = settings or default_settings
    engine = make_engine(settings.database_url)
    try:
        directory = Directory(SnapshotGateway(engine))
        directory.ensure_bootstrap_admin(settings.admin_username, settings.admin_password)
        admin = directory.get(settings.admin_username)

        created = 0
        updated = 0

        for s in SEEDS:
            try:
                directory.get(s["username"])
            except NotFoundError:
                directory.register(admin, s["username"], s["password"], s["role"])
                created += 1
                print(f"✅ Created: {s['username']} ({s['role'].value})")
                continue

            # force reset password and role
            directory.update_account(admin, s["username"], s["password"], s["role"])
            updated += 1
            print(f"♻️ Updated: {s['username']} ({s['role'].value})")

        print(f"\nDone. Created {created} user(s). Updated {updated} user(s).")
        print("\nLogin creds:")
        for s in SEEDS:
            print(f" - {s['username']} / {s['password']}")

        return directory
    finally:
        engine.dispose()


if __name__ == "__main__":
    seed_users()
