from sqlalchemy import Column, DateTime, Integer, String
from bugtracker.core.database import Base


class BugRow(Base):
    __tablename__ = "bugs"

    id = Column(Integer, primary_key=True, autoincrement=False)

    title = Column(String, nullable=False)
    category = Column(String, nullable=False, default="")
    project = Column(String, nullable=False, default="")

    priority = Column(String, nullable=False)  # low | medium | high | critical
    severity = Column(String, nullable=False)  # minor | major | blocker
    status = Column(String, nullable=False, default="open")

    # usernames, resolved against the accounts snapshot at read time
    assigned_developer = Column(String, nullable=False, default="Unassigned")
    reported_by = Column(String, nullable=False, index=True)

    attachment_path = Column(String, nullable=False, default="")

    created_at = Column(DateTime, nullable=False)
