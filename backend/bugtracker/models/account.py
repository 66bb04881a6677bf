from sqlalchemy import Column, Integer, String
from bugtracker.core.database import Base


class AccountRow(Base):
    __tablename__ = "accounts"

    # insertion order of the snapshot
    position = Column(Integer, primary_key=True)

    username = Column(String, unique=True, index=True, nullable=False)

    # "admin" | "tester" | "developer" | "project_manager"
    role = Column(String, nullable=False)

    password_hash = Column(String, nullable=False)
