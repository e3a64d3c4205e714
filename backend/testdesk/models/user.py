"""
User model - students who attempt tests and creators who author them.

Passwords are never stored in clear text: `password_hash` holds a salted
one-way hash produced by werkzeug.security.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, Text, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from testdesk.database import Base


class User(Base):
    """SQLAlchemy model for the users table."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(Text, nullable=False, unique=True,
                   doc="Login identifier, stored trimmed and lower-cased")
    password_hash = Column(Text, nullable=False,
                           doc="Salted password hash, never the raw password")
    role = Column(Text, nullable=False, default="student",
                  doc="student | creator")
    created_at = Column(DateTime(timezone=True), nullable=False,
                        default=lambda: datetime.now(timezone.utc))

    submissions = relationship("Submission", back_populates="student")
    tests = relationship("Test", back_populates="creator")

    __table_args__ = (
        CheckConstraint("role IN ('student', 'creator')", name="ck_users_role"),
    )

    @property
    def display_name(self) -> str:
        """Local part of the email address, shown in the UI header."""
        return self.email.split("@")[0]

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
