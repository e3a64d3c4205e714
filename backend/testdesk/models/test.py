"""
Test model - a timed paper made of questions.

Only published tests are listed to students. Authoring happens outside this
service; `load_data.py` seeds tests for local development.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from testdesk.database import Base


class Test(Base):
    """SQLAlchemy model for the tests table."""
    __tablename__ = "tests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    duration_minutes = Column(Integer, nullable=False, default=60,
                              doc="Time allowed for one attempt")
    total_marks = Column(Integer, nullable=False, default=0,
                         doc="Maximum achievable score")
    is_published = Column(Boolean, nullable=False, default=False,
                          doc="Visible in the student test list when true")
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True,
                        doc="Creator who owns this test")
    created_at = Column(DateTime(timezone=True), nullable=False,
                        default=lambda: datetime.now(timezone.utc))

    creator = relationship("User", back_populates="tests")
    questions = relationship("Question", back_populates="test",
                             order_by="Question.id")
    submissions = relationship("Submission", back_populates="test")

    def __repr__(self):
        return f"<Test(id={self.id}, title='{self.title}', published={self.is_published})>"
