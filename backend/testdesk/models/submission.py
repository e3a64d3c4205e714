"""
Submission model - one scored attempt at a test.

Rows are append-only: the score is computed once at submit time and read
back as stored. Each submission owns the ResponseRecords created with it in
the same transaction.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from testdesk.database import Base


class Submission(Base):
    """SQLAlchemy model for the submissions table."""
    __tablename__ = "submissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    test_id = Column(Integer, ForeignKey("tests.id"), nullable=False)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    score = Column(Float, nullable=False, default=0,
                   doc="Final score with negative marking applied")
    time_taken_seconds = Column(Integer, nullable=True,
                                doc="Total attempt duration reported by the client")
    submitted_at = Column(DateTime(timezone=True), nullable=False,
                        default=lambda: datetime.now(timezone.utc))

    test = relationship("Test", back_populates="submissions")
    student = relationship("User", back_populates="submissions")
    responses = relationship("ResponseRecord", back_populates="submission",
                             order_by="ResponseRecord.id")

    __table_args__ = (
        Index("ix_submissions_test_id", "test_id"),
        Index("ix_submissions_student_id", "student_id"),
    )

    def __repr__(self):
        return f"<Submission(id={self.id}, test={self.test_id}, student={self.student_id}, score={self.score})>"
