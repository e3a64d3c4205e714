"""ResponseRecord model - the stored answer to one question of a submission."""

from sqlalchemy import Column, Integer, Text, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship
from testdesk.database import Base


class ResponseRecord(Base):
    """SQLAlchemy model for the responses table."""
    __tablename__ = "responses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    submission_id = Column(Integer, ForeignKey("submissions.id"), nullable=False)
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False)
    selected_option = Column(Text, nullable=True,
                             doc="NULL or empty when the question was left unattempted")
    is_correct = Column(Boolean, nullable=False, default=False)
    time_spent_seconds = Column(Integer, nullable=False, default=0)

    submission = relationship("Submission", back_populates="responses")

    __table_args__ = (
        Index("ix_responses_submission_id", "submission_id"),
    )

    def __repr__(self):
        return f"<ResponseRecord(submission={self.submission_id}, question={self.question_id}, correct={self.is_correct})>"
