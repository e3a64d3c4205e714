"""
Question model - one item of a test, including its answer key.

`correct_answer`, `marks` and `negative_marks` are scoring data and must
never be serialised to a student who is attempting the test.
"""

from sqlalchemy import Column, Integer, Float, Text, ForeignKey, Index, JSON
from sqlalchemy.orm import relationship
from testdesk.database import Base


class Question(Base):
    """SQLAlchemy model for the questions table."""
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    test_id = Column(Integer, ForeignKey("tests.id"), nullable=False)
    question_type = Column(Text, nullable=False, default="mcq",
                           doc="Rendering hint for the client, e.g. mcq")
    image_url = Column(Text, nullable=True,
                       doc="Question image shown to the student")
    options = Column(JSON, nullable=False, default=list,
                     doc="Selectable options as a JSON list")
    correct_answer = Column(Text, nullable=False)
    marks = Column(Float, nullable=False, default=1,
                   doc="Awarded for a correct answer")
    negative_marks = Column(Float, nullable=False, default=0,
                            doc="Deducted for a wrong, attempted answer")

    test = relationship("Test", back_populates="questions")

    __table_args__ = (
        Index("ix_questions_test_id", "test_id"),
    )

    def __repr__(self):
        return f"<Question(id={self.id}, test={self.test_id}, type='{self.question_type}')>"
