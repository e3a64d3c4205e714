from testdesk.models.user import User
from testdesk.models.test import Test
from testdesk.models.question import Question
from testdesk.models.submission import Submission
from testdesk.models.response_record import ResponseRecord

__all__ = ["User", "Test", "Question", "Submission", "ResponseRecord"]
