from sqlalchemy import JSON

from testdesk import models


def test_timestamps_are_timezone_aware_and_required():
    for column in (models.User.__table__.c.created_at,
                   models.Test.__table__.c.created_at,
                   models.Submission.__table__.c.submitted_at):
        assert column.type.timezone is True
        assert column.nullable is False


def test_question_options_use_portable_json():
    assert isinstance(models.Question.__table__.c.options.type, JSON)
    assert models.Question.__table__.c.options.nullable is False
