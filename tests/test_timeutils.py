from datetime import datetime, timedelta, timezone

import pytest

from pomotask.core.timeutils import to_rfc3339, parse_rfc3339
from pomotask.models.time_log import TaskTimeLog
from conftest import START


def test_instants_are_stored_as_fixed_width_utc_text():
    paris = timezone(timedelta(hours=1))
    value = datetime(2026, 3, 2, 10, 0, tzinfo=paris)

    assert to_rfc3339(value) == "2026-03-02T09:00:00.000000+00:00"


def test_text_order_matches_time_order():
    earlier = START
    later = START + timedelta(microseconds=5)
    assert to_rfc3339(earlier) < to_rfc3339(later)


def test_naive_datetime_is_refused():
    with pytest.raises(ValueError):
        to_rfc3339(datetime(2026, 3, 2, 9, 0))


def test_parse_accepts_z_suffix():
    assert parse_rfc3339("2026-03-02T09:00:00Z") == START


def test_round_trip_through_database(db, make_task):
    task_id = make_task()
    instant = START + timedelta(seconds=1, microseconds=123456)
    db.add(TaskTimeLog(task_id=task_id, started_at=instant))
    db.commit()
    db.expire_all()

    log = db.query(TaskTimeLog).filter(TaskTimeLog.task_id == task_id).one()
    assert log.started_at == instant
    assert log.started_at.tzinfo is not None
