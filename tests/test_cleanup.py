# tests/test_cleanup.py

from datetime import date, datetime, timedelta

from pytz import utc

from app.models.notification_tracking import NotificationTracking
from app.models.task import Task
from app.utils.best_effort import best_effort
from app.utils.schedulers.cleanup.tracking_cleaner import delete_stale_tracking_rows


def test_stale_tracking_rows_are_removed(db, make_account) -> None:
    account = make_account()
    task = Task(user_id=account.id, title="t")
    db.add(task)
    db.commit()
    today = date(2026, 3, 10)
    for days_ago in (0, 1, 2, 30):
        db.add(NotificationTracking(
            task_id=task.id, notification_type="1hr_reminder", sent_date=today - timedelta(days=days_ago)
        ))
    db.commit()

    deleted = delete_stale_tracking_rows(now=utc.localize(datetime(2026, 3, 10, 2, 0)))

    assert deleted == 2
    remaining = sorted(row.sent_date for row in db.query(NotificationTracking).all())
    assert remaining == [today - timedelta(days=1), today]


def test_best_effort_returns_default_on_failure() -> None:
    @best_effort("exploding side effect", default=list)
    def explode():
        raise ValueError("boom")

    @best_effort("quiet side effect")
    def fine():
        return 42

    assert explode() == []
    assert fine() == 42
