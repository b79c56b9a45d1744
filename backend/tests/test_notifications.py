from sqlalchemy.exc import SQLAlchemyError

from hirehub.services.notifications import (
    application_status_notification,
    dispatch_notifications,
)

from conftest import API


class FlakySession:
    """Stands in for a Session whose Nth commit fails."""

    def __init__(self, fail_on_commit):
        self.fail_on_commit = fail_on_commit
        self.commits = 0
        self.pending = []
        self.stored = []
        self.rollbacks = 0

    def add_all(self, items):
        self.pending = list(items)

    def commit(self):
        self.commits += 1
        if self.commits == self.fail_on_commit:
            raise SQLAlchemyError("disk I/O error")
        self.stored.extend(self.pending)
        self.pending = []

    def rollback(self):
        self.rollbacks += 1
        self.pending = []


def test_failed_batch_is_reported_and_later_batches_still_sent():
    session = FlakySession(fail_on_commit=2)

    report = dispatch_notifications(
        session,
        [1, 2, 3, 4, 5],
        title="New Job Posted",
        message="hello",
        type="job_posted",
        related_id=7,
        batch_size=2,
    )

    assert report.delivered == 3
    assert report.failed_user_ids == [3, 4]
    assert session.rollbacks == 1
    assert [n.user_id for n in session.stored] == [1, 2, 5]
    assert all(n.related_id == "7" and n.is_read is False for n in session.stored)


def test_duplicate_recipients_collapsed():
    session = FlakySession(fail_on_commit=0)
    report = dispatch_notifications(session, [4, 4, 9], title="t", message="m", type="general")
    assert report.delivered == 2
    assert session.commits == 1


def test_no_recipients_no_commit():
    session = FlakySession(fail_on_commit=0)
    report = dispatch_notifications(session, [], title="t", message="m", type="general")
    assert report.delivered == 0
    assert session.commits == 0


def test_status_templates():
    assert application_status_notification("applied", "QA") is None
    title, message = application_status_notification("screening", "QA")
    assert title == "Application Under Review"
    assert message == "Your application for QA is now under review."


def test_read_flow(client, hr, candidate):
    for title in ("First", "Second"):
        res = client.post(
            f"{API}/notifications",
            json={"user_id": candidate["id"], "title": title, "message": "hi"},
            headers=hr["headers"],
        )
        assert res.status_code == 201
        assert res.json()["delivered"] == 1

    notifications = client.get(f"{API}/notifications", headers=candidate["headers"]).json()
    assert [n["title"] for n in notifications] == ["Second", "First"]
    assert all(n["type"] == "general" for n in notifications)
    assert client.get(f"{API}/notifications/unread-count", headers=candidate["headers"]).json() == {"unread": 2}

    res = client.post(f"{API}/notifications/{notifications[0]['id']}/read", headers=candidate["headers"])
    assert res.status_code == 200
    assert res.json()["is_read"] is True
    assert client.get(f"{API}/notifications/unread-count", headers=candidate["headers"]).json() == {"unread": 1}

    res = client.post(f"{API}/notifications/read-all", headers=candidate["headers"])
    assert res.json()["updated"] == 1
    assert client.get(f"{API}/notifications/unread-count", headers=candidate["headers"]).json() == {"unread": 0}


def test_cannot_read_someone_elses_notification(client, hr, candidate):
    client.post(
        f"{API}/notifications",
        json={"user_id": candidate["id"], "title": "Private", "message": "hi"},
        headers=hr["headers"],
    )
    notification_id = client.get(f"{API}/notifications", headers=candidate["headers"]).json()[0]["id"]

    res = client.post(f"{API}/notifications/{notification_id}/read", headers=hr["headers"])
    assert res.status_code == 404


def test_candidates_cannot_send_notifications(client, candidate):
    res = client.post(
        f"{API}/notifications",
        json={"user_id": candidate["id"], "title": "x", "message": "y"},
        headers=candidate["headers"],
    )
    assert res.status_code == 403
