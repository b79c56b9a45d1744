import pytest
from sqlalchemy.exc import IntegrityError

from hirehub.api.v1 import applications as applications_api
from hirehub.models import Application, Notification

from conftest import API


def _apply(client, user, job_id, cover_letter=None):
    return client.post(
        f"{API}/applications",
        json={"job_id": job_id, "cover_letter": cover_letter},
        headers=user["headers"],
    )


def _candidate_notifications(db, user_id):
    return (
        db.query(Notification)
        .filter(Notification.user_id == user_id, Notification.type == "application_status")
        .all()
    )


def test_apply_notifies_job_poster(client, db, hr, candidate, post_job):
    job = post_job()["job"]

    res = _apply(client, candidate, job["id"], cover_letter="Hire me")
    assert res.status_code == 201
    body = res.json()
    assert body["status"] == "applied"
    assert body["candidate_id"] == candidate["id"]
    assert body["cover_letter"] == "Hire me"

    notification = db.query(Notification).filter(Notification.user_id == hr["id"]).one()
    assert notification.title == "New Job Application"
    assert notification.message == "Ravi Kumar applied for Backend Developer"
    assert notification.related_id == str(body["id"])


def test_apply_twice_fails(client, db, candidate, post_job):
    job = post_job()["job"]
    assert _apply(client, candidate, job["id"]).status_code == 201

    res = _apply(client, candidate, job["id"])
    assert res.status_code == 400
    assert res.json()["detail"] == "You have already applied to this job"
    assert db.query(Application).count() == 1


def test_unique_constraint_rejects_direct_duplicate(client, db, candidate, post_job):
    job = post_job()["job"]
    assert _apply(client, candidate, job["id"]).status_code == 201

    db.add(Application(job_id=job["id"], candidate_id=candidate["id"], status="applied"))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_concurrent_apply_maps_to_already_applied(client, db, candidate, post_job, monkeypatch):
    job = post_job()["job"]
    assert _apply(client, candidate, job["id"]).status_code == 201
    # Second request raced past the existence check
    monkeypatch.setattr(applications_api, "find_application", lambda db, job_id, candidate_id: None)

    res = _apply(client, candidate, job["id"])
    assert res.status_code == 400
    assert res.json()["detail"] == applications_api.ALREADY_APPLIED
    assert db.query(Application).count() == 1


def test_apply_stores_match_percentage(client, candidate, post_job):
    client.put(
        f"{API}/candidates/me",
        json={"skills": ["react", "python"], "experience": 2},
        headers=candidate["headers"],
    )
    job = post_job(required_skills=["React", "Node.js"], experience_required=4)["job"]
    assert _apply(client, candidate, job["id"]).json()["match_percentage"] == 50


def test_cannot_apply_to_closed_or_missing_job(client, hr, candidate, post_job):
    job = post_job()["job"]
    client.patch(f"{API}/jobs/{job['id']}", json={"status": "closed"}, headers=hr["headers"])

    res = _apply(client, candidate, job["id"])
    assert res.status_code == 400
    assert res.json()["detail"] == "This job is no longer accepting applications"
    assert _apply(client, candidate, 9999).status_code == 404


def test_staff_cannot_apply(client, hr, post_job):
    job = post_job()["job"]
    assert _apply(client, hr, job["id"]).status_code == 403


def test_selected_status_sends_one_congratulations(client, db, hr, candidate, post_job):
    job = post_job()["job"]
    application = _apply(client, candidate, job["id"]).json()

    res = client.patch(
        f"{API}/applications/{application['id']}/status",
        json={"status": "selected", "review_notes": "Great fit"},
        headers=hr["headers"],
    )
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "selected"
    assert body["reviewed_by"] == hr["id"]
    assert body["reviewed_at"] is not None
    assert body["review_notes"] == "Great fit"

    notifications = _candidate_notifications(db, candidate["id"])
    assert len(notifications) == 1
    assert "Congratulations" in notifications[0].title
    assert notifications[0].message.startswith("Great news! You have been selected for the Backend Developer")


@pytest.mark.parametrize(
    "status, title",
    [
        ("screening", "Application Under Review"),
        ("interview_scheduled", "Interview Scheduled"),
        ("interviewed", "Interview Completed"),
        ("rejected", "Application Update"),
    ],
)
def test_status_change_titles(client, db, hr, candidate, post_job, status, title):
    job = post_job()["job"]
    application = _apply(client, candidate, job["id"]).json()

    client.patch(
        f"{API}/applications/{application['id']}/status",
        json={"status": status},
        headers=hr["headers"],
    )

    notifications = _candidate_notifications(db, candidate["id"])
    assert [n.title for n in notifications] == [title]


def test_back_to_applied_is_silent(client, db, hr, candidate, post_job):
    job = post_job()["job"]
    application = _apply(client, candidate, job["id"]).json()

    res = client.patch(
        f"{API}/applications/{application['id']}/status",
        json={"status": "applied"},
        headers=hr["headers"],
    )
    assert res.status_code == 200
    assert _candidate_notifications(db, candidate["id"]) == []


def test_unknown_status_rejected(client, hr, candidate, post_job):
    job = post_job()["job"]
    application = _apply(client, candidate, job["id"]).json()
    res = client.patch(
        f"{API}/applications/{application['id']}/status",
        json={"status": "hired"},
        headers=hr["headers"],
    )
    assert res.status_code == 422


def test_candidate_views(client, candidate, post_job):
    job = post_job()["job"]
    other = post_job(title="Frontend Developer")["job"]

    assert client.get(f"{API}/applications/mine/job/{job['id']}", headers=candidate["headers"]).json() == []
    _apply(client, candidate, job["id"])

    mine = client.get(f"{API}/applications/mine", headers=candidate["headers"]).json()
    assert len(mine) == 1
    assert mine[0]["job_title"] == "Backend Developer"
    assert mine[0]["job_currency"] == "INR"

    assert len(client.get(f"{API}/applications/mine/job/{job['id']}", headers=candidate["headers"]).json()) == 1
    assert client.get(f"{API}/applications/mine/job/{other['id']}", headers=candidate["headers"]).json() == []


def test_hr_views_include_candidate_details(client, hr, candidate, post_job):
    job = post_job()["job"]
    _apply(client, candidate, job["id"])

    for_job = client.get(f"{API}/applications/job/{job['id']}", headers=hr["headers"]).json()
    assert for_job[0]["candidate_name"] == "Ravi Kumar"
    assert for_job[0]["candidate_email"] == "cand@example.com"
    assert for_job[0]["candidate_profile"]["user_id"] == candidate["id"]

    everything = client.get(f"{API}/applications", headers=hr["headers"]).json()
    assert everything[0]["job_title"] == "Backend Developer"
    assert everything[0]["job_department"] == "Engineering"

    assert client.get(f"{API}/applications", headers=candidate["headers"]).status_code == 403


def test_dashboard_stats(client, hr, candidate, post_job):
    job = post_job()["job"]
    post_job(title="Second role")
    application = _apply(client, candidate, job["id"]).json()
    client.patch(
        f"{API}/applications/{application['id']}/status",
        json={"status": "selected"},
        headers=hr["headers"],
    )

    stats = client.get(f"{API}/dashboard/stats", headers=hr["headers"]).json()
    assert stats == {
        "total_jobs": 2,
        "active_jobs": 2,
        "total_applications": 1,
        "selected_candidates": 1,
        "pending_applications": 0,
        "pending_requisitions": 0,
    }
