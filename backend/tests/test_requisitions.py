from hirehub.models import Notification

from conftest import API


def _create(client, user, **overrides):
    payload = {
        "department": "Engineering",
        "job_role": "DevOps Engineer",
        "experience_required": 3,
        "number_of_positions": 2,
        "skills_required": ["AWS", "Terraform"],
    }
    payload.update(overrides)
    return client.post(f"{API}/requisitions", json=payload, headers=user["headers"])


def _upload(client, user, requisition_id, name="Meera Nair"):
    return client.post(
        f"{API}/requisitions/{requisition_id}/candidates",
        json={
            "candidate_name": name,
            "candidate_email": "meera@example.com",
            "skills": ["AWS"],
            "experience": 4,
            "resume_url": "resume_123",
        },
        headers=user["headers"],
    )


def test_create_requisition_notifies_all_staff(client, db, hr, admin, candidate, make_user):
    second_hr = make_user("hr2@example.com", role="hr")

    res = _create(client, hr)
    assert res.status_code == 201
    body = res.json()
    assert body["requisition"]["status"] == "pending"
    assert body["requisition"]["created_by"] == hr["id"]
    assert body["requisition"]["creator_name"] == "Priya Rao"
    assert body["notifications"]["delivered"] == 3

    notified = {
        n.user_id
        for n in db.query(Notification).filter(Notification.title == "New Requisition Created").all()
    }
    assert notified == {hr["id"], admin["id"], second_hr["id"]}
    message = db.query(Notification).filter(Notification.user_id == admin["id"]).one().message
    assert message == "A new requisition for DevOps Engineer in Engineering has been created."


def test_candidates_cannot_create_requisitions(client, candidate):
    assert _create(client, candidate).status_code == 403


def test_upload_requires_approval(client, hr):
    requisition = _create(client, hr).json()["requisition"]
    res = _upload(client, hr, requisition["id"])
    assert res.status_code == 400
    assert res.json()["detail"] == "Requisition must be approved before uploading candidates"


def test_approval_records_approver(client, hr, admin):
    requisition = _create(client, hr).json()["requisition"]

    res = client.patch(
        f"{API}/requisitions/{requisition['id']}/status",
        json={"status": "approved"},
        headers=admin["headers"],
    )
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "approved"
    assert body["approved_by"] == admin["id"]
    assert body["approved_at"] is not None
    assert body["approver_name"] == "Ada Admin"


def test_status_transitions(client, hr):
    first = _create(client, hr).json()["requisition"]
    second = _create(client, hr).json()["requisition"]

    def move(requisition_id, status):
        return client.patch(
            f"{API}/requisitions/{requisition_id}/status",
            json={"status": status},
            headers=hr["headers"],
        )

    # pending -> closed directly
    assert move(first["id"], "closed").status_code == 200
    res = move(first["id"], "approved")
    assert res.status_code == 400
    assert res.json()["detail"] == "Cannot change requisition status from closed to approved"

    # pending -> approved -> closed, no way back
    assert move(second["id"], "approved").status_code == 200
    assert move(second["id"], "approved").status_code == 200
    assert move(second["id"], "pending").status_code == 400
    assert move(second["id"], "closed").json()["status"] == "closed"


def test_upload_candidate_notifies_creator(client, db, hr, admin):
    requisition = _create(client, hr).json()["requisition"]
    client.patch(
        f"{API}/requisitions/{requisition['id']}/status",
        json={"status": "approved"},
        headers=admin["headers"],
    )

    res = _upload(client, admin, requisition["id"])
    assert res.status_code == 201
    body = res.json()
    assert body["status"] == "submitted"
    assert body["uploaded_by"] == admin["id"]
    assert body["uploader_name"] == "Ada Admin"

    notification = (
        db.query(Notification)
        .filter(Notification.title == "New Candidate Uploaded")
        .one()
    )
    assert notification.user_id == hr["id"]
    assert notification.related_id == str(body["id"])
    assert notification.message == "A new candidate Meera Nair has been uploaded for DevOps Engineer position."


def test_listing_and_candidate_review(client, hr):
    pending = _create(client, hr, job_role="QA Engineer").json()["requisition"]
    approved = _create(client, hr).json()["requisition"]
    client.patch(
        f"{API}/requisitions/{approved['id']}/status",
        json={"status": "approved"},
        headers=hr["headers"],
    )
    uploaded = _upload(client, hr, approved["id"]).json()
    _upload(client, hr, approved["id"], name="Arjun Das")

    all_requisitions = client.get(f"{API}/requisitions", headers=hr["headers"]).json()
    assert {r["id"] for r in all_requisitions} == {pending["id"], approved["id"]}

    approved_list = client.get(f"{API}/requisitions/approved", headers=hr["headers"]).json()
    assert [r["id"] for r in approved_list] == [approved["id"]]
    assert approved_list[0]["candidates_count"] == 2

    res = client.patch(
        f"{API}/requisitions/candidates/{uploaded['id']}/status",
        json={"status": "shortlisted"},
        headers=hr["headers"],
    )
    assert res.status_code == 200
    assert res.json()["status"] == "shortlisted"
    assert res.json()["reviewer_name"] == "Priya Rao"

    candidates = client.get(f"{API}/requisitions/{approved['id']}/candidates", headers=hr["headers"]).json()
    assert {c["candidate_name"] for c in candidates} == {"Meera Nair", "Arjun Das"}

    assert client.get(f"{API}/requisitions/9999", headers=hr["headers"]).status_code == 404
