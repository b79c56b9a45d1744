import base64

from conftest import API

PDF_BYTES = base64.b64encode(b"%PDF-1.4 fake resume").decode()


def test_profile_update_and_staff_listing(client, hr, candidate):
    res = client.put(
        f"{API}/candidates/me",
        json={"skills": ["Python", "SQL"], "experience": 3, "location": "Chennai"},
        headers=candidate["headers"],
    )
    assert res.status_code == 200
    body = res.json()
    assert body["skills"] == ["Python", "SQL"]
    assert body["education"] == ""

    listing = client.get(f"{API}/candidates", headers=hr["headers"]).json()
    assert len(listing) == 1
    assert listing[0]["email"] == "cand@example.com"
    assert listing[0]["location"] == "Chennai"

    single = client.get(f"{API}/candidates/{candidate['id']}", headers=hr["headers"]).json()
    assert single["first_name"] == "Ravi"

    assert client.get(f"{API}/candidates", headers=candidate["headers"]).status_code == 403
    assert client.get(f"{API}/candidates/9999", headers=hr["headers"]).status_code == 404


def test_negative_experience_rejected(client, candidate):
    res = client.put(f"{API}/candidates/me", json={"experience": -1}, headers=candidate["headers"])
    assert res.status_code == 422


def test_resume_upload_sets_profile_resume(client, hr, candidate):
    res = client.post(
        f"{API}/files/resume",
        json={"file_name": "cv.pdf", "file_data": PDF_BYTES, "mime_type": "application/pdf"},
        headers=candidate["headers"],
    )
    assert res.status_code == 201
    storage_id = res.json()["storage_id"]
    assert storage_id.startswith("resume_")
    assert res.json()["url"] == f"https://placeholder.com/file/{storage_id}"

    profile = client.get(f"{API}/candidates/me", headers=candidate["headers"]).json()
    assert profile["resume_id"] == storage_id

    mine = client.get(f"{API}/files/resumes/{candidate['id']}", headers=candidate["headers"]).json()
    assert mine["resume_id"] == storage_id

    everyone = client.get(f"{API}/files/resumes", headers=hr["headers"]).json()
    assert [r["candidate_id"] for r in everyone] == [candidate["id"]]


def test_resume_upload_validation(client, candidate):
    bad_type = client.post(
        f"{API}/files/resume",
        json={"file_name": "cv.png", "file_data": PDF_BYTES, "mime_type": "image/png"},
        headers=candidate["headers"],
    )
    assert bad_type.status_code == 400
    assert bad_type.json()["detail"] == "Only PDF, DOC or DOCX resumes are accepted"

    bad_data = client.post(
        f"{API}/files/resume",
        json={"file_name": "cv.pdf", "file_data": "%%%not-base64%%%", "mime_type": "application/pdf"},
        headers=candidate["headers"],
    )
    assert bad_data.status_code == 400
    assert bad_data.json()["detail"] == "File data is not valid base64"


def test_resume_lookup_without_resume_is_null(client, hr, candidate):
    res = client.get(f"{API}/files/resumes/{candidate['id']}", headers=hr["headers"])
    assert res.status_code == 200
    assert res.json() is None


def test_staff_can_assign_resume(client, hr, candidate):
    res = client.put(
        f"{API}/files/resumes/{candidate['id']}",
        json={"resume_id": "resume_42"},
        headers=hr["headers"],
    )
    assert res.status_code == 200
    profile = client.get(f"{API}/candidates/me", headers=candidate["headers"]).json()
    assert profile["resume_id"] == "resume_42"


def test_profile_image_upload(client, candidate):
    image = base64.b64encode(b"\x89PNG fake").decode()
    res = client.post(f"{API}/files/profile-image", json={"image_data": image}, headers=candidate["headers"])
    assert res.status_code == 201
    storage_id = res.json()["storage_id"]
    assert storage_id.startswith("img_")

    me = client.get(f"{API}/auth/me", headers=candidate["headers"]).json()
    assert me["profile_image"] == f"https://placeholder.com/file/{storage_id}"


def test_master_data(client, admin, hr):
    res = client.post(f"{API}/master-data/departments", json={"name": "Engineering"}, headers=admin["headers"])
    assert res.status_code == 201
    client.post(f"{API}/master-data/departments", json={"name": "Design"}, headers=admin["headers"])
    duplicate = client.post(f"{API}/master-data/departments", json={"name": "Design"}, headers=admin["headers"])
    assert duplicate.status_code == 400

    for title, department in (("Backend Developer", "Engineering"), ("UI/UX Designer", "Design")):
        res = client.post(
            f"{API}/master-data/job-roles",
            json={"title": title, "department": department},
            headers=admin["headers"],
        )
        assert res.status_code == 201

    assert client.post(
        f"{API}/master-data/departments", json={"name": "Sales"}, headers=hr["headers"]
    ).status_code == 403

    departments = client.get(f"{API}/master-data/departments").json()
    assert [d["name"] for d in departments] == ["Design", "Engineering"]

    roles = client.get(f"{API}/master-data/job-roles", params={"department": "Design"}).json()
    assert [r["title"] for r in roles] == ["UI/UX Designer"]
