import uuid

from educonnect.models.user import UserRole


def test_any_caller_views_a_public_profile(client, student, tutor, headers_for):
    res = client.get(f"/api/v1/profile/{tutor.id}", headers=headers_for(student))
    assert res.status_code == 200
    user = res.json()["user"]
    assert user["name"] == "Tara Tutor"
    assert user["profile"]["subjects"] == ["Mathematics", "Physics"]
    assert user["profile"]["location"] == "Online"
    assert "hashedPassword" not in user
    assert "learningGoals" not in user["profile"]

    res = client.get(f"/api/v1/profile/{uuid.uuid4()}", headers=headers_for(student))
    assert res.status_code == 404


def test_owner_updates_own_role_fields(client, tutor, headers_for):
    res = client.put(
        f"/api/v1/profile/{tutor.id}",
        json={
            "name": "Tara T. Tutor",
            "subjects": ["Chemistry", "chemistry", "Physics"],
            "availability": [{"day": "Friday", "time": "10:00-12:00"}],
        },
        headers=headers_for(tutor),
    )
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Profile updated successfully"
    assert body["user"]["name"] == "Tara T. Tutor"
    assert body["user"]["profile"]["subjects"] == ["Chemistry", "Physics"]
    assert body["user"]["profile"]["availability"] == [{"day": "Friday", "time": "10:00-12:00"}]
    # untouched
    assert body["user"]["profile"]["location"] == "Online"
    assert body["user"]["profile"]["verificationStatus"] == "pending"


def test_profile_update_cannot_change_role_or_verification(client, tutor, headers_for):
    res = client.put(
        f"/api/v1/profile/{tutor.id}",
        json={"role": "admin", "verificationStatus": "verified"},
        headers=headers_for(tutor),
    )
    assert res.status_code == 200
    user = res.json()["user"]
    assert user["role"] == "tutor"
    assert user["profile"]["verificationStatus"] == "pending"


def test_fields_of_the_other_role_are_rejected(client, student, headers_for):
    res = client.put(
        f"/api/v1/profile/{student.id}",
        json={"learningGoals": "Linear algebra", "subjects": ["Mathematics"]},
        headers=headers_for(student),
    )
    assert res.status_code == 400
    assert "subjects" in res.json()["detail"]


def test_only_the_owner_updates_a_profile(client, student, tutor, admin, headers_for):
    for caller in (tutor, admin):
        res = client.put(
            f"/api/v1/profile/{student.id}",
            json={"learningGoals": "Something else"},
            headers=headers_for(caller),
        )
        assert res.status_code == 403


def test_tutor_directory_lists_only_tutors(client, student, tutor, make_user, headers_for):
    make_user("Zed Tutor", UserRole.TUTOR, subjects=["History"])

    res = client.get("/api/v1/tutors", headers=headers_for(student))
    assert res.status_code == 200
    names = [user["name"] for user in res.json()["tutors"]]
    assert names == ["Tara Tutor", "Zed Tutor"]
