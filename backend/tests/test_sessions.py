import uuid

import pytest
from sqlalchemy.orm import Session

from educonnect.core.errors import ConflictError
from educonnect.models.session_request import SessionRequest
from educonnect.models.user import UserRole
from educonnect.services.session_request_service import SessionRequestService


def _create(client, headers, tutor_id, **extra):
    body = {
        "tutorId": str(tutor_id),
        "subject": "Mathematics",
        "requestedTime": "2026-11-02T16:00:00Z",
        **extra,
    }
    return client.post("/api/v1/session/request", json=body, headers=headers)


def test_student_creates_pending_request(client, student, tutor, headers_for):
    res = _create(client, headers_for(student), tutor.id)
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Session request created successfully"
    request_id = body["sessionRequestId"]

    res = client.get(f"/api/v1/session/{request_id}", headers=headers_for(student))
    assert res.status_code == 200
    session = res.json()["session"]
    assert session["status"] == "pending"
    assert session["studentId"] == str(student.id)
    assert session["tutorId"] == str(tutor.id)
    assert session["studentName"] == "Sam Student"
    assert session["tutorName"] == "Tara Tutor"
    assert session["requestedTime"] == "2026-11-02T16:00:00"


def test_create_rejects_other_students_and_tutors(client, student, tutor, make_user, headers_for):
    other = make_user("Olga Other", UserRole.STUDENT)

    res = _create(client, headers_for(student), tutor.id, studentId=str(other.id))
    assert res.status_code == 403
    assert res.json() == {"detail": "Not enough permissions"}

    res = _create(client, headers_for(tutor), tutor.id)
    assert res.status_code == 403


def test_create_names_the_invalid_participant(db, client, student, tutor, admin, headers_for):
    res = _create(client, headers_for(student), student.id)
    assert res.status_code == 400
    assert res.json()["detail"] == "Invalid tutor ID"

    res = _create(client, headers_for(admin), tutor.id, studentId=str(tutor.id))
    assert res.status_code == 400
    assert res.json()["detail"] == "Invalid student ID"

    # Student side is checked first.
    res = _create(client, headers_for(admin), uuid.uuid4(), studentId=str(uuid.uuid4()))
    assert res.status_code == 400
    assert res.json()["detail"] == "Invalid student ID"

    assert db.query(SessionRequest).count() == 0


def test_admin_creates_on_behalf_of_student(client, student, tutor, admin, headers_for):
    res = _create(client, headers_for(admin), tutor.id, studentId=str(student.id))
    assert res.status_code == 201


def test_create_rejects_blank_subject(client, student, tutor, headers_for):
    res = _create(client, headers_for(student), tutor.id, subject="   ")
    assert res.status_code == 400
    assert res.json()["detail"] == "Subject is required"


def test_tutor_accepts_then_second_response_conflicts(
    client, student, tutor, make_session_request, headers_for
):
    request = make_session_request(student, tutor)

    res = client.put(
        f"/api/v1/session/{request.id}/respond",
        json={"status": "accepted"},
        headers=headers_for(tutor),
    )
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Session request accepted"
    assert body["sessionRequest"]["status"] == "accepted"
    assert body["sessionRequest"]["id"] == str(request.id)

    res = client.put(
        f"/api/v1/session/{request.id}/respond",
        json={"status": "declined"},
        headers=headers_for(tutor),
    )
    assert res.status_code == 409
    assert res.json()["detail"] == "Session request has already been resolved"

    res = client.get(f"/api/v1/session/{request.id}", headers=headers_for(student))
    assert res.json()["session"]["status"] == "accepted"


def test_tutor_declines(client, student, tutor, make_session_request, headers_for):
    request = make_session_request(student, tutor)

    res = client.put(
        f"/api/v1/session/{request.id}/respond",
        json={"status": "declined"},
        headers=headers_for(tutor),
    )
    assert res.status_code == 200
    assert res.json()["sessionRequest"]["status"] == "declined"


@pytest.mark.parametrize("status", ["pending", "maybe", "ACCEPTED", ""])
def test_respond_rejects_invalid_status_before_lookup(client, tutor, headers_for, status):
    res = client.put(
        f"/api/v1/session/{uuid.uuid4()}/respond",
        json={"status": status},
        headers=headers_for(tutor),
    )
    assert res.status_code == 400
    assert res.json()["detail"] == "Invalid status value"


def test_only_the_referenced_tutor_may_respond(
    client, student, tutor, make_user, make_session_request, headers_for
):
    other_tutor = make_user("Otto Tutor", UserRole.TUTOR)
    request = make_session_request(student, tutor)

    for user in (student, other_tutor):
        res = client.put(
            f"/api/v1/session/{request.id}/respond",
            json={"status": "accepted"},
            headers=headers_for(user),
        )
        assert res.status_code == 403

    missing = client.put(
        f"/api/v1/session/{uuid.uuid4()}/respond",
        json={"status": "accepted"},
        headers=headers_for(tutor),
    )
    assert missing.status_code == 403
    assert missing.json() == res.json()


def test_concurrent_responses_resolve_exactly_once(
    db, student, tutor, make_session_request, caller_for
):
    request = make_session_request(student, tutor)
    caller = caller_for(tutor)
    other = Session(bind=db.get_bind(), autoflush=False)
    try:
        # Both sessions have already read the request as pending.
        assert other.get(SessionRequest, request.id).status == "pending"

        SessionRequestService(db).respond(caller, request.id, "accepted")
        with pytest.raises(ConflictError):
            SessionRequestService(other).respond(caller, request.id, "declined")
    finally:
        other.close()

    db.expire_all()
    assert db.get(SessionRequest, request.id).status == "accepted"


def test_participant_listing_carries_counterpart_name_only(
    client, student, tutor, make_session_request, headers_for
):
    make_session_request(student, tutor, subject="Physics")

    res = client.get(
        "/api/v1/session-requests",
        params={"role": "student", "userId": str(student.id)},
        headers=headers_for(student),
    )
    assert res.status_code == 200
    [item] = res.json()["requests"]
    assert item["subject"] == "Physics"
    assert item["counterpartId"] == str(tutor.id)
    assert item["counterpartName"] == "Tara Tutor"
    assert "studentName" not in item

    res = client.get(
        "/api/v1/session-requests",
        params={"role": "tutor", "userId": str(tutor.id)},
        headers=headers_for(tutor),
    )
    assert res.status_code == 200
    [item] = res.json()["requests"]
    assert item["counterpartName"] == "Sam Student"


def test_participant_listing_defaults_and_empty(client, make_user, headers_for):
    newcomer = make_user("Nina New", UserRole.STUDENT)
    res = client.get("/api/v1/session-requests", headers=headers_for(newcomer))
    assert res.status_code == 200
    assert res.json() == {"requests": []}


def test_participant_listing_rules(
    client, student, tutor, admin, make_session_request, headers_for
):
    make_session_request(student, tutor)

    res = client.get(
        "/api/v1/session-requests",
        params={"role": "admin", "userId": str(student.id)},
        headers=headers_for(admin),
    )
    assert res.status_code == 400
    assert res.json()["detail"] == "Invalid user role"

    res = client.get(
        "/api/v1/session-requests",
        params={"role": "tutor", "userId": str(tutor.id)},
        headers=headers_for(student),
    )
    assert res.status_code == 403

    res = client.get(
        "/api/v1/session-requests",
        params={"role": "student", "userId": str(student.id)},
        headers=headers_for(admin),
    )
    assert res.status_code == 200
    assert len(res.json()["requests"]) == 1


def test_get_does_not_leak_existence(
    client, student, tutor, admin, make_user, make_session_request, headers_for
):
    outsider = make_user("Oscar Outsider", UserRole.STUDENT)
    request = make_session_request(student, tutor)

    foreign = client.get(f"/api/v1/session/{request.id}", headers=headers_for(outsider))
    missing = client.get(f"/api/v1/session/{uuid.uuid4()}", headers=headers_for(outsider))
    assert foreign.status_code == missing.status_code == 403
    assert foreign.json() == missing.json() == {"detail": "Not enough permissions"}

    res = client.get(f"/api/v1/session/{request.id}", headers=headers_for(tutor))
    assert res.status_code == 200

    res = client.get(f"/api/v1/session/{request.id}", headers=headers_for(admin))
    assert res.status_code == 200

    res = client.get(f"/api/v1/session/{uuid.uuid4()}", headers=headers_for(admin))
    assert res.status_code == 404


def test_session_endpoints_require_a_token(client, tutor):
    res = client.post(
        "/api/v1/session/request",
        json={
            "tutorId": str(tutor.id),
            "subject": "Mathematics",
            "requestedTime": "2026-11-02T16:00:00",
        },
    )
    assert res.status_code == 401
