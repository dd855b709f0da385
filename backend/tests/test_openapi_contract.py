from educonnect.core.config import settings
from educonnect.main import app


def test_openapi_contract_basics():
    schema = app.openapi()

    assert schema["openapi"].startswith("3.")
    assert schema["info"]["title"] == settings.APP_NAME
    assert schema["info"]["version"] == settings.APP_VERSION

    paths = schema.get("paths", {})
    required = [
        "/health",
        "/health/db",
        "/api/v1/login/access-token",
        "/api/v1/register",
        "/api/v1/auth/me",
        "/api/v1/profile/{user_id}",
        "/api/v1/tutors",
        "/api/v1/session/request",
        "/api/v1/session/{request_id}",
        "/api/v1/session/{request_id}/respond",
        "/api/v1/session/{request_id}/feedback",
        "/api/v1/session-requests",
        "/api/v1/search",
        "/api/v1/admin/users",
        "/api/v1/admin/users/{user_id}/verify",
        "/api/v1/admin/tutors",
        "/api/v1/admin/students",
        "/api/v1/admin/session-requests",
        "/api/v1/admin/feedbacks",
        "/api/v1/admin/dashboard",
    ]

    missing = [path for path in required if path not in paths]
    assert not missing, f"Missing OpenAPI paths: {missing}"

    assert "put" in paths["/api/v1/session/{request_id}/respond"]
    assert "put" in paths["/api/v1/profile/{user_id}"]
