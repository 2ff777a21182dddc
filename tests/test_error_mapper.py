import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from agribooks.core import ErrorMapper
from agribooks.core.exceptions import (AlertSinkFailure, ForbiddenError,
                                       InvalidArgument, NotFoundError,
                                       StorageUnavailable, UnauthorizedError)
from agribooks.main import create_app


@pytest.mark.parametrize(
    "exc, status_code, code",
    [
        (InvalidArgument("bad type"), 400, "INVALID_INPUT"),
        (UnauthorizedError("no header"), 401, "UNAUTHORIZED"),
        (ForbiddenError("admins only"), 403, "FORBIDDEN"),
        (NotFoundError("Reminder not found"), 404, "NOT_FOUND"),
        (StorageUnavailable("db down"), 503, "STORAGE_UNAVAILABLE"),
        (AlertSinkFailure("write failed"), 500, "ALERT_SINK_FAILURE"),
    ],
)
def test_domain_errors_keep_status_and_message(exc, status_code, code):
    assert ErrorMapper().to_http(exc) == (status_code, exc.message, code)


def test_unexpected_errors_hide_details():
    assert ErrorMapper().to_http(RuntimeError("secret")) == (500, "Internal server error", "INTERNAL_ERROR")
    assert ErrorMapper().to_http(KeyError("x"))[0] == 500


def test_custom_code_overrides_default():
    assert ErrorMapper().to_http(InvalidArgument("x", code="BAD_TYPE"))[2] == "BAD_TYPE"


def test_empty_message_falls_back():
    assert ErrorMapper().to_http(NotFoundError(""))[1] == "Internal server error"


class BrokenManager:
    def list_for_user(self, *args, **kwargs):
        raise RuntimeError("connection string with password=hunter2")


def test_unhandled_error_renders_generic_500(container, user, user_headers):
    container.reminder_manager.override(providers.Object(BrokenManager()))
    app = create_app(container, start_scheduler=False)

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/reminders", headers=user_headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error", "code": "INTERNAL_ERROR"}
    assert "hunter2" not in response.text
