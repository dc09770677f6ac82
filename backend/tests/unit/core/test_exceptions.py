"""
Unit Tests for the exception hierarchy and error payloads
"""
import pytest

from kindred.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    InvalidPasswordTokenError,
    KindredError,
    ReportError,
    UnknownPaperSizeError,
    ValidationError,
    error_response,
)


class TestStatusCodes:

    @pytest.mark.parametrize("error, status_code", [
        (KindredError("boom"), 500),
        (AuthenticationError(), 401),
        (AuthorizationError(), 403),
        (InvalidPasswordTokenError(), 400),
        (ValidationError("bad"), 400),
        (ReportError("bad layout"), 500),
    ])
    def test_status_code(self, error, status_code):
        assert error.status_code == status_code


class TestErrorPayloads:

    def test_to_dict(self):
        error = KindredError("Something broke", code="BROKEN", details={"id": 1})

        assert error.to_dict() == {
            "code": "BROKEN",
            "message": "Something broke",
            "details": {"id": 1},
        }

    def test_error_response(self):
        payload = error_response(AuthenticationError("Nope"))

        assert payload["success"] is False
        assert payload["error"]["code"] == "AUTH_FAILED"
        assert payload["error"]["message"] == "Nope"

    def test_invalid_password_token(self):
        error = InvalidPasswordTokenError()

        assert isinstance(error, AuthenticationError)
        assert error.code == "INVALID_PASSWORD_TOKEN"
        assert error.message == "The password reset link has expired."

    def test_authorization_error(self):
        error = AuthorizationError("Admin access required")

        assert error.code == "NOT_AUTHORIZED"
        assert error_response(error)["error"]["message"] == "Admin access required"

    def test_validation_field(self):
        assert ValidationError("bad", field="email").details == {"field": "email"}
        assert ValidationError("bad").details == {}

    def test_unknown_paper_size(self):
        error = UnknownPaperSizeError("B5")

        assert isinstance(error, ReportError)
        assert error.code == "UNKNOWN_PAPER_SIZE"
        assert error.details["page_format"] == "B5"
        assert "B5" in error.message
