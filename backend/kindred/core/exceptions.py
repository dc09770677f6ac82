"""
Custom Exceptions for Kindred
=============================

Raise these instead of generic Exception so the API layer can map them to
status codes and a stable error payload.

Usage:
    from kindred.core.exceptions import AuthorizationError

    if not user.is_admin:
        raise AuthorizationError("Admin access required")
"""

from typing import Optional, Any, Dict


class KindredError(Exception):
    """Base exception for all Kindred errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(KindredError):
    """User authentication failed"""

    status_code = 401

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, code="AUTH_FAILED")


class AuthorizationError(KindredError):
    """User not authorized for this action"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="NOT_AUTHORIZED")


class InvalidPasswordTokenError(AuthenticationError):
    """Password reset token is unknown or has expired"""

    status_code = 400

    def __init__(self):
        super().__init__("The password reset link has expired.")
        self.code = "INVALID_PASSWORD_TOKEN"


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(KindredError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


# ============================================
# Report Errors
# ============================================

class ReportError(KindredError):
    """Report definition or layout problem"""

    def __init__(self, message: str, report: Optional[str] = None):
        super().__init__(message, code="REPORT_ERROR")
        if report:
            self.details["report"] = report


class UnknownPaperSizeError(ReportError):
    """Page format is not a known paper size"""

    def __init__(self, page_format: str):
        super().__init__(f"Unknown paper size '{page_format}'")
        self.code = "UNKNOWN_PAPER_SIZE"
        self.details["page_format"] = page_format


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: KindredError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "error": error.to_dict()
    }
