"""
Custom Exceptions for Campus CMS
================================

Every failure a service or dependency raises is one of these. Each class
carries the HTTP status the API layer maps it to, so handlers in
``app.main`` never need to inspect messages.

Usage:
    from app.core.exceptions import ResourceNotFoundError, AuthorizationError

    if not exam:
        raise ResourceNotFoundError("Exam", exam_id)

    if exam.department != identity.department:
        raise AuthorizationError("You can only modify records for your department")
"""

from typing import Optional, Any, Dict


class CampusCMSError(Exception):
    """Base exception for all Campus CMS errors"""

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

class AuthenticationError(CampusCMSError):
    """Request could not be tied to a known identity"""

    status_code = 401

    def __init__(self, message: str = "No token provided. Access denied."):
        super().__init__(message, code="AUTH_FAILED")


class TokenExpiredError(AuthenticationError):
    """JWT token has expired"""

    def __init__(self):
        super().__init__("Token expired. Please login again.")
        self.code = "TOKEN_EXPIRED"


class InvalidTokenError(AuthenticationError):
    """JWT token is invalid"""

    def __init__(self, message: str = "Invalid token. Access denied."):
        super().__init__(message)
        self.code = "INVALID_TOKEN"


class AuthorizationError(CampusCMSError):
    """Identity is known but not allowed to perform this action"""

    status_code = 403

    def __init__(self, message: str = "Access denied", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="NOT_AUTHORIZED", details=details)


class AccountNotApprovedError(AuthorizationError):
    """User account is pending or rejected"""

    def __init__(self, status: str):
        if status == "pending":
            message = "Access denied. Your account is pending approval."
        else:
            message = f"Access denied. Your account has been {status}."
        super().__init__(message, details={"status": status})
        self.code = "ACCOUNT_NOT_APPROVED"


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(CampusCMSError):
    """Referenced record does not exist (or is outside the caller's scope)"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: Optional[str] = None):
        details = {"resource_id": resource_id} if resource_id else None
        super().__init__(
            f"{resource_type} not found",
            code=f"{resource_type.upper().replace(' ', '_')}_NOT_FOUND",
            details=details
        )


# ============================================
# Validation Errors
# ============================================

class ValidationError(CampusCMSError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else None
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class ConflictError(CampusCMSError):
    """A concurrent write hit a storage uniqueness constraint"""

    status_code = 409

    def __init__(self, message: str = "Record was modified concurrently, please retry"):
        super().__init__(message, code="CONFLICT")


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: CampusCMSError) -> Dict[str, Any]:
    """Convert exception to the API failure envelope"""
    body: Dict[str, Any] = {
        "success": False,
        "message": error.message,
        "code": error.code,
    }
    if error.details:
        body["details"] = error.details
    return body
