"""
Centralized error types and user-friendly error messages.
"""
import logging

from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error."""
    def __init__(self, message: str, status_code: int = 500, details: dict | None = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppError):
    """Validation error."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, status_code=400, details=details)


class UnauthorizedError(AppError):
    """Unauthorized access error."""
    def __init__(self, message: str = "Unauthorized access", details: dict | None = None):
        super().__init__(message, status_code=401, details=details)


class ForbiddenError(AppError):
    """Forbidden access error."""
    def __init__(self, message: str = "Access forbidden", details: dict | None = None):
        super().__init__(message, status_code=403, details=details)


class NotFoundError(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Resource not found", details: dict | None = None):
        super().__init__(message, status_code=404, details=details)


class ConflictError(AppError):
    """Write collided with an existing record."""
    def __init__(self, message: str = "Resource already exists", details: dict | None = None):
        super().__init__(message, status_code=409, details=details)


class DatabaseError(AppError):
    """Database error."""
    def __init__(self, message: str = "Database operation failed", details: dict | None = None):
        super().__init__(message, status_code=500, details=details)


ERROR_MESSAGES = {
    # Authentication
    "invalid_credentials": "Invalid email or password. Please try again.",
    "email_exists": "An account with this email already exists. Please login instead.",
    "weak_password": "Password must be at least 8 characters long.",
    "session_expired": "Your session has expired. Please login again.",
    "role_mismatch": "Role mismatch. Please select the correct account type.",

    # Jobs
    "job_not_found": "Job not found",
    "job_closed": "This job is no longer accepting applications.",
    "job_forbidden": "You can only manage your own jobs.",
    "invalid_job_data": "Job information is incomplete. Please fill in all required fields.",

    # Applications
    "already_applied": "You have already applied to this job",
    "application_failed": "Failed to submit application",
    "invalid_sort": "Invalid sort column.",
    "invalid_date_filter": "Invalid date filter. Use one of: all, 24h, 1w, 1m.",

    # General
    "unauthorized": "Unauthorized",
    "forbidden": "Forbidden",
    "not_found": "The requested resource was not found.",
    "server_error": "Something went wrong on our end. Please try again later.",
    "database_error": "Database connection issue. Please try again later.",
    "validation_error": "Validation failed",
}


def get_error_message(error_key: str, default: str | None = None) -> str:
    """Get a user-friendly error message."""
    return ERROR_MESSAGES.get(error_key, default or ERROR_MESSAGES["server_error"])


def field_errors(errors: list[dict]) -> dict[str, str]:
    """
    Flatten pydantic error dicts into ``{"field.path": "message"}``.

    The leading ``body``/``query``/``path`` location segment that FastAPI adds is
    dropped, and pydantic's ``"Value error, "`` prefix is stripped so messages
    raised from our own validators read as written. The first message wins
    when a field has several errors.
    """
    details: dict[str, str] = {}
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in {"body", "query", "path", "header"}:
            loc = loc[1:]
        key = ".".join(loc) or "__root__"
        msg = str(err.get("msg") or "Invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        details.setdefault(key, msg)
    return details


def handle_database_error(error: Exception, operation: str = "") -> AppError:
    """Translate a raw database error into an AppError with a user-friendly message."""
    logger.error(f"Database error during {operation}: {error}")

    error_str = str(error).lower()

    if "duplicate" in error_str or "unique" in error_str:
        return ConflictError("This record already exists. Please check your input.")

    if "foreign key" in error_str:
        return ValidationError("Invalid reference. The related record may have been deleted.")

    if "connection" in error_str or "operational" in error_str:
        return AppError(get_error_message("database_error"), status_code=503)

    return DatabaseError(get_error_message("server_error"))


def create_error_response(
    status_code: int,
    message: str,
    details: dict | None = None
) -> JSONResponse:
    """Create a standardized error response."""
    content = {
        "success": False,
        "error": message,
    }

    if details:
        content["details"] = details

    return JSONResponse(
        status_code=status_code,
        content=content
    )
