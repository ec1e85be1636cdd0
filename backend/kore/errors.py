"""
Application error taxonomy.

Services raise these; the handlers registered in main.py turn them into
JSON responses with the matching HTTP status.
"""


class AppError(Exception):
    """Base class for errors surfaced to API callers"""
    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str = None, status_code: int = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Bad Request"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class AuthError(AppError):
    status_code = 401
    default_message = "Not authorized"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Forbidden"


class ConflictError(AppError):
    status_code = 409
    default_message = "Conflict"


def validation_message(errors: list) -> str:
    """Flatten pydantic error dicts into a single human readable message"""
    messages = []
    for error in errors:
        msg = error.get("msg", "Invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        messages.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(messages) or ValidationError.default_message
