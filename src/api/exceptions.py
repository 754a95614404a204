"""
API error taxonomy.

Services raise these; the handlers registered in ``main`` turn them into
``{"success": false, "error": "..."}`` responses with the matching status.
"""


class ApiError(Exception):
    """Base class for errors that map onto an HTTP status"""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(ApiError):
    status_code = 400
    default_message = "Bad request"


class ValidationError(BadRequestError):
    """Field constraint violated"""
    default_message = "Validation failed"


class ForbiddenError(ApiError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Not found"


class ConflictError(ApiError):
    status_code = 409
    default_message = "Duplicate entry"
