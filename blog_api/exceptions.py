"""
Error taxonomy for django-blog-api.

Services raise these; the HTTP layer maps them to a status code and a
JSON body of the form ``{"success": false, "error": message}``.
"""


class BlogAPIError(Exception):
    """Base class for errors that carry an HTTP status."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BlogAPIError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Invalid input"


class ConflictError(BlogAPIError):
    """A unique field is already taken."""

    status_code = 400
    default_message = "Resource already exists"


class AuthError(BlogAPIError):
    """Bad credentials or a missing/invalid bearer token."""

    status_code = 401
    default_message = "Authentication required"


class ForbiddenError(BlogAPIError):
    """Authenticated, but not allowed to touch this resource."""

    status_code = 403
    default_message = "Forbidden"


class NotFoundError(BlogAPIError):
    status_code = 404
    default_message = "Not found"


class InternalError(BlogAPIError):
    status_code = 500
