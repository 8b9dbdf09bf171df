"""
Domain errors shared by repositories, services and the HTTP layer.
Each error carries a machine-readable kind and the HTTP status it maps to.
"""


class PartmatchError(Exception):
    """Base class. `message` is safe to show to the end caller."""

    kind = "error"
    status_code = 500
    default_message = "Unexpected error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PartmatchError):
    """Missing or malformed input; the caller can correct it."""

    kind = "validation_error"
    status_code = 422
    default_message = "Invalid input"


class DuplicateError(PartmatchError):
    kind = "duplicate"
    status_code = 409
    default_message = "Already exists"


class DuplicateRequestError(DuplicateError):
    kind = "duplicate_request"
    default_message = "You have already sent a request for this listing"


class DuplicateMatchError(DuplicateError):
    kind = "duplicate_match"
    default_message = "You have already expressed interest in this listing"


class NotFoundError(PartmatchError):
    kind = "not_found"
    status_code = 404
    default_message = "Not found"


class AuthError(PartmatchError):
    """No current identity where one is required."""

    kind = "auth_error"
    status_code = 401
    default_message = "Not authenticated"


class ForbiddenError(AuthError):
    kind = "forbidden"
    status_code = 403
    default_message = "Not allowed"


class StorageError(PartmatchError):
    """Datastore failure. Details are logged, never returned to the caller."""

    kind = "storage_error"
    status_code = 503
    default_message = "Storage is unavailable, please try again later"
