"""Service-layer errors; each maps to one HTTP status in app.main."""


class ServiceError(Exception):
    """Base class for request-validation and authorization outcomes."""

    status_code: int = 400

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class BadRequestError(ServiceError):
    """Malformed input or invalid cross-reference (400)."""

    status_code = 400


class UnauthorizedError(ServiceError):
    """Bad credentials, missing auth, or invalid/expired/mismatched token (401)."""

    status_code = 401


class ForbiddenError(ServiceError):
    """Role or ownership denial (403)."""

    status_code = 403


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    """Duplicate email or phone (409)."""

    status_code = 409
