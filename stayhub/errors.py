"""
Domain exceptions raised by the service layer.

Each carries the HTTP status it maps to; the global handlers in
``error_handlers`` turn them into JSON responses.
"""


class ServiceError(Exception):
    status_code = 500
    error = "Service error"

    def __init__(self, message: str | None = None):
        self.message = message or self.error
        super().__init__(self.message)


class ValidationFailed(ServiceError):
    status_code = 400
    error = "Validation failed"

    def __init__(self, field: str, message: str, code: str = "invalid"):
        super().__init__(message)
        self.details = [{"field": field, "message": message, "code": code}]


class Unauthorized(ServiceError):
    status_code = 401
    error = "Unauthorized"


class Forbidden(ServiceError):
    status_code = 403
    error = "Forbidden"


class NotFound(ServiceError):
    status_code = 404
    error = "Not found"


class InsufficientCapacity(ServiceError):
    status_code = 400
    error = "Insufficient capacity"


class UpstreamStoreError(ServiceError):
    status_code = 500
    error = "Internal server error"


class ServiceUnavailable(ServiceError):
    status_code = 503
    error = "Service unavailable"
