class ServiceError(Exception):
    """Base for failures a route handler reports back to the client.

    ``status_code`` is the HTTP status the handler should answer with and
    ``message`` is shown to the user as-is.
    """

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotAuthenticated(ServiceError):
    status_code = 401


class PermissionDenied(ServiceError):
    status_code = 403


class NotFound(ServiceError):
    status_code = 404


class ValidationFailed(ServiceError):
    status_code = 400


class Conflict(ServiceError):
    status_code = 409
