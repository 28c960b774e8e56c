class ServiceError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class DuplicateEmail(ServiceError):
    status_code = 409
    default_message = "User with this email already exists"


class InvalidCredentials(ServiceError):
    # same message for unknown email and wrong password
    status_code = 401
    default_message = "Invalid email or password"


class Unauthorized(ServiceError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(ServiceError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(ServiceError):
    status_code = 404
    default_message = "Not found"
