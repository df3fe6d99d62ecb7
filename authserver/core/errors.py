# authserver/core/errors.py


class AuthError(Exception):
    """
    Base class for errors that are returned to the caller as {"message": ...}.
    """
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AuthError):
    status_code = 400


class Conflict(AuthError):
    status_code = 409


class Unauthorized(AuthError):
    status_code = 401
