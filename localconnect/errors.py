class AppError(Exception):
    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(AppError, ValueError):
    status_code = 400
    default_message = "Bad request"


class UnauthorizedError(AppError):
    status_code = 401
    default_message = "Not authorized, token missing or invalid"


class ForbiddenError(AppError, PermissionError):
    status_code = 403
    default_message = "Access denied"


class NotFoundError(AppError, LookupError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    status_code = 409
    default_message = "Already exists"
