from fastapi import HTTPException, status


class ApiError(HTTPException):
    """Base for the error kinds the API reports; the message becomes ``{"error": ...}``."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(status_code=type(self).status_code, detail=message)


class UnauthorizedError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ForbiddenError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class ValidationFailedError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(ApiError):
    status_code = status.HTTP_409_CONFLICT
