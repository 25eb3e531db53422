from pydantic import BaseModel
from starlette import status


class FieldError(BaseModel):
    field: str
    message: str


class FitLeagueError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class UnauthorizedError(FitLeagueError):
    """No acting identity, or the presented identity could not be verified."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(FitLeagueError):
    """The acting identity is known but lacks the required permission."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(FitLeagueError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(FitLeagueError):
    """Persistence or other infrastructure failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ValidationError(FitLeagueError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str, errors: list[FieldError] | None = None) -> None:
        super().__init__(detail)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, [FieldError(field=field, message=message)])


class InvalidAgeError(ValidationError):
    def __init__(self, age: object) -> None:
        message = f"Age must be a finite, non-negative number, got {age!r}"
        super().__init__(message, [FieldError(field="age", message=message)])
        self.age = age
