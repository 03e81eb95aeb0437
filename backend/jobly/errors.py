"""Error classes surfaced to API clients.

Every JoblyError carries the HTTP status it should be rendered with; the
exception handlers in main.py turn them into {"error": {"message", "status"}}.
"""


class JoblyError(Exception):
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: str | list[str] | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": {"message": self.message, "status": self.status_code}}


class BadRequestError(JoblyError):
    status_code = 400
    default_message = "Bad Request"


class NoDataError(BadRequestError):
    """Raised when a partial update is attempted with nothing to update."""

    default_message = "No data"


class UnauthorizedError(JoblyError):
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(JoblyError):
    status_code = 404
    default_message = "Not Found"
