"""Domain exceptions raised by the service layer.

Each exception carries the HTTP status the request boundary answers with;
``workshop.main`` registers a single handler for ``WorkshopError``.
"""


class WorkshopError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(WorkshopError):
    """Malformed or missing input."""

    status_code = 400


class NotFoundError(WorkshopError):
    """Referenced entity is absent or inactive."""

    status_code = 404


class ConflictError(WorkshopError):
    """Operation not allowed in the entity's current state."""

    status_code = 400


class UnauthorizedError(WorkshopError):
    """Acting user lacks the role, or is not the assigned technician."""

    status_code = 401
