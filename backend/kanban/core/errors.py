"""Domain errors raised by the lifecycle managers.

Each error carries the HTTP status it maps to; ``kanban.main`` renders them
as ``{"message": ...}`` responses.
"""


class KanbanError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(KanbanError):
    """A required field is missing or a reference is unusable."""

    status_code = 400


class NotAuthenticated(KanbanError):
    status_code = 401


class Forbidden(KanbanError):
    """The board permission predicate rejected the requester."""

    status_code = 403


class NotFound(KanbanError):
    status_code = 404


class Conflict(KanbanError):
    """A unique field (email, username) is already taken."""

    status_code = 400

    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.field = field


class UploadRejected(KanbanError):
    """The upload collaborator refused a file (size or count limit)."""

    status_code = 400
