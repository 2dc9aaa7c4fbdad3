"""Error taxonomy shared by services and the HTTP layer.

Every error carries the HTTP status class it maps to and renders itself as
the JSON body returned to the client. Nothing here leaks internal detail.
"""

from typing import Any, Dict, List, Optional


class FolioError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500
    default_msg: str = "Server Error"

    def __init__(self, msg: Optional[str] = None):
        self.msg = msg or self.default_msg
        super().__init__(self.msg)

    def to_body(self) -> Dict[str, Any]:
        return {"msg": self.msg}


class BadRequest(FolioError):
    status_code = 400
    default_msg = "Bad request"


class ValidationFailed(BadRequest):
    """One or more request fields failed validation."""

    default_msg = "Validation failed"

    def __init__(self, errors: List[Dict[str, str]]):
        self.errors = errors
        super().__init__()

    def to_body(self) -> Dict[str, Any]:
        return {"errors": self.errors}


class NotYetLiked(BadRequest):
    def __init__(self, label: str = "Post"):
        super().__init__(f"{label} has not yet been liked")


class Unauthenticated(FolioError):
    status_code = 401
    default_msg = "No token, authorization denied"


class NotAuthorized(FolioError):
    status_code = 403
    default_msg = "User not authorized"


class NotFound(FolioError):
    status_code = 404
    default_msg = "Not found"


class UserNotFound(NotFound):
    default_msg = "User not found"


class ProfileNotFound(NotFound):
    default_msg = "Profile not found"


class PostNotFound(NotFound):
    default_msg = "Post not found"


class ProjectNotFound(NotFound):
    default_msg = "Project not found"


class CommentNotFound(NotFound):
    default_msg = "Comment does not exist"


class ExperienceNotFound(NotFound):
    default_msg = "Experience not found"


class EducationNotFound(NotFound):
    default_msg = "Education not found"


class Conflict(FolioError):
    status_code = 409
    default_msg = "Conflict"


class AlreadyLiked(Conflict):
    def __init__(self, label: str = "Post"):
        super().__init__(f"{label} already liked")


class DuplicateKey(Conflict):
    """A unique field already holds the same value in another document."""

    default_msg = "Record already exists"


class ConcurrentUpdate(Conflict):
    """The document changed between read and write."""

    default_msg = "Record was modified by another request, please retry"


class Internal(FolioError):
    status_code = 500
    default_msg = "Server Error"
