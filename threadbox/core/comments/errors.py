"""
Errors raised by the comment engine.

Each error carries a stable machine-readable code; the HTTP layer maps codes
to status codes in handle_comment_error().
"""


class CommentError(Exception):
    """Base comment engine error."""

    def __init__(self, message: str, code: str = "comment_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class InvalidContentError(CommentError):
    """Content is empty or whitespace only."""

    def __init__(self, message: str = "Content cannot be empty or whitespace only"):
        super().__init__(message, "invalid_content")


class ParentNotFoundError(CommentError):
    """Declared parent comment does not exist."""

    def __init__(self, message: str = "Parent comment not found"):
        super().__init__(message, "parent_not_found")


class ParentPostMismatchError(CommentError):
    """Declared parent comment lives on another post."""

    def __init__(self, message: str = "Parent comment must belong to the same post"):
        super().__init__(message, "parent_post_mismatch")


class CommentNotFoundError(CommentError):
    def __init__(self, message: str = "Comment not found"):
        super().__init__(message, "comment_not_found")


class ForbiddenError(CommentError):
    """Caller is not the author of the comment."""

    def __init__(self, message: str = "You can only modify your own comments"):
        super().__init__(message, "forbidden")


class CascadeDeletionFailedError(CommentError):
    """
    A subtree delete stopped partway.

    deleted_count rows were already removed and stay removed; nothing is
    rolled back.
    """

    def __init__(self, deleted_count: int, message: str | None = None):
        self.deleted_count = deleted_count
        super().__init__(
            message or f"Cascade deletion failed after deleting {deleted_count} comment(s)",
            "cascade_deletion_failed",
        )
