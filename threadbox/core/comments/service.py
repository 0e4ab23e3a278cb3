"""
Comment engine operations.

- create_comment: validate the parent reference, then insert
- list_comments_for_post: fetch a post's rows and rebuild the reply tree
- update_comment / delete_comment: author-only mutations
- delete_all_for_post: bulk removal when the owning post goes away
"""
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy.exc import SQLAlchemyError

from threadbox.core.comments.errors import (
    CascadeDeletionFailedError,
    CommentNotFoundError,
    ForbiddenError,
    InvalidContentError,
    ParentNotFoundError,
    ParentPostMismatchError,
)
from threadbox.core.comments.store import CommentStore, NewComment
from threadbox.core.comments.tree import CommentNode, build_comment_tree
from threadbox.core.db.tables.comment import Comment
from threadbox.core.logger import get_logger

logger = get_logger(__name__)

MAX_CONTENT_LENGTH = 4096


class CommentAction(str, Enum):
    UPDATE = "update"
    DELETE = "delete"


def normalize_content(content: str | None) -> str:
    """Trim content, rejecting empty, whitespace-only or oversized text."""
    trimmed = (content or "").strip()
    if not trimmed:
        raise InvalidContentError()
    if len(trimmed) > MAX_CONTENT_LENGTH:
        raise InvalidContentError(
            f"Content cannot be longer than {MAX_CONTENT_LENGTH} characters"
        )
    return trimmed


def validate_new_comment(
    store: CommentStore,
    post_id: int,
    author_id: str,
    content: str,
    parent_id: int | None = None,
) -> NewComment:
    """
    Check a creation request and return the payload to insert.

    Read-only. The parent, when given, must exist and belong to post_id.
    """
    trimmed = normalize_content(content)

    if parent_id is not None:
        parent = store.find_by_id(parent_id)
        if parent is None:
            raise ParentNotFoundError()
        if parent.post_id != post_id:
            raise ParentPostMismatchError()

    return NewComment(
        post_id=post_id,
        author_id=author_id,
        content=trimmed,
        parent_id=parent_id,
    )


def authorize_comment_action(
    store: CommentStore,
    comment_id: int,
    author_id: str,
    action: CommentAction,
) -> Comment:
    """Return the comment if author_id wrote it; no side effects."""
    comment = store.find_by_id(comment_id)
    if comment is None:
        raise CommentNotFoundError()

    if comment.author_id != author_id:
        if action == CommentAction.DELETE:
            raise ForbiddenError("You can only delete your own comments")
        raise ForbiddenError("You can only modify your own comments")

    return comment


def create_comment(
    store: CommentStore,
    post_id: int,
    author_id: str,
    content: str,
    parent_id: int | None = None,
) -> Comment:
    new_comment = validate_new_comment(store, post_id, author_id, content, parent_id)
    comment = store.insert(new_comment)

    if parent_id is None:
        logger.info(f"Comment {comment.id} created on post {post_id} by {author_id}")
    else:
        logger.info(f"Reply {comment.id} to comment {parent_id} created on post {post_id} by {author_id}")
    return comment


def list_comments_for_post(store: CommentStore, post_id: int) -> list[CommentNode]:
    return build_comment_tree(store.find_by_post_id(post_id))


def update_comment(
    store: CommentStore,
    comment_id: int,
    author_id: str,
    new_content: str,
) -> Comment:
    authorize_comment_action(store, comment_id, author_id, CommentAction.UPDATE)
    trimmed = normalize_content(new_content)

    comment = store.update_content(comment_id, trimmed, datetime.now(timezone.utc))
    if comment is None:
        # Removed between the authorization check and the write
        raise CommentNotFoundError()

    logger.info(f"Comment {comment_id} updated by {author_id}")
    return comment


def delete_with_replies(store: CommentStore, comment_id: int) -> int:
    """
    Delete a comment and every transitive reply, deepest rows first.

    Walks the thread with an explicit stack instead of recursion, so thread
    depth is bounded only by memory. Returns the number of rows removed.

    Raises CascadeDeletionFailedError carrying the partial count if the store
    fails midway; rows already removed are not restored.
    """
    deleted_count = 0
    # (comment id, children already pushed)
    stack: list[tuple[int, bool]] = [(comment_id, False)]
    seen: set[int] = set()

    try:
        while stack:
            current_id, expanded = stack.pop()
            if expanded:
                deleted_count += store.delete_by_id(current_id)
                continue

            # Guards against corrupted parent chains
            if current_id in seen:
                continue
            seen.add(current_id)

            stack.append((current_id, True))
            for reply in reversed(store.find_by_parent_id(current_id)):
                stack.append((reply.id, False))
    except SQLAlchemyError as e:
        logger.error(
            f"Cascade deletion of comment {comment_id} failed after {deleted_count} row(s): {e}"
        )
        raise CascadeDeletionFailedError(deleted_count) from e

    return deleted_count


def delete_comment(store: CommentStore, comment_id: int, author_id: str) -> int:
    authorize_comment_action(store, comment_id, author_id, CommentAction.DELETE)
    deleted_count = delete_with_replies(store, comment_id)

    logger.info(f"Comment {comment_id} deleted by {author_id} ({deleted_count} row(s) removed)")
    return deleted_count


def delete_all_for_post(store: CommentStore, post_id: int) -> int:
    """
    Remove every comment of a post in one statement.

    No authorization here: the caller is already allowed to delete the post.
    """
    deleted_count = store.delete_by_post_id(post_id)
    logger.info(f"Deleted {deleted_count} comment(s) of post {post_id}")
    return deleted_count
