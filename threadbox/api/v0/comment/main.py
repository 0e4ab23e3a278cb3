from sqlalchemy import select
from sqlalchemy.orm import Session
from fastapi import APIRouter, Depends, HTTPException, status

from threadbox.core.db.tables.post import Post
from threadbox.core.db.tables.secretkey import SecretKey
from threadbox.core.db.session import get_db, get_current_user
from threadbox.core.logger import get_logger
from threadbox.core.comments import (
    CommentError,
    CascadeDeletionFailedError,
    CommentStore,
    create_comment,
    list_comments_for_post,
    update_comment,
    delete_comment,
)
from threadbox.api.v0.comment.models import (
    CommentCreate,
    CommentUpdate,
    CommentResponse,
    CommentWithReplies,
    CommentDeleteResponse,
)

router = APIRouter()
logger = get_logger(__name__)

COMMENT_ERROR_STATUS = {
    "invalid_content": status.HTTP_400_BAD_REQUEST,
    "parent_not_found": status.HTTP_404_NOT_FOUND,
    "parent_post_mismatch": status.HTTP_400_BAD_REQUEST,
    "comment_not_found": status.HTTP_404_NOT_FOUND,
    "forbidden": status.HTTP_403_FORBIDDEN,
    "cascade_deletion_failed": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def handle_comment_error(error: CommentError) -> HTTPException:
    """Convert a comment engine error to an HTTP exception."""
    status_code = COMMENT_ERROR_STATUS.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    detail: str | dict = error.message
    if isinstance(error, CascadeDeletionFailedError):
        detail = {"message": error.message, "deleted_count": error.deleted_count}

    return HTTPException(status_code=status_code, detail=detail)


def get_comment_store(session: Session = Depends(get_db)) -> CommentStore:
    return CommentStore(session)


def get_post_or_404(session: Session, post_id: int) -> Post:
    post = session.execute(select(Post).where(Post.id == post_id)).scalar()
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    return post


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_comment_for_post(
    post_id: int,
    comment_data: CommentCreate,
    current_user: SecretKey = Depends(get_current_user),
    store: CommentStore = Depends(get_comment_store),
):
    """Create a comment on a post, or a reply when parent_id is set"""
    get_post_or_404(store.session, post_id)

    try:
        return create_comment(
            store,
            post_id=post_id,
            author_id=current_user.username,
            content=comment_data.content,
            parent_id=comment_data.parent_id,
        )
    except CommentError as e:
        logger.warning(f"Comment creation on post {post_id} rejected: {e.code}")
        raise handle_comment_error(e) from e


@router.get("/posts/{post_id}/comments", response_model=list[CommentWithReplies])
def get_comments_for_post(
    post_id: int,
    store: CommentStore = Depends(get_comment_store),
):
    """Get all comments for a post as a tree"""
    get_post_or_404(store.session, post_id)

    roots = list_comments_for_post(store, post_id)
    return [CommentWithReplies.model_validate(node) for node in roots]


@router.put("/comments/{comment_id}", response_model=CommentResponse)
def edit_comment(
    comment_id: int,
    comment_data: CommentUpdate,
    current_user: SecretKey = Depends(get_current_user),
    store: CommentStore = Depends(get_comment_store),
):
    """Replace a comment's content (must be the author)"""
    try:
        return update_comment(store, comment_id, current_user.username, comment_data.content)
    except CommentError as e:
        raise handle_comment_error(e) from e


@router.delete("/comments/{comment_id}", response_model=CommentDeleteResponse)
def remove_comment(
    comment_id: int,
    current_user: SecretKey = Depends(get_current_user),
    store: CommentStore = Depends(get_comment_store),
):
    """Delete a comment and all of its replies (must be the author)"""
    try:
        deleted_count = delete_comment(store, comment_id, current_user.username)
    except CommentError as e:
        raise handle_comment_error(e) from e

    return CommentDeleteResponse(
        message="Comment deleted successfully",
        deleted_count=deleted_count,
    )
