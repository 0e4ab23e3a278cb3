"""
Post lifecycle endpoints.

Posts own their comments: deleting a post removes its whole comment forest
before the post row itself.
"""
from sqlalchemy.orm import Session
from fastapi import APIRouter, Depends, HTTPException, status

from threadbox.core.db.tables.post import Post
from threadbox.core.db.tables.secretkey import SecretKey
from threadbox.core.db.session import get_db, get_current_user
from threadbox.core.logger import get_logger
from threadbox.core.comments import CommentStore, delete_all_for_post
from threadbox.api.v0.comment.main import get_post_or_404
from threadbox.api.v0.post.models import PostCreate, PostResponse

router = APIRouter(prefix="/posts")
logger = get_logger(__name__)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostCreate,
    current_user: SecretKey = Depends(get_current_user),
    session: Session = Depends(get_db),
):
    post = Post(
        username=current_user.username,
        title=post_data.title,
        content=post_data.content,
    )

    session.add(post)
    session.commit()
    session.refresh(post)

    logger.info(f"Post {post.id} created by {current_user.username}")
    return post


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: int,
    session: Session = Depends(get_db),
):
    return get_post_or_404(session, post_id)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: int,
    current_user: SecretKey = Depends(get_current_user),
    session: Session = Depends(get_db),
):
    """Delete a post and every comment on it (must be the author)"""
    post = get_post_or_404(session, post_id)

    if post.username != current_user.username:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this post",
        )

    delete_all_for_post(CommentStore(session), post_id)

    session.delete(post)
    session.commit()

    logger.info(f"Post {post_id} deleted by {current_user.username}")
