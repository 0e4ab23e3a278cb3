"""
SQLAlchemy-backed record store for flat comment rows.

Every mutation commits on its own, so a multi-step operation built on top of
the store (such as a cascade delete) keeps whatever it completed if a later
step fails.
"""
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from threadbox.core.db.tables.comment import Comment


@dataclass(frozen=True)
class NewComment:
    """Validated creation payload produced by validate_new_comment()."""
    post_id: int
    author_id: str
    content: str
    parent_id: int | None = None


class CommentStore:
    def __init__(self, session: Session):
        self.session = session

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

    def insert(self, new_comment: NewComment) -> Comment:
        now = datetime.now(timezone.utc)
        comment = Comment(
            post_id=new_comment.post_id,
            author_id=new_comment.author_id,
            content=new_comment.content,
            parent_id=new_comment.parent_id,
            likes=[],
            created_at=now,
            updated_at=now,
        )
        self.session.add(comment)
        self._commit()
        self.session.refresh(comment)
        return comment

    def find_by_id(self, comment_id: int) -> Comment | None:
        return self.session.execute(
            select(Comment).where(Comment.id == comment_id)
        ).scalar()

    def find_by_post_id(self, post_id: int) -> list[Comment]:
        """All rows of a post, oldest first; equal timestamps fall back to insertion id."""
        return list(
            self.session.execute(
                select(Comment)
                .where(Comment.post_id == post_id)
                .order_by(Comment.created_at.asc(), Comment.id.asc())
            ).scalars().all()
        )

    def find_by_parent_id(self, parent_id: int) -> list[Comment]:
        return list(
            self.session.execute(
                select(Comment)
                .where(Comment.parent_id == parent_id)
                .order_by(Comment.created_at.asc(), Comment.id.asc())
            ).scalars().all()
        )

    def update_content(self, comment_id: int, content: str, updated_at: datetime) -> Comment | None:
        comment = self.find_by_id(comment_id)
        if comment is None:
            return None

        comment.content = content
        comment.updated_at = updated_at
        self._commit()
        self.session.refresh(comment)
        return comment

    def delete_by_id(self, comment_id: int) -> int:
        """Delete one row; returns the number of rows removed (0 or 1)."""
        try:
            result = self.session.execute(
                delete(Comment).where(Comment.id == comment_id)
            )
        except SQLAlchemyError:
            self.session.rollback()
            raise
        self._commit()
        return result.rowcount

    def delete_by_post_id(self, post_id: int) -> int:
        try:
            result = self.session.execute(
                delete(Comment).where(Comment.post_id == post_id)
            )
        except SQLAlchemyError:
            self.session.rollback()
            raise
        self._commit()
        return result.rowcount
