from sqlalchemy import String, Integer, DateTime, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone

from threadbox.core.db.tables.base import Base


class Comment(Base):
    """
    Flat comment row.

    Threads are expressed only through parent_id. There is no foreign key on
    parent_id: a reply may outlive its parent when a delete races an insert,
    and readers treat such a reply as a root.
    """

    __tablename__ = "comment"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, unique=True)
    post_id: Mapped[int] = mapped_column(Integer, ForeignKey("post.id"), index=True)
    author_id: Mapped[str] = mapped_column(String(256), index=True)
    content: Mapped[str] = mapped_column(String(4096))
    parent_id: Mapped[int | None] = mapped_column(Integer, nullable=True, default=None, index=True)

    # Opaque to the comment engine
    likes: Mapped[list[str]] = mapped_column(JSON, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc)
    )

    @property
    def is_edited(self) -> bool:
        return self.updated_at != self.created_at
