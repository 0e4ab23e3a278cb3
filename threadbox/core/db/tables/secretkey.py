from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from threadbox.core.db.tables.base import Base
from datetime import datetime, timezone


class SecretKey(Base):
    """
    Hashed secret keys issued to users by the identity service.

    - sk_id: first 16 chars of the original key, used as a lookup identifier
    - sk_hash: bcrypt hash of the full secret key
    - username: the user the key belongs to; comments store it as author_id
    """
    __tablename__ = "secret_key"

    sk_id: Mapped[str] = mapped_column(String(16), primary_key=True)
    sk_hash: Mapped[str] = mapped_column(String(256))
    username: Mapped[str] = mapped_column(String(256), index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc)
    )
