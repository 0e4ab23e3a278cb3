import os
from pathlib import Path
from sqlalchemy import create_engine

database_url = os.getenv("THREADBOX_DB_URL") or "sqlite:///.data/threadbox.db"

# Ensure the .data directory exists for the default SQLite database
if database_url.startswith("sqlite:///.data/"):
    data_dir = Path(".data")
    data_dir.mkdir(exist_ok=True)

# Configure engine with connection pooling
# For SQLite, pool settings are mostly ignored but they matter for production DBs
engine = create_engine(
    database_url,
    echo=False,
    pool_size=10,
    max_overflow=20,
    pool_pre_ping=True,
    pool_recycle=3600,
)

# Create all tables on import
from threadbox.core.db.tables.base import Base
from threadbox.core.db.tables.secretkey import SecretKey
from threadbox.core.db.tables.post import Post
from threadbox.core.db.tables.comment import Comment

Base.metadata.create_all(engine)
