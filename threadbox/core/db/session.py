from sqlalchemy import select
from threadbox.core.db.tables.secretkey import SecretKey
from fastapi import Depends, HTTPException, status, Request
from typing import Generator
from sqlalchemy.orm import sessionmaker, Session
from threadbox.core.db.engine import engine
from threadbox.core.security import verify_key, extract_key_id

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_current_user(
    request: Request,
    session: Session = Depends(get_db),
) -> SecretKey:
    """Resolve the caller's secret key (cookie first, then X-Secret-Key header) to a user"""
    secret_key = request.cookies.get("secret_key") or request.headers.get("X-Secret-Key")

    if not secret_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated"
        )

    sk_object = session.execute(
        select(SecretKey).where(SecretKey.sk_id == extract_key_id(secret_key))
    ).scalar()

    if not sk_object:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid secret key"
        )

    # Verify the full key against the hash
    if not verify_key(secret_key, sk_object.sk_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid secret key"
        )

    return sk_object
