import os
import hashlib
import bcrypt


def newkey(n: int) -> str:
    """Generate a cryptographically secure random key."""
    return os.urandom(n).hex()


def new_sk() -> str:
    """Generate a new secret key."""
    return f"sk-{newkey(32)}"


def extract_key_id(key: str) -> str:
    """
    Extract the key identifier from a key for database lookup.
    Uses the first 16 characters (prefix + random part).
    """
    return key[:16] if len(key) >= 16 else key


def _prepare_key_for_bcrypt(key: str) -> bytes:
    """
    Prepare a key for bcrypt hashing.
    Bcrypt has a 72 byte limit, so we hash longer keys with SHA256 first.
    """
    key_bytes = key.encode('utf-8')
    if len(key_bytes) > 72:
        return hashlib.sha256(key_bytes).hexdigest().encode('utf-8')
    return key_bytes


def hash_key(key: str, rounds: int = 12) -> str:
    """
    Hash a secret key using bcrypt.

    Args:
        key: The plain text key to hash
        rounds: bcrypt cost factor

    Returns:
        The bcrypt hash as a string
    """
    salt = bcrypt.gensalt(rounds=rounds)
    key_bytes = _prepare_key_for_bcrypt(key)
    hashed = bcrypt.hashpw(key_bytes, salt)
    return hashed.decode('utf-8')


def verify_key(plain_key: str, hashed_key: str) -> bool:
    """
    Verify a key against its bcrypt hash using constant-time comparison.

    Args:
        plain_key: The plain text key to verify
        hashed_key: The bcrypt hash to compare against

    Returns:
        True if the key matches, False otherwise
    """
    try:
        key_bytes = _prepare_key_for_bcrypt(plain_key)
        return bcrypt.checkpw(key_bytes, hashed_key.encode('utf-8'))
    except (ValueError, TypeError):
        return False
