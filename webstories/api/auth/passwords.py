"""Password hashing with bcrypt."""

import bcrypt

# bcrypt only looks at the first 72 bytes
_MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password with a fresh salt."""
    password_bytes = password.encode("utf-8")[:_MAX_PASSWORD_BYTES]
    return bcrypt.hashpw(password_bytes, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a stored hash."""
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8")[:_MAX_PASSWORD_BYTES],
            hashed_password.encode("utf-8"),
        )
    except (ValueError, TypeError):
        return False
