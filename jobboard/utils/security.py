import bcrypt

# bcrypt only looks at the first 72 bytes and newer builds raise beyond that.
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    pw_bytes = password.encode("utf-8")
    if len(pw_bytes) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password must be {BCRYPT_MAX_BYTES} bytes or less")
    return pw_bytes


def hash_password(password: str) -> str:
    """Hash a profile password with a fresh bcrypt salt."""
    if not password:
        raise ValueError("Password is required")
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
    except ValueError:
        # Oversized input or a malformed stored hash never authenticates.
        return False
