"""
Password hashing (bcrypt) and bearer tokens (PyJWT, HS256)
"""
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from faculty_eval.core.errors import Unauthorized


ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=10)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def create_token(user_id: str, secret: str, expiry_days: int = 7) -> str:
    """Sign a token whose subject is the user id"""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "iat": now,
        "exp": now + timedelta(days=expiry_days),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_token(token: str, secret: str) -> str:
    """
    Validate a token and return its user id

    Raises:
        Unauthorized: expired, tampered or malformed token
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError as exc:
        raise Unauthorized("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise Unauthorized("Invalid token") from exc

    user_id = payload.get("sub")
    if not user_id:
        raise Unauthorized("Invalid token")
    return user_id
