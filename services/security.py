# services/security.py
from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt
from passlib.context import CryptContext

from models import User
from services import config

pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_ctx.hash(password)


async def authenticate(username: str, password: str) -> Optional[User]:
    """Credential lookup; None on unknown user, wrong password or disabled account."""
    user = await User.get_or_none(username=username)
    if not user or user.disabled:
        return None
    if not pwd_ctx.verify(password, user.hashed_password):
        return None
    return user


def create_token(data: dict, secret: str, expires: int) -> str:
    to_encode = data.copy()
    to_encode["exp"] = datetime.now(timezone.utc) + timedelta(seconds=expires)
    return jwt.encode(to_encode, secret, algorithm=config.ALGORITHM)


def token_pair(user: User) -> dict:
    data = {"sub": str(user.id), "profile": user.profile.value}
    return {
        "access_token": create_token(data, config.SECRET_KEY, config.ACCESS_EXPIRE_SECONDS),
        "refresh_token": create_token(data, config.REFRESH_SECRET, config.REFRESH_EXPIRE_SECONDS),
        "token_type": "bearer",
    }
