from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError

from models import Profile, User
from services import config

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="login/access-token")


async def get_current_user(token: str = Depends(oauth2_scheme)) -> User:
    cred_exc = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
        user_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        raise cred_exc
    user = await User.get_or_none(id=user_id)
    if not user:
        raise cred_exc
    return user


async def require_login(user: User = Depends(get_current_user)) -> User:
    if user.disabled:
        raise HTTPException(status_code=400, detail="Inactive user")
    return user


def require_profile(*allowed: Profile):
    async def _check(user: User = Depends(require_login)) -> User:
        if user.profile not in allowed:
            raise HTTPException(status_code=403, detail="Access denied")
        return user
    return _check


require_admin = require_profile(Profile.ADMIN)
