from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from jose import jwt, JWTError

from deps import require_login
from models import User
from schemas import RefreshRequest, Token, UserRead
from services import config
from services.security import authenticate, token_pair

router = APIRouter()


@router.post("/login/access-token", response_model=Token)
async def login(form: OAuth2PasswordRequestForm = Depends()):
    user = await authenticate(form.username, form.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return token_pair(user)


@router.post("/login/refresh-token", response_model=Token)
async def refresh_token(payload: RefreshRequest):
    try:
        decoded = jwt.decode(payload.refresh_token, config.REFRESH_SECRET, algorithms=[config.ALGORITHM])
        user_id = int(decoded.get("sub"))
    except (JWTError, TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid refresh token")
    user = await User.get_or_none(id=user_id)
    if not user or user.disabled:
        raise HTTPException(status_code=401, detail="User not found")
    return token_pair(user)


@router.get("/users/me", response_model=UserRead)
async def read_me(current_user: User = Depends(require_login)):
    return UserRead.model_validate(current_user)
