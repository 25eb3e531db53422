from typing import Any

import jwt
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from heliclockter import datetime_utc, timedelta
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from fitleague.config import config
from fitleague.models.db.user import UserPublic
from fitleague.sql.users import get_user
from fitleague.utils.errors import UnauthorizedError

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = config.access_token_expire_minutes

# Tokens are issued by the external identity provider; this is only the verifying side.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


class TokenData(BaseModel):
    user: str


def create_access_token(data: dict[str, Any], expires_delta: timedelta) -> str:
    to_encode = data.copy()
    to_encode.update({"exp": datetime_utc.now() + expires_delta})
    return jwt.encode(to_encode, config.jwt_secret, algorithm=ALGORITHM)


def decode_access_token(token: str) -> TokenData | None:
    try:
        payload = jwt.decode(token, config.jwt_secret, algorithms=[ALGORITHM])
        return TokenData.model_validate(payload)
    except (jwt.PyJWTError, PydanticValidationError):
        return None


async def check_jwt_and_get_user(token: str | None) -> UserPublic | None:
    if token is None:
        return None

    token_data = decode_access_token(token)
    if token_data is None:
        return None

    user = await get_user(email=token_data.user)
    if user is None:
        return None

    return UserPublic.model_validate(user.model_dump())


async def user_authenticated(token: str | None = Depends(oauth2_scheme)) -> UserPublic:
    user = await check_jwt_and_get_user(token)
    if user is None:
        raise UnauthorizedError("Invalid authentication credentials")
    return user
