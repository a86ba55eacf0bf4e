from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from lawdesk.auth import models, security
from lawdesk.auth.schemas import TokenPayload
from lawdesk.config import settings
from lawdesk.database import get_db

# auto_error is off so a missing header gets our own message rather than FastAPI's
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login", auto_error=False)


async def get_current_identity(token: Optional[str] = Depends(oauth2_scheme)) -> TokenPayload:
    """Verify the bearer credential and return the identity it carries.

    Stateless: nothing is looked up server-side, expiry is part of the token.
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = security.decode_access_token(token)
        return TokenPayload(**payload)
    except (JWTError, ValidationError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def require_admin(identity: TokenPayload = Depends(get_current_identity)) -> TokenPayload:
    if identity.role != models.UserRole.ADMIN.value:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return identity


async def get_current_user(
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> models.User:
    user = await db.get(models.User, identity.sub)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
