import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from lawdesk.database import get_db
from lawdesk.auth import schemas, models
from lawdesk.auth.service import AuthService
from lawdesk.auth.dependencies import get_current_user
from lawdesk.audit.service import AuditService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=schemas.Token)
async def login(
    login_data: schemas.UserLogin,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """
    JSON login endpoint, accepts {"email": "...", "password": "..."}
    """
    auth_service = AuthService(db)
    user = await auth_service.authenticate_user(login_data.email, login_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    await AuditService(db).record(request, user.id, "login", "user", user.id)
    return auth_service.issue_token(user)


@router.post("/register", response_model=schemas.Token)
async def register(
    register_data: schemas.UserRegister,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """
    Create an admin account and log it in immediately.
    """
    auth_service = AuthService(db)
    user = await auth_service.register_user(register_data)
    logger.info(f"Registered user {user.id}")
    await AuditService(db).record(request, user.id, "register", "user", user.id, {"email": user.email})
    return auth_service.issue_token(user)


@router.get("/user", response_model=schemas.UserProfile)
async def read_current_user(current_user: models.User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=schemas.UserProfile)
async def update_profile(
    profile_in: schemas.ProfileUpdate,
    request: Request,
    current_user: models.User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    user = await AuthService(db).update_profile(current_user, profile_in)
    await AuditService(db).record(
        request, user.id, "update_profile", "user", user.id,
        {"fields": sorted(profile_in.model_dump(exclude_unset=True).keys())},
    )
    return user
