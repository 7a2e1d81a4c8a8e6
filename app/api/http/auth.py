from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.domains.identity.schemas import UserCreate, UserLogin, TokenResponse
from app.domains.identity.services import IdentityService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """Registers a user and returns their token"""
    identity_service = IdentityService(db)
    user = await identity_service.register_user(user_data)
    return TokenResponse(auth_token=identity_service.issue_token(user))


@router.post("/signin", response_model=TokenResponse)
async def signin(
    login_data: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Exchanges username and password for a token"""
    identity_service = IdentityService(db)
    token = await identity_service.login_user(login_data)
    return TokenResponse(auth_token=token)
