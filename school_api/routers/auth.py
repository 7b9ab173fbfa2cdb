"""Registration, login and token endpoints."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.deps import get_current_user
from ..models.user import User as UserModel
from ..schemas.auth_schemas import LoginRequest, RefreshRequest, RegisterRequest, TokenResponse
from ..schemas.user_schemas import User
from ..services.auth_service import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


@router.post("/register", response_model=User, status_code=status.HTTP_201_CREATED)
async def register(dto: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Create a non-admin account"""
    return await AuthService(db).register(dto)


@router.post("/login", response_model=TokenResponse)
async def login(dto: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Exchange username (or email) and password for tokens"""
    return await AuthService(db).login(dto)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(dto: RefreshRequest, db: AsyncSession = Depends(get_db)):
    return await AuthService(db).refresh(dto.refresh_token)


@router.get("/profile", response_model=User)
async def get_profile(current_user: UserModel = Depends(get_current_user)):
    return current_user


@router.post("/logout")
async def logout(current_user: UserModel = Depends(get_current_user)):
    """Tokens are stateless; clients discard them"""
    return {"message": "Logged out successfully"}
