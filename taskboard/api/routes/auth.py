import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.errors import AuthenticationError, NotFoundError, UnexpectedError, ValidationError
from taskboard.core.security import (
    CurrentUser,
    create_access_token,
    get_current_user,
    hash_password,
    verify_password,
)
from taskboard.db import crud
from taskboard.db.models import User
from taskboard.db.session import get_db
from taskboard.schemas.user import (
    LoginRequest,
    RegisterResponse,
    TokenResponse,
    UserCreate,
    UserRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: UserCreate,
    db: AsyncSession = Depends(get_db),
):
    if await crud.user_exists(db, data.username, data.email):
        raise ValidationError("User already exists")

    try:
        user = await crud.create_user(
            db,
            full_name=data.full_name,
            username=data.username,
            email=data.email,
            password_hash=hash_password(data.password),
        )
    except IntegrityError:
        # Lost a race with a concurrent registration
        await db.rollback()
        raise ValidationError("User already exists")
    except SQLAlchemyError as e:
        logger.error("Registration failed:", exc_info=True)
        raise UnexpectedError(str(e))

    logger.info(f"Registered user {user.id} ({user.username})")
    return {"message": "User registered successfully", "user": UserRead.model_validate(user)}


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    user = await crud.get_user_by_username(db, data.username)
    if not user or not verify_password(data.password, user.password_hash):
        raise AuthenticationError("Invalid credentials")

    token = create_access_token(user.id, user.username)
    return {"token": token, "user": UserRead.model_validate(user)}


@router.get("/me", response_model=UserRead)
async def me(
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    user = await db.get(User, current.id)
    if not user:
        raise NotFoundError("User not found")
    return user
