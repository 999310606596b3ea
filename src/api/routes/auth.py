"""Authentication routes.

This module handles HTTP endpoints for user authentication and registration,
and provides the ``get_current_user`` and ``require_admin`` dependencies used
by every protected route.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

import pytz
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from config import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, JWT_SECRET_KEY
from core.dependencies import UserManagerDep
from schemas.user import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    User,
    ValidateTokenResponse,
)
from utils.user_manager import UserAlreadyExistsError, UserNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])

# HTTP Bearer token security; a missing header is answered with 401 below
security = HTTPBearer(auto_error=False)


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token for a user.

    Args:
        user: The user the token identifies.
        expires_delta: Optional expiration time delta.

    Returns:
        Encoded JWT token string.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
        "exp": datetime.now(pytz.utc) + expires_delta,
    }
    return jwt.encode(to_encode, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def verify_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """Verify JWT token from Authorization header.

    Args:
        credentials: HTTP Bearer token credentials.

    Returns:
        Decoded token payload.

    Raises:
        HTTPException: 401 if no token was sent, 403 if it is invalid or
            expired.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    try:
        payload = jwt.decode(
            credentials.credentials, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM]
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token",
        )
    if payload.get("sub") is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token",
        )
    return payload


def get_current_user(
    user_manager: UserManagerDep,
    token_payload: dict = Depends(verify_token),
) -> User:
    """Get current authenticated user.

    Args:
        user_manager: Injected UserManager instance.
        token_payload: Decoded JWT token payload.

    Returns:
        Current User object.

    Raises:
        HTTPException: If the token's user no longer exists.
    """
    try:
        return user_manager.get_user_by_id(int(token_payload["sub"]))
    except (UserNotFoundError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token",
        )


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Allow only administrators through."""
    if current_user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


@router.get("/validate-token", response_model=ValidateTokenResponse, summary="Validate token")
def validate_token(current_user: User = Depends(get_current_user)) -> ValidateTokenResponse:
    return ValidateTokenResponse(valid=True, user=current_user)


@router.post(
    "/auth/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a student",
)
def register(req: RegisterRequest, user_manager: UserManagerDep) -> AuthResponse:
    """Register a new student account.

    Args:
        req: Registration request with credentials and contact details.
        user_manager: Injected UserManager instance.

    Returns:
        AuthResponse with the new user and a JWT token.

    Raises:
        HTTPException: 409 if the email is taken.
    """
    try:
        user = user_manager.register_student(req)
    except UserAlreadyExistsError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    logger.info("Registered student %s", user.id)
    return AuthResponse(token=create_access_token(user), user=user)


@router.post("/auth/login", response_model=AuthResponse, summary="Log in")
def login(req: LoginRequest, user_manager: UserManagerDep) -> AuthResponse:
    """Login with email and password.

    Raises:
        HTTPException: 401 on unknown email or wrong password.
    """
    user = user_manager.authenticate(req.email.strip(), req.password)
    if user is None:
        logger.warning("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    return AuthResponse(token=create_access_token(user), user=user)
