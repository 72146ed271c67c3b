"""
Authentication Routes

POST /auth/register - Register new user (creates the profile row too)
POST /auth/login - Login, get JWT token and session cookie
POST /auth/logout - Clear the session cookie
GET /auth/me - Get current user info
"""

from fastapi import APIRouter, HTTPException, Depends, Response
from sqlalchemy import insert, select

from utopia_hire.db.postgres import get_db_session, fetch_one
from utopia_hire.db.tables import users, profiles
from utopia_hire.core.auth import hash_password, verify_password, create_access_token, get_current_user
from utopia_hire.core.config import get_settings
from utopia_hire.schemas.schemas import (
    RegisterRequest, LoginRequest, TokenResponse, UserResponse, MessageResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

settings = get_settings()


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(request: RegisterRequest):
    """
    Register a new user account.

    The profile row is created right away with first_login = true, so the
    onboarding wizard runs on the first login.
    """
    email = request.email.lower()
    if fetch_one(select(users.c.id).where(users.c.email == email)):
        raise HTTPException(status_code=400, detail="Email already registered")

    with get_db_session() as db:
        result = db.execute(
            insert(users).values(email=email, password_hash=hash_password(request.password), is_active=True)
        )
        user_id = result.inserted_primary_key[0]
        db.execute(
            insert(profiles).values(user_id=user_id, full_name=request.full_name, email=email, first_login=True)
        )

    return MessageResponse(message="Registered successfully. Please login.")


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, response: Response):
    """
    Login and receive JWT access token.

    The token is also set as an HTTP-only session cookie; API clients can
    send it instead as: Authorization: Bearer <token>
    """
    user = fetch_one(
        select(users.c.id, users.c.password_hash, users.c.is_active).where(users.c.email == request.email.lower())
    )

    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if not user["is_active"]:
        raise HTTPException(status_code=403, detail="Account deactivated")

    if not verify_password(request.password, user["password_hash"]):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = create_access_token(data={"sub": str(user["id"])})
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        max_age=settings.jwt_expire_minutes * 60,
    )

    profile = fetch_one(select(profiles.c.first_login).where(profiles.c.user_id == user["id"]))
    first_login = profile["first_login"] if profile else True

    return TokenResponse(access_token=token, user_id=user["id"], first_login=first_login)


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    response.delete_cookie(settings.session_cookie_name)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user's info."""
    row = fetch_one(
        select(users.c.id, users.c.email, users.c.is_active, users.c.created_at).where(users.c.id == user["user_id"])
    )
    return UserResponse(user_id=row["id"], email=row["email"], is_active=row["is_active"], created_at=row["created_at"])
