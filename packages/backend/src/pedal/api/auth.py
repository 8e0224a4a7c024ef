"""Auth API — registration, login, token refresh.

Learn: Routes for user authentication:
- POST /auth/register → create account → tokens + user
- POST /auth/login → email/password → tokens + user
- POST /auth/refresh → refresh token → new token pair
- POST /auth/logout → stateless; the client drops its tokens
- GET /auth/profile → current user

These are plain `def` routes: bcrypt is CPU-bound, so FastAPI runs
them on the threadpool instead of blocking the event loop.
"""

from fastapi import APIRouter, Depends, HTTPException

from pedal.auth.credentials import AuthError
from pedal.auth.dependencies import CurrentIdentity, get_current_user
from pedal.auth.jwt import (
    TokenError,
    create_refresh_token,
    issue_token,
    verify_token,
)
from pedal.deps import get_stores
from pedal.schemas.user import (
    AuthResponse,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserRead,
    UserSummary,
)
from pedal.services.user_service import UserService
from pedal.store import Stores
from pedal.store.errors import ConflictError, NotFoundError
from pedal.store.models import User

router = APIRouter(prefix="/auth")


def _svc(stores: Stores = Depends(get_stores)) -> UserService:
    return UserService(stores)


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        token=issue_token(user.id),
        refresh_token=create_refresh_token(user.id),
        user=UserSummary.model_validate(user),
    )


# ─── Register ────────────────────────────────────────────


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(body: RegisterRequest, svc: UserService = Depends(_svc)):
    """Create a new user account and log it in."""
    try:
        user = svc.register(name=body.name, email=body.email, password=body.password)
    except ConflictError:
        raise HTTPException(status_code=409, detail="User already exists")
    return _auth_response(user)


# ─── Login ───────────────────────────────────────────────


@router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, svc: UserService = Depends(_svc)):
    """Login with email and password → JWT tokens."""
    try:
        user = svc.login(body.email, body.password)
    except AuthError:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return _auth_response(user)


# ─── Refresh ────────────────────────────────────────────


@router.post("/refresh", response_model=TokenResponse)
def refresh(body: RefreshRequest, svc: UserService = Depends(_svc)):
    """Exchange a refresh token for a new token pair."""
    try:
        payload = verify_token(body.refresh_token)
    except TokenError as e:
        raise HTTPException(status_code=401, detail=str(e))
    if payload.get("type") != "refresh":
        raise HTTPException(status_code=401, detail="Not a refresh token")

    try:
        user = svc.get_active(payload["sub"])
    except NotFoundError:
        raise HTTPException(status_code=401, detail="User not found or inactive")

    return TokenResponse(
        token=issue_token(user.id),
        refresh_token=create_refresh_token(user.id),
    )


# ─── Logout / profile ───────────────────────────────────


@router.post("/logout")
def logout(identity: CurrentIdentity = Depends(get_current_user)):
    """Tokens are stateless — there is nothing to revoke server-side."""
    return {"message": "logged out successfully"}


@router.get("/profile", response_model=UserRead)
def profile(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(_svc),
):
    try:
        return svc.get(identity.user_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
