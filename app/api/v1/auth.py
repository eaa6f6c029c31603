"""Auth routes: register, login, refresh, logout, profile, and SUPER_ADMIN user management."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_identity, get_token_issuer, require_roles
from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.security import TokenIssuer
from app.models.user import Role
from app.schemas.auth import (
    Identity,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UpdateProfileRequest,
    UsersPage,
)
from app.schemas.pagination import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from app.services.auth import AuthService

router = APIRouter()

SuperAdmin = Annotated[Identity, Depends(require_roles(Role.SUPER_ADMIN))]
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthService:
    return AuthService(db, issuer, bcrypt_rounds=settings.BCRYPT_ROUNDS)


Auth = Annotated[AuthService, Depends(get_auth_service)]


def _set_refresh_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.REFRESH_COOKIE_NAME,
        value=token,
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        path=settings.REFRESH_COOKIE_PATH,
        secure=settings.refresh_cookie_secure,
        httponly=True,
        samesite="lax",
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, auth: Auth) -> RegisterResponse:
    """Register a new brand owner account (identity + business profile)."""
    return auth.register(body)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    response: Response,
    auth: Auth,
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns an access token and sets the
    refresh token as an HTTP-only cookie.
    Include the access token in the Authorization header as: Bearer <accessToken>
    """
    result = auth.login(body.email, body.password)
    _set_refresh_cookie(response, result.refresh_token, settings)
    return result


@router.post("/refresh", response_model=TokenResponse)
def refresh(
    request: Request,
    response: Response,
    auth: Auth,
    settings: Annotated[Settings, Depends(get_settings)],
    body: RefreshRequest | None = None,
) -> TokenResponse:
    """
    Rotate the refresh token. An explicit `refreshToken` in the body wins over
    the cookie, so a client holding a stale cookie can still present its
    current token.
    """
    token = body.refresh_token if body is not None else None
    if not token:
        token = request.cookies.get(settings.REFRESH_COOKIE_NAME)
    result = auth.refresh(token)
    _set_refresh_cookie(response, result.refresh_token, settings)
    return result


@router.post("/logout", response_model=MessageResponse)
def logout(
    identity: CurrentIdentity,
    response: Response,
    auth: Auth,
    settings: Annotated[Settings, Depends(get_settings)],
) -> MessageResponse:
    """Invalidate the stored refresh token and clear the cookie."""
    result = auth.logout(identity.id)
    response.delete_cookie(
        key=settings.REFRESH_COOKIE_NAME,
        path=settings.REFRESH_COOKIE_PATH,
        secure=settings.refresh_cookie_secure,
        httponly=True,
        samesite="lax",
    )
    return result


@router.get("/profile", response_model=ProfileResponse)
def get_profile(identity: CurrentIdentity, auth: Auth) -> ProfileResponse:
    return auth.get_profile(identity.id)


@router.patch("/profile", response_model=MessageResponse)
def update_own_profile(
    body: UpdateProfileRequest,
    identity: CurrentIdentity,
    auth: Auth,
) -> MessageResponse:
    return auth.update_profile(identity, identity.id, body)


@router.patch("/admin/user/{user_id}", response_model=MessageResponse)
def update_user_by_admin(
    user_id: UUID,
    body: UpdateProfileRequest,
    admin: SuperAdmin,
    auth: Auth,
) -> MessageResponse:
    """SUPER_ADMIN can update any user profile."""
    return auth.update_profile(admin, user_id, body)


@router.get("/admin/users", response_model=UsersPage)
def list_users(
    _admin: SuperAdmin,
    auth: Auth,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_LIMIT)] = DEFAULT_PAGE_LIMIT,
) -> UsersPage:
    """List non-deleted, non-admin users (paginated)."""
    return auth.list_users(page, limit)


@router.delete("/admin/user/{user_id}", response_model=MessageResponse)
def delete_user(user_id: UUID, _admin: SuperAdmin, auth: Auth) -> MessageResponse:
    """Soft delete a user; its refresh token and token version are revoked."""
    return auth.soft_delete_user(user_id)


@router.post("/admin/user/{user_id}/revoke-sessions", response_model=MessageResponse)
def revoke_sessions(user_id: UUID, _admin: SuperAdmin, auth: Auth) -> MessageResponse:
    """Invalidate every refresh token issued to the user."""
    return auth.revoke_all_sessions(user_id)
