"""Registration, login, refresh-token rotation, logout, and profile/admin user operations."""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.security import (
    BCRYPT_ROUNDS,
    TokenInvalid,
    TokenIssuer,
    TokenKind,
    hash_password,
    hash_refresh_token,
    refresh_token_matches,
    verify_password,
)
from app.models import BrandOwner, Role, User
from app.schemas.auth import (
    BusinessProfile,
    Identity,
    MessageResponse,
    ProfileResponse,
    PublicUser,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UpdateProfileRequest,
    UserListItem,
    UsersPage,
)
from app.schemas.pagination import PageMeta
from app.services.errors import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_REFRESH_TOKEN = "Invalid refresh token"


class AuthService:
    """
    Session state machine per identity: anonymous -> authenticated (active
    refresh) -> authenticated (rotated) -> revoked.

    Only the SHA-256 digest of the current refresh token is stored, so issuing
    a new one overwrites (and thereby invalidates) the previous one. Refresh
    tokens also carry the identity's token_version, which must match exactly.
    """

    def __init__(
        self,
        db: Session,
        issuer: TokenIssuer,
        bcrypt_rounds: int = BCRYPT_ROUNDS,
    ) -> None:
        self.db = db
        self.issuer = issuer
        self.bcrypt_rounds = bcrypt_rounds

    # Lookups

    def _active_users(self):
        return self.db.query(User).filter(User.is_deleted.is_(False))

    def _get_active_user(self, user_id: UUID) -> User | None:
        return self._active_users().filter(User.id == user_id).first()

    def _email_taken(self, email: str) -> bool:
        return self._active_users().filter(User.email == email).first() is not None

    def _phone_taken(self, phone: str, exclude_id: UUID | None = None) -> bool:
        query = self._active_users().filter(User.phone == phone)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first() is not None

    # Token pair

    def _issue_pair(self, user: User) -> TokenResponse:
        """Issue access+refresh tokens and overwrite the stored refresh digest."""
        access_token = self.issuer.issue_access_token(user)
        refresh_token = self.issuer.issue_refresh_token(user)
        user.refresh_token_hash = hash_refresh_token(refresh_token)
        self.db.commit()
        return TokenResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            user=PublicUser(id=user.id, email=user.email, role=user.role),
        )

    # Registration and login

    def register(self, body: RegisterRequest) -> RegisterResponse:
        """Create a BRAND_OWNER identity and its business profile atomically."""
        if self._email_taken(body.email):
            raise ConflictError("Email already exists")
        if self._phone_taken(body.phone):
            raise ConflictError("Phone already exists")

        user = User(
            email=body.email,
            phone=body.phone,
            password_hash=hash_password(body.password, rounds=self.bcrypt_rounds),
            role=Role.BRAND_OWNER,
            first_name=body.first_name,
            last_name=body.last_name,
            token_version=0,
        )
        user.brand_owner = BrandOwner(business_name=body.business_name)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # A concurrent registration won the unique index race.
            self.db.rollback()
            raise ConflictError("Email or phone already exists") from e
        logger.info("Registered brand owner user_id=%s", user.id)
        return RegisterResponse(message="Registered successfully", user_id=user.id)

    def login(self, email: str, password: str) -> TokenResponse:
        """Same error for unknown email and wrong password."""
        user = self._active_users().filter(User.email == email.strip().lower()).first()
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Login failed")
            raise UnauthorizedError(INVALID_CREDENTIALS)
        # Refresh tokens from earlier logins stop matching the stored version.
        user.token_version = (user.token_version or 0) + 1
        result = self._issue_pair(user)
        logger.info("Login user_id=%s", user.id)
        return result

    # Refresh rotation and revocation

    def refresh(self, token: str | None) -> TokenResponse:
        """
        Exchange a refresh token for a new pair.

        Tokens minted before the latest login carry an older version and are
        simply rejected. A token of the current version whose digest no longer
        matches has been rotated away; presenting it again is treated as replay
        and revokes every outstanding token for the identity.
        """
        if not token:
            raise UnauthorizedError("No refresh token found")
        try:
            payload = self.issuer.verify(token, TokenKind.REFRESH)
        except TokenInvalid:
            logger.warning("Refresh rejected: token failed verification")
            raise UnauthorizedError(INVALID_REFRESH_TOKEN) from None
        try:
            user_id = UUID(payload.subject)
        except ValueError:
            raise UnauthorizedError(INVALID_REFRESH_TOKEN) from None

        user = (
            self._active_users()
            .filter(User.id == user_id)
            .with_for_update()
            .first()
        )
        if user is None:
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)
        if user.refresh_token_hash is None:
            logger.warning("Refresh after logout user_id=%s", user.id)
            raise ForbiddenError("Access denied")
        if payload.version != user.token_version:
            logger.warning(
                "Refresh rejected: version mismatch user_id=%s token_ver=%s stored_ver=%s",
                user.id,
                payload.version,
                user.token_version,
            )
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)
        if not refresh_token_matches(token, user.refresh_token_hash):
            self._revoke(user)
            self.db.commit()
            logger.warning("Refresh token reuse detected; sessions revoked user_id=%s", user.id)
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)

        result = self._issue_pair(user)
        logger.info("Refresh rotated user_id=%s", user.id)
        return result

    def logout(self, user_id: UUID) -> MessageResponse:
        """Clear the stored refresh digest. Idempotent."""
        user = self._get_active_user(user_id)
        if user is not None and user.refresh_token_hash is not None:
            user.refresh_token_hash = None
            self.db.commit()
            logger.info("Logout user_id=%s", user_id)
        return MessageResponse(message="Logged out successfully")

    @staticmethod
    def _revoke(user: User) -> None:
        user.token_version = (user.token_version or 0) + 1
        user.refresh_token_hash = None

    def revoke_all_sessions(self, user_id: UUID) -> MessageResponse:
        """Invalidate every refresh token ever issued to the user by bumping its version."""
        user = self._get_active_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        self._revoke(user)
        self.db.commit()
        logger.info("Sessions revoked user_id=%s token_version=%s", user.id, user.token_version)
        return MessageResponse(message="Sessions revoked successfully")

    # Profile

    def get_profile(self, user_id: UUID) -> ProfileResponse:
        user = self._get_active_user(user_id)
        if user is None:
            raise UnauthorizedError("User not found")
        business = None
        if user.role is Role.BRAND_OWNER and user.brand_owner is not None:
            business = BusinessProfile(
                id=user.brand_owner.id,
                business_name=user.brand_owner.business_name,
            )
        return ProfileResponse(
            id=user.id,
            email=user.email,
            role=user.role,
            first_name=user.first_name,
            last_name=user.last_name,
            phone=user.phone,
            business=business,
            created_at=user.created_at,
        )

    def update_profile(
        self,
        actor: Identity,
        target_id: UUID,
        body: UpdateProfileRequest,
    ) -> MessageResponse:
        """Update own profile, or any profile when the actor is SUPER_ADMIN."""
        if actor.id != target_id and actor.role is not Role.SUPER_ADMIN:
            raise ForbiddenError("Access denied")
        user = self._get_active_user(target_id)
        if user is None:
            raise NotFoundError("User not found")

        if body.phone is not None and body.phone != user.phone:
            if self._phone_taken(body.phone, exclude_id=user.id):
                raise ConflictError("Phone already exists")
            user.phone = body.phone
        if body.first_name is not None:
            user.first_name = body.first_name
        if body.last_name is not None:
            user.last_name = body.last_name
        if body.business_name is not None:
            if user.brand_owner is None:
                raise BadRequestError("Business name applies to brand owners only")
            user.brand_owner.business_name = body.business_name

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("Phone already exists") from e
        logger.info("Profile updated user_id=%s by actor_id=%s", user.id, actor.id)
        return MessageResponse(message="Profile updated successfully")

    # Admin

    def list_users(self, page: int, limit: int) -> UsersPage:
        """Non-deleted users other than SUPER_ADMINs, newest first."""
        query = self._active_users().filter(User.role != Role.SUPER_ADMIN)
        total = query.with_entities(func.count(User.id)).scalar() or 0
        users = (
            query.order_by(User.created_at.desc(), User.id)
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return UsersPage(
            data=[
                UserListItem(
                    id=u.id,
                    email=u.email,
                    phone=u.phone,
                    role=u.role,
                    first_name=u.first_name,
                    last_name=u.last_name,
                    created_at=u.created_at,
                )
                for u in users
            ],
            meta=PageMeta.build(total=total, page=page, limit=limit),
        )

    def soft_delete_user(self, user_id: UUID) -> MessageResponse:
        """Mark the user deleted and revoke its sessions; the row is kept."""
        user = self._get_active_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        user.is_deleted = True
        user.deleted_at = datetime.now(timezone.utc)
        self._revoke(user)
        self.db.commit()
        logger.info("User soft-deleted user_id=%s", user_id)
        return MessageResponse(message="User deleted successfully")
