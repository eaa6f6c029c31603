"""Password hashing and JWT issuing/verification for access and refresh tokens."""

import enum
import hashlib
import hmac
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

import bcrypt
import jwt

from app.core.config import Settings

# Bcrypt cost (rounds) used when no explicit value is passed.
BCRYPT_ROUNDS = 12

# Min/max lengths for password validation (input validation).
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

REQUIRED_CLAIMS = ("sub", "role", "ver", "type", "exp", "iat")


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def hash_refresh_token(token: str) -> str:
    """
    Digest a refresh token for storage.

    SHA-256 rather than bcrypt: bcrypt only reads the first 72 bytes, and every
    JWT signed with the same algorithm shares that prefix.
    """
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def refresh_token_matches(token: str, stored_hash: str) -> bool:
    """Constant-time comparison of a presented refresh token against its stored digest."""
    return hmac.compare_digest(hash_refresh_token(token), stored_hash)


class TokenKind(str, enum.Enum):
    ACCESS = "access"
    REFRESH = "refresh"


class TokenInvalid(Exception):
    """Raised when a token fails signature, format, type or expiry checks."""

    def __init__(self, message: str = "Invalid or expired token") -> None:
        self.message = message
        super().__init__(message)


class TokenSubject(Protocol):
    """Anything a token can be issued for (the User model satisfies this)."""

    id: Any
    role: Any
    token_version: int


@dataclass(frozen=True)
class TokenConfig:
    """Immutable signing configuration, built once from Settings."""

    access_secret: str
    refresh_secret: str
    algorithm: str = "HS256"
    access_ttl: timedelta = timedelta(minutes=15)
    refresh_ttl: timedelta = timedelta(days=7)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenConfig":
        return cls(
            access_secret=settings.JWT_ACCESS_SECRET.get_secret_value(),
            refresh_secret=settings.JWT_REFRESH_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            access_ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            refresh_ttl=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        )


@dataclass(frozen=True)
class TokenPayload:
    """Verified claims of an access or refresh token."""

    subject: str
    role: str
    version: int
    kind: TokenKind
    expires_at: datetime


def _role_value(role: Any) -> str:
    return role.value if isinstance(role, enum.Enum) else str(role)


class TokenIssuer:
    """Creates and verifies signed, time-bounded access and refresh tokens."""

    def __init__(self, config: TokenConfig) -> None:
        self._config = config

    def _secret(self, kind: TokenKind) -> str:
        if kind is TokenKind.ACCESS:
            return self._config.access_secret
        return self._config.refresh_secret

    def _ttl(self, kind: TokenKind) -> timedelta:
        if kind is TokenKind.ACCESS:
            return self._config.access_ttl
        return self._config.refresh_ttl

    def _issue(self, subject: TokenSubject, kind: TokenKind) -> str:
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(subject.id),
            "role": _role_value(subject.role),
            "ver": int(subject.token_version or 0),
            "type": kind.value,
            # Unique per token so two tokens minted in the same second still differ.
            "jti": uuid.uuid4().hex,
            "iat": now,
            "exp": now + self._ttl(kind),
        }
        return jwt.encode(payload, self._secret(kind), algorithm=self._config.algorithm)

    def issue_access_token(self, subject: TokenSubject) -> str:
        """Short-lived bearer credential (sub, role, ver)."""
        return self._issue(subject, TokenKind.ACCESS)

    def issue_refresh_token(self, subject: TokenSubject) -> str:
        """Long-lived credential exchanged at /auth/refresh for a new pair."""
        return self._issue(subject, TokenKind.REFRESH)

    def verify(self, token: str, kind: TokenKind) -> TokenPayload:
        """
        Decode and validate a token of the given kind.
        Raises TokenInvalid on bad signature, malformed token, wrong type or expiry.
        """
        if not token:
            raise TokenInvalid()
        try:
            claims = jwt.decode(
                token,
                self._secret(kind),
                algorithms=[self._config.algorithm],
                options={"require": list(REQUIRED_CLAIMS)},
            )
        except jwt.PyJWTError as e:
            raise TokenInvalid() from e
        if claims.get("type") != kind.value:
            raise TokenInvalid()
        sub = claims.get("sub")
        role = claims.get("role")
        ver = claims.get("ver")
        if not isinstance(sub, str) or not sub or not isinstance(role, str):
            raise TokenInvalid()
        if not isinstance(ver, int) or isinstance(ver, bool) or ver < 0:
            raise TokenInvalid()
        return TokenPayload(
            subject=sub,
            role=role,
            version=ver,
            kind=kind,
            expires_at=datetime.fromtimestamp(claims["exp"], UTC),
        )
