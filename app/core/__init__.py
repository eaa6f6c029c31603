"""Core configuration, database session and security primitives."""

from app.core.config import Settings, get_settings, settings
from app.core.database import get_db
from app.core.security import TokenConfig, TokenIssuer, TokenKind

__all__ = [
    "Settings",
    "TokenConfig",
    "TokenIssuer",
    "TokenKind",
    "get_db",
    "get_settings",
    "settings",
]
