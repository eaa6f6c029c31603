"""
Create an identity directly (e.g. the first SUPER_ADMIN). Run from project root:
  python -m app.scripts.create_user EMAIL PASSWORD PHONE FIRST_NAME [--last-name NAME] [--role ROLE]
Example:
  python -m app.scripts.create_user admin@example.com your-secure-password 555-0000 Ada --role SUPER_ADMIN
Brand owners need a business name: pass --business-name with --role BRAND_OWNER.
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, hash_password
from app.models import BrandOwner, Role, User

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a catalog user (no registration route for admins).")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("phone", help="Phone number (unique)")
    parser.add_argument("first_name", help="First name")
    parser.add_argument("--last-name", default=None)
    parser.add_argument(
        "--role",
        default=Role.SUPER_ADMIN.value,
        choices=[r.value for r in Role],
    )
    parser.add_argument("--business-name", default=None, help="Required for BRAND_OWNER")
    args = parser.parse_args()

    email = args.email.strip().lower()
    phone = args.phone.strip()
    role = Role(args.role)
    if not email or "@" not in email:
        logger.error("Invalid email.")
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        logger.error("Password must be %s-%s characters.", PASSWORD_MIN_LEN, PASSWORD_MAX_LEN)
        return 1
    if role is Role.BRAND_OWNER and not (args.business_name or "").strip():
        logger.error("--business-name is required for BRAND_OWNER.")
        return 1

    settings = get_settings()
    db = SessionLocal()
    try:
        active = db.query(User).filter(User.is_deleted.is_(False))
        if active.filter(User.email == email).first():
            logger.error("User '%s' already exists.", email)
            return 1
        if active.filter(User.phone == phone).first():
            logger.error("Phone '%s' already in use.", phone)
            return 1
        user = User(
            email=email,
            phone=phone,
            password_hash=hash_password(args.password, rounds=settings.BCRYPT_ROUNDS),
            role=role,
            first_name=args.first_name.strip(),
            last_name=args.last_name,
            token_version=0,
        )
        if role is Role.BRAND_OWNER:
            user.brand_owner = BrandOwner(business_name=args.business_name.strip())
        db.add(user)
        db.commit()
        logger.info("Created user '%s' with role '%s' (id=%s).", email, role.value, user.id)
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
