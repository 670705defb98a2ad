import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from errors import AuthError, AccessDenied, StoreError
from models import User, AuthSession

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"
HASH_ITERATIONS = 100000


def hash_password(password: str) -> str:
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, HASH_ITERATIONS)
    return f"{salt.hex()}${digest.hex()}"


def verify_password(password: str, stored_hash: str) -> bool:
    try:
        salt_hex, digest_hex = stored_hash.split("$", 1)
        salt = bytes.fromhex(salt_hex)
    except ValueError:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, HASH_ITERATIONS)
    return hmac.compare_digest(digest.hex(), digest_hex)


@dataclass
class Session:
    token: str
    user_id: str
    email: str
    expires_at: datetime


class AuthClient:
    """Email/password accounts with opaque session tokens."""

    def __init__(self, session_factory, ttl_hours: int = 24):
        self.session_factory = session_factory
        self.ttl = timedelta(hours=ttl_hours)

    def sign_up(self, email: str, password: str) -> str:
        """Create an account and return its user id."""
        email = (email or "").strip().lower()
        if not email or not password:
            raise AuthError("Email and password are required")
        db = self.session_factory()
        try:
            if db.query(User).filter(User.email == email).first():
                raise AuthError("User already registered")
            user = User(email=email, password_hash=hash_password(password))
            db.add(user)
            db.commit()
            db.refresh(user)
            logger.info("Registered user %s", email)
            return user.id
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("sign up failed for %s", email)
            raise StoreError(str(e)) from e
        finally:
            db.close()

    def sign_in(self, email: str, password: str) -> Session:
        email = (email or "").strip().lower()
        db = self.session_factory()
        try:
            user = db.query(User).filter(User.email == email).first()
            if not user or not verify_password(password or "", user.password_hash):
                raise AuthError("Invalid login credentials")
            row = AuthSession(
                token=secrets.token_urlsafe(32),
                user_id=user.id,
                expires_at=datetime.utcnow() + self.ttl,
            )
            db.add(row)
            db.commit()
            return Session(token=row.token, user_id=user.id, email=user.email, expires_at=row.expires_at)
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("sign in failed for %s", email)
            raise StoreError(str(e)) from e
        finally:
            db.close()

    def sign_out(self, token: str) -> None:
        db = self.session_factory()
        try:
            db.query(AuthSession).filter(AuthSession.token == token).delete()
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("sign out failed")
            raise StoreError(str(e)) from e
        finally:
            db.close()

    def get_user(self, token: Optional[str]) -> Optional[str]:
        """Return the user id behind a live session token."""
        if not token:
            return None
        db = self.session_factory()
        try:
            row = db.query(AuthSession).filter(AuthSession.token == token).first()
            if not row or row.expires_at <= datetime.utcnow():
                return None
            return row.user_id
        except SQLAlchemyError as e:
            logger.exception("session lookup failed")
            raise StoreError(str(e)) from e
        finally:
            db.close()


def is_admin(store, user_id: Optional[str]) -> bool:
    if not user_id:
        return False
    profile = store.single("profiles", columns=["role"], eq={"user_id": user_id})
    return bool(profile) and profile["role"] == ADMIN_ROLE


def admin_login(store, auth: AuthClient, email: str, password: str) -> Session:
    """
    Sign in and require the admin role.

    A user whose profile is missing or carries any other role is signed
    out again before AccessDenied is raised.
    """
    session = auth.sign_in(email, password)
    try:
        granted = is_admin(store, session.user_id)
    except StoreError:
        logger.error("Role lookup failed for %s, revoking session", session.email)
        auth.sign_out(session.token)
        raise
    if granted:
        logger.info("Admin %s signed in", session.email)
        return session
    auth.sign_out(session.token)
    logger.warning("Non-admin %s refused dashboard access", session.email)
    raise AccessDenied("You don't have admin privileges.")


def create_admin_account(store, auth: AuthClient, email: str, password: str,
                         full_name: str = "Admin User") -> str:
    user_id = auth.sign_up(email, password)
    store.insert("profiles", {"user_id": user_id, "full_name": full_name, "role": ADMIN_ROLE})
    return user_id
