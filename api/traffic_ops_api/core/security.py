"""Password hashing and bearer tokens for Traffic Ops users."""
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from traffic_ops_api.core.config import settings
from traffic_ops_api.models.user import TmUser


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def authenticate_user(db: Session, username: str, password: str) -> Optional[TmUser]:
    """The user with these credentials, or None.

    Users without a local password (externally authenticated) never match.
    """
    user = db.query(TmUser).filter(TmUser.username == username).first()
    if user is None or not user.local_passwd:
        return None
    if not verify_password(password, user.local_passwd):
        return None
    return user


def create_access_token(username: str) -> str:
    """Sign a token whose subject is ``username``."""
    claims = {
        "sub": username,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        **settings.jwt_claims(),
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def username_from_token(token: str) -> Optional[str]:
    """The subject of a valid token; None when it is forged, expired or has none."""
    expected = settings.jwt_claims()
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            audience=expected.get("aud"),
            issuer=expected.get("iss"),
            options={"verify_aud": "aud" in expected, "verify_iss": "iss" in expected},
        )
    except JWTError:
        return None
    return payload.get("sub") or None
