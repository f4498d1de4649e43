import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from config import ApplicationConfig

logger = logging.getLogger(__name__)

USER_CLAIM = "user_id"


def generate_jwt(user_id: int, expires_delta: timedelta = timedelta(minutes=15)) -> str:
    """
    Issue an access token for the acting user

    Args:
        user_id: ID of the acting user
        expires_delta: Token lifetime, negative values give an already expired token

    Returns:
        Signed token string
    """
    issued_at = datetime.now(timezone.utc)
    claims = {
        USER_CLAIM: str(user_id),
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(claims, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM)


def verify_jwt(token: str) -> Optional[dict]:
    """Decoded claims of a valid token, None when it is expired, forged or unreadable"""
    try:
        return jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=[ApplicationConfig.JWT_ALGORITHM]
        )
    except ExpiredSignatureError:
        logger.warning("Rejected expired access token")
    except JWTError as exc:
        logger.warning(f"Rejected access token: {exc}")
    return None
