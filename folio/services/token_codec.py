"""Bearer token signing and verification."""

import logging
from datetime import datetime, timedelta
from typing import Optional

import jwt

from folio.utils.identifiers import utcnow

logger = logging.getLogger(__name__)


class TokenCodec:
    """
    Issue and verify signed tokens carrying ``{"user": {"id": ...}}``.

    Verification failures of any kind collapse into a single ``None``
    result; the reason is only logged.
    """

    ALGORITHM = "HS256"

    def __init__(self, secret: str, expiry_seconds: int):
        self.secret = secret
        self.expiry = timedelta(seconds=expiry_seconds)

    @classmethod
    def from_settings(cls, settings) -> "TokenCodec":
        return cls(settings.jwt_secret, settings.token_expiry_seconds)

    def issue(self, user_id: str, now: Optional[datetime] = None) -> str:
        """
        Sign a token for a user.

        Args:
            user_id: Identifier embedded in the token
            now: Issue time (defaults to the current UTC time)

        Returns:
            str: Encoded token
        """
        issued_at = now or utcnow()
        payload = {
            "user": {"id": user_id},
            "iat": issued_at,
            "exp": issued_at + self.expiry,
        }
        return jwt.encode(payload, self.secret, algorithm=self.ALGORITHM)

    def verify(self, token: str) -> Optional[str]:
        """
        Verify a token and return the embedded user id.

        Returns:
            Optional[str]: The user id, or None if the token is invalid or expired
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.ALGORITHM],
                options={"require": ["exp"]},
            )
        except jwt.PyJWTError as e:
            logger.debug("Token rejected: %s", e)
            return None

        user = payload.get("user")
        user_id = user.get("id") if isinstance(user, dict) else None
        if not isinstance(user_id, str) or not user_id:
            logger.debug("Token rejected: missing user id claim")
            return None
        return user_id
