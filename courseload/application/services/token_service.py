"""Token service — issues and verifies signed, time-limited identity tokens."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from courseload.config import Settings
from courseload.core.exceptions import InvalidTokenException


class TokenService:
    """HS256 JWTs carrying the user id as ``sub``.

    Expiry is the only invalidation mechanism; there is no revocation list.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_minutes: int = 60):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            expires_minutes=settings.JWT_EXPIRATION_MINUTES,
        )

    def issue(self, identity_id: int, expires_delta: Optional[timedelta] = None) -> str:
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.expires_minutes))
        claims = {"sub": str(identity_id), "iat": now, "exp": expire}
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as exc:
            raise InvalidTokenException() from exc

        subject = payload.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError) as exc:
            raise InvalidTokenException() from exc
