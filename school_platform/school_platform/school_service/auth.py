from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt

from .errors import ConfigurationError, InvalidTokenError

# Use pbkdf2_sha256 to avoid external bcrypt backend issues in some environments
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(hashed_password: str, plain_password: str) -> bool:
    """Return True iff plain_password matches hashed_password. Never raises."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Unknown or malformed hash
        return False


class TokenIssuer:
    """Issues and decodes the bearer tokens handed out on login."""

    def __init__(self, secret: Optional[str], algorithm: str = "HS256", expire_minutes: int = 60):
        if not secret:
            raise ConfigurationError("JWT_SECRET must be set to sign access tokens")
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, email: str, name: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "email": email,
            "name": name,
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> dict:
        try:
            return jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError("Token expired") from exc
        except jwt.PyJWTError as exc:
            raise InvalidTokenError("Invalid token") from exc
