# authserver/core/security.py

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from authserver.core.errors import Unauthorized


INVALID_TOKEN = "Invalid authentication credentials"


# -------------------------------
# Password hashing
# -------------------------------

class PasswordHasher:
    """
    bcrypt_sha256 hashing through passlib. Passwords are HMAC-SHA256
    pre-hashed, so length past 72 bytes and NUL characters both count.
    The cost factor is embedded in every hash, so changing `rounds`
    only affects newly created hashes.
    """

    def __init__(self, rounds: int = 12):
        self.context = CryptContext(
            schemes=["bcrypt_sha256"],
            deprecated="auto",
            bcrypt_sha256__rounds=rounds,
        )
        self._dummy_hash = self.hash(uuid.uuid4().hex)

    def hash(self, password: str) -> str:
        return self.context.hash(password)

    def verify(self, password: str, hashed_password: str) -> bool:
        try:
            return self.context.verify(password, hashed_password)
        except (ValueError, TypeError):
            return False

    def dummy_verify(self, password: str) -> None:
        # Spends the same time as a real check when there is no account to check against.
        self.verify(password, self._dummy_hash)


# -------------------------------
# Bearer tokens
# -------------------------------

class TokenIssuer:
    """
    Issues signed JWTs whose subject is the account id.
    Tokens only carry an expiry when `expires_minutes` is set.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_minutes: Optional[int] = None):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    def issue(self, account_id: int) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(account_id),
            "iat": now,
            "jti": uuid.uuid4().hex,
        }
        if self.expires_minutes:
            claims["exp"] = now + timedelta(minutes=self.expires_minutes)
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def authenticate(self, token: str) -> int:
        if not token:
            raise Unauthorized(INVALID_TOKEN)
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            raise Unauthorized(INVALID_TOKEN) from None

        subject = payload.get("sub")
        if subject is None:
            raise Unauthorized(INVALID_TOKEN)
        try:
            return int(subject)
        except (TypeError, ValueError):
            raise Unauthorized(INVALID_TOKEN) from None
