# authserver/core/service.py

from typing import Any, Mapping, Tuple
from authserver.core.errors import Conflict, Unauthorized
from authserver.core.logging import get_logger
from authserver.core.security import PasswordHasher, TokenIssuer
from authserver.core.store import AccountStore
from authserver.core.validation import validate_signup
from authserver.models import Account


INVALID_CREDENTIALS = "Invalid user or password"

logger = get_logger("authserver.service")


class AuthService:
    """
    Signup, login and current-user lookup.
    The store, hasher and issuer are passed in so each request (or test)
    can supply its own.
    """

    def __init__(self, store: AccountStore, hasher: PasswordHasher, issuer: TokenIssuer):
        self.store = store
        self.hasher = hasher
        self.issuer = issuer

    def signup(self, payload: Mapping[str, Any]) -> str:
        validate_signup(payload)

        username = payload["username"]
        password_hash = self.hasher.hash(payload["password"])
        try:
            account = self.store.register(
                name=payload["name"],
                username=username,
                email=payload["email"],
                password_hash=password_hash,
            )
        except Conflict:
            logger.info("signup_conflict", username=username)
            raise

        logger.info("signup_succeeded", account_id=account.id, username=username)
        return self.issuer.issue(account.id)

    def login(self, username: Any, password: Any) -> str:
        if not isinstance(username, str) or not isinstance(password, str):
            raise Unauthorized(INVALID_CREDENTIALS)

        account = self.store.find_by_username(username)
        if account is None:
            self.hasher.dummy_verify(password)
            logger.info("login_failed", reason="unknown_user")
            raise Unauthorized(INVALID_CREDENTIALS)

        if not self.hasher.verify(password, account.hashed_password):
            logger.info("login_failed", reason="bad_password", account_id=account.id)
            raise Unauthorized(INVALID_CREDENTIALS)

        logger.info("login_succeeded", account_id=account.id)
        return self.issuer.issue(account.id)

    def whoami(self, token: str) -> Tuple[Account, str]:
        account_id = self.issuer.authenticate(token)
        account = self.store.find_by_id(account_id)
        if account is None:
            raise Unauthorized("Account not found")
        return account, token
