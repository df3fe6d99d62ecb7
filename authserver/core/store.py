# authserver/core/store.py

from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from authserver.core.errors import Conflict
from authserver.models import Account


class AccountStore:
    """
    Persistence for accounts on top of a SQLAlchemy session.
    Username uniqueness is left to the database's unique constraint,
    so registration is a single INSERT with no prior existence check.
    """

    def __init__(self, db: Session):
        self.db = db

    def register(self, name: str, username: str, email: str, password_hash: str) -> Account:
        account = Account(
            name=name,
            username=username,
            email=email,
            hashed_password=password_hash,
        )
        self.db.add(account)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise Conflict(f"{username} already exists") from None
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(account)
        return account

    def find_by_username(self, username: str) -> Optional[Account]:
        return self.db.query(Account).filter(Account.username == username).first()

    def find_by_id(self, account_id: int) -> Optional[Account]:
        return self.db.get(Account, account_id)
