# authserver/models/account.py

from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Integer, String
from . import Base


# -------------------------------
# Account Model
# -------------------------------

class Account(Base):
    """
    Database model for registered accounts.
    The username is unique and compared case-sensitively; the password
    is only ever stored as a bcrypt hash.
    """
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
