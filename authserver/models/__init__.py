# authserver/models/__init__.py

from sqlalchemy.orm import declarative_base


Base = declarative_base()


from .account import Account  # noqa: E402,F401
