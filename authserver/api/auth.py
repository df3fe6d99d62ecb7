# authserver/api/auth.py

from typing import Any, Optional
from pydantic import BaseModel
from fastapi import APIRouter, Depends, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from authserver.core.errors import Unauthorized
from authserver.core.service import AuthService
from authserver.core.store import AccountStore
from authserver.database import get_db


router = APIRouter(prefix="/auth")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


# -------------------------------
# Request / Response Schemas
# -------------------------------

class SignupRequest(BaseModel):
    """
    Fields are untyped and optional so that missing or non-string values
    reach the signup validator and get its specific message.
    """
    name: Any = None
    username: Any = None
    email: Any = None
    password: Any = None


class LoginRequest(BaseModel):
    username: Any = None
    password: Any = None


class Token(BaseModel):
    token: str


class Me(BaseModel):
    username: str
    token: str


# -------------------------------
# Dependencies
# -------------------------------

def get_auth_service(request: Request, db: Session = Depends(get_db)) -> AuthService:
    return AuthService(
        store=AccountStore(db),
        hasher=request.app.state.hasher,
        issuer=request.app.state.issuer,
    )


def get_bearer_token(token: Optional[str] = Depends(oauth2_scheme)) -> str:
    if not token:
        raise Unauthorized("Not authenticated")
    return token


# -------------------------------
# Endpoints
# -------------------------------

@router.post("/signup", response_model=Token, status_code=status.HTTP_201_CREATED)
def signup(body: SignupRequest, service: AuthService = Depends(get_auth_service)):
    token = service.signup(body.model_dump())
    return {"token": token}


@router.post("/login", response_model=Token)
def login(body: LoginRequest, service: AuthService = Depends(get_auth_service)):
    token = service.login(body.username, body.password)
    return {"token": token}


@router.get("/me", response_model=Me)
def me(token: str = Depends(get_bearer_token), service: AuthService = Depends(get_auth_service)):
    account, token = service.whoami(token)
    return {"username": account.username, "token": token}
