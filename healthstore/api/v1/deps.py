# healthstore/api/v1/deps.py
import random
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request
from sqlmodel import Session, select

from healthstore.core.llm import LLMClient
from healthstore.core.security import decode_token
from healthstore.db.core import get_session
from healthstore.db.models import User as UserModel
from healthstore.schemas import User


def get_llm(request: Request) -> LLMClient:
    """
    The LLM client is built once in main.on_startup and owned by the app.
    Tests swap it via app.dependency_overrides[get_llm].
    """
    return request.app.state.llm


def get_rng() -> random.Random:
    return random.Random()


def _bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.lower().startswith("bearer "):
        return None
    return authorization.split(" ", 1)[1].strip() or None


def _user_from_token(token: str, db: Session) -> Optional[User]:
    try:
        email = decode_token(token).get("sub")
    except ValueError:
        return None
    u = db.exec(select(UserModel).where(UserModel.email == email)).first()
    if not u:
        return None
    return User(id=str(u.id), email=u.email)


def get_current_user(
    authorization: Optional[str] = Header(default=None),
    db: Session = Depends(get_session),
) -> User:
    token = _bearer(authorization)
    if not token:
        raise HTTPException(status_code=401, detail="Missing bearer token")
    user = _user_from_token(token, db)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid token")
    return user


def get_optional_user_id(
    authorization: Optional[str] = Header(default=None),
    db: Session = Depends(get_session),
) -> str:
    """Signed-in user's id, or "anonymous". Never rejects the request."""
    token = _bearer(authorization)
    user = _user_from_token(token, db) if token else None
    return str(user.id) if user else "anonymous"
