# healthstore/api/v1/routers/auth.py
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from healthstore.api.v1.deps import get_current_user
from healthstore.core.security import hash_password, verify_password, create_access_token
from healthstore.db.core import get_session
from healthstore.db.models import User as UserModel
from healthstore.schemas import RegisterReq, LoginReq, User

router = APIRouter(prefix="/auth", tags=["auth"])


def _get_user_by_email(db: Session, email: str):
    return db.exec(select(UserModel).where(UserModel.email == email)).first()


@router.post("/register")
def register(req: RegisterReq, db: Session = Depends(get_session)):
    if _get_user_by_email(db, req.email):
        raise HTTPException(status_code=400, detail="User exists")
    db.add(UserModel(email=req.email, hashed_password=hash_password(req.password)))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="User exists")
    return {"ok": True}


@router.post("/login")
def login(req: LoginReq, db: Session = Depends(get_session)):
    """
    Body: { "email": "...", "password": "..." }
    Returns: { access_token, token_type }
    """
    u = _get_user_by_email(db, req.email)
    if not u or not verify_password(req.password, u.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return {"access_token": create_access_token(sub=u.email), "token_type": "bearer"}


@router.get("/me", response_model=User)
def me(user: User = Depends(get_current_user)):
    return user
