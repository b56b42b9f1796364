import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session, select

from loangate.core.db import get_session
from loangate.schemas.auth_schemas import SignupIn, TokenOut, ApplicantOut
from loangate.models.domain_models import User
from loangate.services.password_service import hash_password, verify_password
from loangate.services.jwt_service import create_access_token, get_current_user

router = APIRouter(tags=["auth"])

logger = logging.getLogger(__name__)


@router.post("/auth/signup", response_model=TokenOut)
def signup(payload: SignupIn, db: Session = Depends(get_session)):
    email = payload.email.lower()

    existing = db.exec(select(User).where(User.email == email)).first()
    if existing:
        raise HTTPException(status_code=400, detail="Email already registered")

    u = User(
        name=payload.name,
        email=email,
        password_hash=hash_password(payload.password),
    )

    db.add(u)
    db.commit()
    db.refresh(u)

    logger.info("User registered: %s", u.id)

    token = create_access_token({"sub": str(u.id)})
    return TokenOut(access_token=token)


@router.post("/auth/login", response_model=TokenOut)
def login(
    form: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_session)
):
    user = db.exec(select(User).where(User.email == form.username.lower())).first()

    if not user or not verify_password(form.password, user.password_hash):
        logger.warning("Failed login for %s", form.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token({"sub": str(user.id)})
    return TokenOut(access_token=token)


@router.get("/me", response_model=ApplicantOut)
def auth_me(current_user: User = Depends(get_current_user)):
    return current_user
