import uuid
from datetime import datetime, timedelta, timezone

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError, ExpiredSignatureError
from sqlmodel import Session

from loangate.models.domain_models import Role, User
from loangate.core.config import settings
from loangate.core.db import get_session
from loangate.core.errors import ForbiddenError, NotFoundError
from loangate.services.banking_service import get_user_by_identifier

# This enables the Swagger "Authorize" button
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def create_access_token(data: dict):
    """
    data MUST contain:
    {
        "sub": user id (str)
    }
    """
    if not settings.SECRET_KEY:
        raise RuntimeError("SECRET_KEY is not set")

    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_session),
):
    if not settings.SECRET_KEY:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server misconfiguration",
        )

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        user_id = uuid.UUID(payload.get("sub") or "")

    except ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
        )

    except (JWTError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
        )

    user = db.get(User, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User no longer exists",
        )

    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != Role.ADMIN:
        raise ForbiddenError("Forbidden")
    return current_user


def authorize_banking(
    identifier: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> User:
    """Admins may act on anyone; users only on themselves."""
    if current_user.role == Role.ADMIN:
        return current_user

    try:
        target = get_user_by_identifier(db, identifier)
    except NotFoundError:
        raise ForbiddenError("Forbidden")
    if target.id != current_user.id:
        raise ForbiddenError("Forbidden")
    return current_user
