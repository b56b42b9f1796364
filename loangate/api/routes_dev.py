# loangate/api/routes_dev.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from loangate.core.config import settings
from loangate.core.db import get_session
from loangate.core.errors import ForbiddenError
from loangate.services.jwt_service import require_admin
from loangate.services.seed_service import seed_users

router = APIRouter(prefix="/dev", tags=["dev"], dependencies=[Depends(require_admin)])


@router.post("/seed-db")
def seed_database(db: Session = Depends(get_session)):
    if settings.ENV != "dev":
        raise ForbiddenError("Seeding is only available in the dev environment")
    users = seed_users(db)
    return {"message": "Database seeded successfully!", "users": [u.email for u in users]}
