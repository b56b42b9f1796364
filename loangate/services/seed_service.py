# loangate/services/seed_service.py
import logging
from typing import Any, Dict, List

from sqlmodel import Session, select

from loangate.models.domain_models import EmploymentStatus, FraudStatus, Role, User
from loangate.services.password_service import hash_password

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password1"

# Declan, Penny and Apollo land on deny, proceed_with_caution and proceed
DEMO_USERS: List[Dict[str, Any]] = [
    {"name": "Admin", "email": "admin@example.com", "role": Role.ADMIN},
    {"name": "John Doe", "email": "john.doe@example.com"},
    {
        "name": "Declan Riske",
        "email": "declan@example.com",
        "address": {"street": "101 Red Flag Way", "city": "Riskyville", "state": "FL", "zip_code": "33101"},
        "employment_status": EmploymentStatus.UNEMPLOYED,
        "monthly_income": 1000,
        "monthly_debt": 800,
        "credit_score": 550,
        "fraud_status": FraudStatus.HIGH,
    },
    {
        "name": "Penny Review",
        "email": "penny@example.com",
        "address": {"street": "456 Borderline Blvd", "city": "Maybeburg", "state": "OH", "zip_code": "43004"},
        "employment_status": EmploymentStatus.EMPLOYED,
        "monthly_income": 6250,
        "monthly_debt": 2500,
        "credit_score": 680,
        "fraud_status": FraudStatus.LOW,
    },
    {
        "name": "Apollo Pruitt",
        "email": "apollo@example.com",
        "address": {"street": "789 Golden Ave", "city": "Trustworth", "state": "CA", "zip_code": "90210"},
        "employment_status": EmploymentStatus.EMPLOYED,
        "monthly_income": 12500,
        "monthly_debt": 1000,
        "credit_score": 800,
        "fraud_status": FraudStatus.LOW,
    },
]


def seed_users(db: Session) -> List[User]:
    """Replace every user with the demo set."""
    for existing in db.exec(select(User)).all():
        db.delete(existing)
    db.flush()

    password_hash = hash_password(DEMO_PASSWORD)
    users = [User(password_hash=password_hash, **data) for data in DEMO_USERS]
    db.add_all(users)
    db.commit()
    for u in users:
        db.refresh(u)

    logger.info("Seeded %d users", len(users))
    return users
