import logging
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storagehub.models import Plan, User

logger = logging.getLogger(__name__)

DEFAULT_PLAN = "Standard"
CUSTOM_PLAN_PREFIX = "Custom Plan"


def get_user_by_name_or_email(db: Session, name: str, email: str) -> Optional[User]:
    return db.query(User).filter(or_(User.name == name, User.email == email)).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def authenticate(db: Session, identifier: str, password: str) -> Optional[User]:
    # identifier may be a name or an e-mail; first match wins
    return (
        db.query(User)
        .filter(or_(User.name == identifier, User.email == identifier), User.password == password)
        .order_by(User.id)
        .first()
    )


def plan_name_for(db: Session, plan_id: Optional[int]) -> str:
    if plan_id is None:
        return DEFAULT_PLAN
    plan = db.query(Plan).filter(Plan.id == plan_id).first()
    return plan.name if plan else DEFAULT_PLAN


def _format_amount(amount) -> str:
    if isinstance(amount, float) and amount.is_integer():
        amount = int(amount)
    return str(amount).strip()


def custom_plan_name(db: Session, amount, unit: str) -> str:
    """Next "Custom Plan N (<amount> <unit>)" name, N counting existing custom plans."""
    existing = db.query(func.count(Plan.id)).filter(Plan.name.like(CUSTOM_PLAN_PREFIX + "%")).scalar()
    return f"{CUSTOM_PLAN_PREFIX} {existing + 1} ({_format_amount(amount)} {unit.strip()})"


def next_plan_id(db: Session) -> int:
    return db.query(func.coalesce(func.max(Plan.id), 0)).scalar() + 1


def resolve_or_create_plan(db: Session, name: str) -> Plan:
    """Return the plan called ``name``, creating it with the next free id.

    The new row is only flushed; the caller commits it together with whatever
    else the request changes. plan_name is unique, so two requests racing to
    create the same plan end with one insert failing; the loser rolls back and
    reads the winner's row.
    """
    plan = db.query(Plan).filter(Plan.name == name).first()
    if plan:
        return plan

    plan = Plan(id=next_plan_id(db), name=name)
    db.add(plan)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        plan = db.query(Plan).filter(Plan.name == name).first()
        if plan is None:
            # id collision with a differently named plan
            raise
        logger.info("Plan %r created concurrently, reusing it", name)
        return plan
    logger.info("Created plan %r with id %s", name, plan.id)
    return plan
