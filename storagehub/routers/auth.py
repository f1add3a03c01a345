import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storagehub import crud
from storagehub.context import get_db
from storagehub.errors import ConflictError, InternalError, NotFoundError, UnauthorizedError
from storagehub.models import Plan, User
from storagehub.schemas import LoginRequest, PasswordUpdate, PlanUpdate, SignupRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(body: SignupRequest, db: Session = Depends(get_db)):
    try:
        if crud.get_user_by_name_or_email(db, body.username, body.email):
            raise ConflictError()

        # TODO: hash passwords once the frontend stops reading them back from /profile
        user = User(name=body.username, email=body.email, password=body.password)
        db.add(user)
        db.commit()
        return {"user": {"id": user.id, "username": user.name, "email": user.email}}
    except IntegrityError:
        # lost a race with a concurrent signup for the same name/e-mail
        db.rollback()
        raise ConflictError()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Signup failed for %s", body.username)
        raise InternalError()


@router.post("/login")
def login(body: LoginRequest, db: Session = Depends(get_db)):
    try:
        user = crud.authenticate(db, body.identifier, body.password)
        if not user:
            raise UnauthorizedError()
        plan = crud.plan_name_for(db, user.plan_id)
    except SQLAlchemyError:
        logger.exception("Login lookup failed")
        raise InternalError()

    return {"user": {"id": user.id, "username": user.name, "email": user.email, "plan": plan}}


@router.get("/profile/{username}")
def get_profile(username: str, db: Session = Depends(get_db)):
    try:
        row = (
            db.query(User.id, User.name, User.email, User.password, Plan.name)
            .outerjoin(Plan, User.plan_id == Plan.id)
            .filter(User.name == username)
            .first()
        )
    except SQLAlchemyError:
        logger.exception("Profile lookup failed for %s", username)
        raise InternalError()

    if row is None:
        raise NotFoundError("User not found")

    user_id, name, email, password, plan_name = row
    # the stored password is returned as-is; the profile page displays it
    return {
        "user_id": user_id,
        "name": name,
        "email": email,
        "password": password,
        "plan": plan_name or crud.DEFAULT_PLAN,
    }


@router.put("/profile/password")
def update_password(body: PasswordUpdate, db: Session = Depends(get_db)):
    try:
        db.query(User).filter(User.id == body.user_id).update({User.password: body.new_password})
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Password update failed for user %s", body.user_id)
        raise InternalError()
    return {"success": True}


@router.put("/profile/plan")
def update_plan(body: PlanUpdate, db: Session = Depends(get_db)):
    try:
        if body.is_custom:
            plan_name = crud.custom_plan_name(db, body.custom_amount, body.custom_unit)
        else:
            plan_name = body.new_plan_name

        plan = crud.resolve_or_create_plan(db, plan_name)
        db.query(User).filter(User.id == body.user_id).update({User.plan_id: plan.id})
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Plan update failed for user %s", body.user_id)
        raise InternalError()

    logger.info("User %s moved to plan %r", body.user_id, plan_name)
    return {"success": True, "planName": plan_name}
