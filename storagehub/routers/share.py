import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storagehub import crud
from storagehub.config import Settings
from storagehub.context import get_db, get_settings
from storagehub.errors import InternalError, NotFoundError
from storagehub.models import File, Share
from storagehub.schemas import ShareCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

OWNER = "owner"


@router.post("/share")
def share_file(body: ShareCreate, db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    try:
        target_id = body.user_id
        if body.shared_with_email:
            target = crud.get_user_by_email(db, body.shared_with_email)
            if target is None:
                raise NotFoundError("User with this email not found")
            target_id = target.id

        if body.permission == OWNER:
            # only moves the file if ownerId really owns it; no match is not an error
            moved = (
                db.query(File)
                .filter(File.id == body.file_id, File.user_id == body.owner_id)
                .update({File.user_id: target_id})
            )
            db.commit()
            logger.info("Ownership of file %s: %s -> %s (%d row(s))",
                        body.file_id, body.owner_id, target_id, moved)
            return {"share_id": None, "message": "Ownership transferred"}

        share = Share(
            file_id=body.file_id,
            owner_id=body.owner_id,
            shared_with=target_id,
            permission=body.permission,
        )
        db.add(share)
        db.commit()
        share_id = share.id
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Share of file %s failed", body.file_id)
        raise InternalError("Share failed")

    if body.shared_with_email:
        return {"share_id": share_id, "message": f"File shared with {body.shared_with_email}"}

    # legacy clients share by id and expect a link back
    return {"share_id": share_id, "link": settings.share_link_template.format(share_id=share_id)}
