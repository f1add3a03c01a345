import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storagehub.context import get_db
from storagehub.errors import InternalError
from storagehub.models import Folder
from storagehub.schemas import FolderCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/folders")


@router.post("", status_code=status.HTTP_201_CREATED)
def create_folder(body: FolderCreate, db: Session = Depends(get_db)):
    try:
        folder = Folder(name=body.name, user_id=body.user_id)
        db.add(folder)
        db.commit()
        return {"id": folder.id, "name": folder.name}
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not create folder %r", body.name)
        raise InternalError("Create error")


@router.get("/{user_id}")
def list_folders(user_id: int, db: Session = Depends(get_db)):
    try:
        folders = db.query(Folder).filter(Folder.user_id == user_id).all()
    except SQLAlchemyError:
        logger.exception("Could not list folders for user %s", user_id)
        raise InternalError("Fetch error")
    return [{"id": f.id, "name": f.name} for f in folders]
