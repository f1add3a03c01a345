import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storagehub.context import get_db
from storagehub.errors import InternalError
from storagehub.models import File
from storagehub.schemas import FileCreate, FileUpdate
from storagehub.utils import derive_file_type

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/files")


def file_summary(f: File) -> dict:
    return {
        "id": f.id,
        "name": f.name,
        "size": f.size,
        "folderId": f.folder_id,
        "folderName": f.folder_name,
        "content": f.content,
        "type": derive_file_type(f.name),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_file(body: FileCreate, db: Session = Depends(get_db)):
    try:
        f = File(
            name=body.name,
            size=body.size,
            user_id=body.user_id,
            folder_id=body.folder_id,
            folder_name=body.folder_name,
            content=body.content,
        )
        db.add(f)
        db.commit()
        return {"id": f.id}
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not create file %r", body.name)
        raise InternalError("Create error")


@router.get("/{user_id}")
def list_files(user_id: int, db: Session = Depends(get_db)):
    try:
        files = db.query(File).filter(File.user_id == user_id).all()
    except SQLAlchemyError:
        logger.exception("Could not list files for user %s", user_id)
        raise InternalError("Fetch error")
    return [file_summary(f) for f in files]


@router.put("/{file_id}")
def update_file(file_id: int, body: FileUpdate, db: Session = Depends(get_db)):
    # no owner check: any caller holding a file id may overwrite it
    try:
        db.query(File).filter(File.id == file_id).update({File.content: body.content, File.size: body.size})
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not update file %s", file_id)
        raise InternalError("Update error")
    return {"success": True}
