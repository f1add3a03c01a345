import logging
import os
import shutil
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Form, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storagehub.config import Settings
from storagehub.context import get_db, get_drive, get_settings
from storagehub.drive import DriveClient, DriveError
from storagehub.errors import BadRequestError, InternalError, ServiceUnavailableError
from storagehub.models import File
from storagehub.utils import drive_content

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def _optional_int(value: Optional[str]) -> Optional[int]:
    # multipart forms send missing ids as "", "null" or "undefined"
    if value is None or value.strip() in ("", "null", "undefined", "None"):
        return None
    return int(value)


@router.post("/upload")
def upload(
    file: UploadFile,
    user_id: int = Form(..., alias="userId"),
    folder_id: Optional[str] = Form(None, alias="folderId"),
    folder_name: Optional[str] = Form(None, alias="folderName"),
    db: Session = Depends(get_db),
    drive: Optional[DriveClient] = Depends(get_drive),
    settings: Settings = Depends(get_settings),
):
    try:
        folder_id = _optional_int(folder_id)
    except ValueError:
        raise BadRequestError("folderId: must be an integer")

    tmp_path = os.path.join(settings.upload_dir, uuid.uuid4().hex)
    try:
        try:
            os.makedirs(settings.upload_dir, exist_ok=True)
            with open(tmp_path, "wb") as out:
                shutil.copyfileobj(file.file, out)
            size = os.path.getsize(tmp_path)
        except OSError:
            logger.exception("Could not spool upload to %s", settings.upload_dir)
            raise InternalError("Upload failed")

        if drive is None:
            raise ServiceUnavailableError()

        try:
            object_id = drive.upload(tmp_path, file.filename, file.content_type)
        except DriveError:
            logger.exception("Drive upload failed for %s", file.filename)
            raise InternalError("Upload failed")

        try:
            row = File(
                name=file.filename,
                size=size,
                user_id=user_id,
                folder_id=folder_id,
                folder_name=folder_name or None,
                content=drive_content(object_id),
            )
            db.add(row)
            db.commit()
            db_file_id = row.id
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Uploaded %s as %s but could not record it", file.filename, object_id)
            _discard_orphan(drive, object_id)
            raise InternalError("Upload failed")
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)

    return {"fileId": object_id, "dbFileId": db_file_id}


def _discard_orphan(drive: DriveClient, object_id: str):
    try:
        drive.delete(object_id)
    except DriveError:
        logger.error("Orphaned drive object %s must be removed by hand", object_id, exc_info=True)
