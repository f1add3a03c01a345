"""
External storage for uploaded binaries.

Uploads go to Cloudinary under the fixed PARENT_FOLDER_ID folder. Credentials
come from DRIVE_CREDENTIALS (inline JSON), then DRIVE_CREDENTIALS_FILE (path
to the same JSON), then CLOUDINARY_URL. Without any of them the service runs
with uploads disabled.
"""
import json
import logging
from typing import Optional
from urllib.parse import urlparse

import cloudinary.uploader

from storagehub.config import PARENT_FOLDER_ID

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("cloud_name", "api_key", "api_secret")


class DriveError(Exception):
    """Raised when the provider rejects or fails an upload."""


def _parse_cloudinary_url(url: str) -> dict:
    # cloudinary://<api_key>:<api_secret>@<cloud_name>
    parsed = urlparse(url)
    if parsed.scheme != "cloudinary":
        raise ValueError("CLOUDINARY_URL must start with cloudinary://")
    return {"cloud_name": parsed.hostname, "api_key": parsed.username, "api_secret": parsed.password}


def load_credentials(settings) -> Optional[dict]:
    if settings.drive_credentials:
        creds = json.loads(settings.drive_credentials)
    elif settings.drive_credentials_file:
        with open(settings.drive_credentials_file, encoding="utf-8") as fh:
            creds = json.load(fh)
    elif settings.cloudinary_url:
        creds = _parse_cloudinary_url(settings.cloudinary_url)
    else:
        return None

    missing = [k for k in REQUIRED_KEYS if not creds.get(k)]
    if missing:
        raise ValueError(f"drive credentials missing {', '.join(missing)}")
    return {k: creds[k] for k in REQUIRED_KEYS}


class DriveClient:
    def __init__(self, cloud_name: str, api_key: str, api_secret: str,
                 parent_id: str = PARENT_FOLDER_ID, timeout: Optional[float] = None):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.parent_id = parent_id
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> Optional["DriveClient"]:
        """Build a client, or return None when credentials are absent or broken."""
        try:
            creds = load_credentials(settings)
        except (OSError, ValueError) as e:
            logger.error("Drive auth error, uploads disabled: %s", e)
            return None
        if creds is None:
            logger.warning("No drive credentials configured, uploads disabled")
            return None
        return cls(timeout=settings.drive_timeout, **creds)

    def upload(self, path: str, name: str, mime_type: Optional[str] = None) -> str:
        """Upload the file at ``path`` and return the provider's object id."""
        options = {
            "resource_type": "auto",
            "folder": self.parent_id,
            "use_filename": True,
            "unique_filename": True,
            "filename_override": name,
            "context": {"original_name": name, "mime_type": mime_type or "application/octet-stream"},
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
        }
        if self.timeout:
            options["timeout"] = self.timeout
        try:
            result = cloudinary.uploader.upload(path, **options)
        except Exception as e:
            raise DriveError(str(e)) from e

        object_id = result.get("public_id")
        if not object_id:
            raise DriveError("provider returned no object id")
        logger.info("Uploaded %s to drive as %s (%s bytes)", name, object_id, result.get("bytes"))
        return object_id

    def delete(self, object_id: str):
        """Remove an uploaded object; raises DriveError when it could not be removed."""
        credentials = {"cloud_name": self.cloud_name, "api_key": self.api_key, "api_secret": self.api_secret}
        if self.timeout:
            credentials["timeout"] = self.timeout
        # uploads use resource_type="auto", so the stored type is not known here
        for resource_type in ("image", "video", "raw"):
            try:
                result = cloudinary.uploader.destroy(object_id, resource_type=resource_type, **credentials)
            except Exception as e:
                raise DriveError(str(e)) from e
            if result.get("result") == "ok":
                logger.info("Deleted drive object %s", object_id)
                return
        raise DriveError(f"drive object {object_id} not found")
