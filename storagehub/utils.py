import re
from typing import Optional

DRIVE_CONTENT_PREFIX = "Drive File ID"

_EXTENSION_RE = re.compile(r"\.([^.]+)$")
_DRIVE_CONTENT_RE = re.compile(r"^" + re.escape(DRIVE_CONTENT_PREFIX) + r":\s*(\S+)\s*$")


def derive_file_type(name: str) -> str:
    """Return the text after the last period of ``name``, or "file"."""
    match = _EXTENSION_RE.search(name or "")
    return match.group(1) if match else "file"


def drive_content(object_id: str) -> str:
    return f"{DRIVE_CONTENT_PREFIX}: {object_id}"


def parse_drive_content(content: Optional[str]) -> Optional[str]:
    """Object id embedded in a file row's content, or None for inline content."""
    if not content:
        return None
    match = _DRIVE_CONTENT_RE.match(content)
    return match.group(1) if match else None
