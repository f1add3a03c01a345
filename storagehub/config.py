import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()  # load .env before anything reads env

# Provider-side container every upload is placed under.
PARENT_FOLDER_ID = "17dDMHkoWFjy30ao7HutKbY7qiew1HKyu"


def _flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    database_url: str = "sqlite:///./storagehub.db"
    database_ssl_no_verify: bool = True
    drive_credentials: Optional[str] = None
    drive_credentials_file: Optional[str] = None
    cloudinary_url: Optional[str] = None
    drive_timeout: Optional[float] = None
    upload_dir: str = "uploads"
    allow_origins: List[str] = field(default_factory=lambda: ["*"])
    share_link_template: str = "https://storagehub.app/share/{share_id}"
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        database_url = os.getenv("DATABASE_URL", cls.database_url)
        # Heroku/Railway style URLs are not accepted by SQLAlchemy
        if database_url.startswith("postgres://"):
            database_url = "postgresql://" + database_url[len("postgres://"):]

        origins = os.getenv("ALLOW_ORIGINS", "*")
        timeout = os.getenv("DRIVE_TIMEOUT")

        return cls(
            database_url=database_url,
            database_ssl_no_verify=_flag("DATABASE_SSL_NO_VERIFY", True),
            drive_credentials=os.getenv("DRIVE_CREDENTIALS"),
            drive_credentials_file=os.getenv("DRIVE_CREDENTIALS_FILE"),
            cloudinary_url=os.getenv("CLOUDINARY_URL"),
            drive_timeout=float(timeout) if timeout else None,
            upload_dir=os.getenv("UPLOAD_DIR", cls.upload_dir),
            allow_origins=[o.strip() for o in origins.split(",") if o.strip()],
            share_link_template=os.getenv("SHARE_LINK_TEMPLATE", cls.share_link_template),
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", cls.port)),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
        )
