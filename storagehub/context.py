from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from storagehub.config import Settings
from storagehub.database import Base, make_engine, make_session_factory
from storagehub.drive import DriveClient


@dataclass
class AppContext:
    """Handles shared by every request: one engine, one optional drive client."""
    settings: Settings
    engine: object
    session_factory: object
    drive: Optional[DriveClient] = None

    @classmethod
    def from_settings(cls, settings: Settings, engine=None, drive=None) -> "AppContext":
        if engine is None:
            engine = make_engine(settings.database_url, ssl_no_verify=settings.database_ssl_no_verify)
        if drive is None:
            drive = DriveClient.from_settings(settings)
        Base.metadata.create_all(bind=engine)
        return cls(settings=settings, engine=engine,
                   session_factory=make_session_factory(engine), drive=drive)

    def close(self):
        self.engine.dispose()


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_db(request: Request):
    db = get_context(request).session_factory()
    try:
        yield db
    finally:
        db.close()


def get_drive(request: Request) -> Optional[DriveClient]:
    return get_context(request).drive


def get_settings(request: Request) -> Settings:
    return get_context(request).settings
