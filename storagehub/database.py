from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

Base = declarative_base()


def make_engine(database_url: str, ssl_no_verify: bool = True, **kwargs):
    """Build the engine for DATABASE_URL.

    SQLite needs check_same_thread off because FastAPI runs sync handlers in a
    threadpool. For PostgreSQL the connection is encrypted but the server
    certificate is not verified when ssl_no_verify is set.
    """
    if database_url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        return create_engine(database_url, connect_args=connect_args, **kwargs)

    connect_args = kwargs.pop("connect_args", {})
    if ssl_no_verify:
        connect_args.setdefault("sslmode", "require")
    return create_engine(database_url, connect_args=connect_args, pool_pre_ping=True, **kwargs)


def make_session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)
