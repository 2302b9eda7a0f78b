"""
Database configuration - backing store for the sheet store
Only SheetStore talks to these tables; everything else goes through the gateway
"""
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from hms.config import settings

Base = declarative_base()


def create_db_engine(url: str):
    """SQLite engine usable from FastAPI worker threads"""
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


engine = create_db_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    """Create the tables"""
    from hms.models import tables  # noqa
    bind = bind or engine
    Base.metadata.create_all(bind=bind)

    # WAL mode for concurrent readers on file databases
    if bind.url.get_backend_name() == "sqlite" and bind.url.database not in (None, "", ":memory:"):
        with bind.connect() as conn:
            conn.execute(text("PRAGMA journal_mode=WAL"))
            conn.execute(text("PRAGMA synchronous=NORMAL"))
            conn.commit()
