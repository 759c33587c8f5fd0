from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from collections.abc import Generator
from library_api.core.config import settings
from library_api.models import Base

_connect_args: dict[str, object] = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # sessions are handed across FastAPI's threadpool
    _connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.SQL_ECHO,
    connect_args=_connect_args,
)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def init_db() -> None:
    """
    Create the authors/books tables if they do not exist yet.
    """
    Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    One session per request, closed when the response is sent.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
