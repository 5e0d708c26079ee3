"""Engine, session factory and the get_db dependency. Tables are managed by Alembic."""
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from tubely.config import get_settings

settings = get_settings()


def _connect_args(database_url: str) -> dict:
    # Upload routes hand the request's session to the threadpool
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.database_url,
    connect_args=_connect_args(settings.database_url),
    pool_pre_ping=not settings.database_url.startswith("sqlite"),
    echo=False,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
