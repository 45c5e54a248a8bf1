from sqlmodel import SQLModel, Session, create_engine

from app.config import settings


def _connect_args(url: str) -> dict:
    # sqlite connections are used from worker threads by the local catalog source
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.database_url,
    connect_args=_connect_args(settings.database_url),
    pool_pre_ping=True,
)


def create_db_and_tables() -> None:
    SQLModel.metadata.create_all(engine)


def get_session() -> Session:
    return Session(engine)
