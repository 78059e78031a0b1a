from pathlib import Path

from sqlmodel import Session, create_engine
from fiscaal.core.config import settings


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"check_same_thread": False}  # ← needed for SQLite
    return {}


if settings.DATABASE_URL.startswith("sqlite:///./"):
    Path(settings.DATABASE_URL.removeprefix("sqlite:///")).parent.mkdir(
        parents=True, exist_ok=True
    )

engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    connect_args=_connect_args(settings.DATABASE_URL),
)


def get_session():
    with Session(engine) as session:
        yield session
