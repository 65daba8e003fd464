# simpletodo/storage/db.py
from sqlmodel import SQLModel, create_engine, Session

from core.settings import DB_PATH

# Ensure SQLModel metadata is populated
import models.task  # noqa: F401


_engine = create_engine(f"sqlite:///{DB_PATH.as_posix()}", echo=False)


def init_db(engine=None):
    actual_engine = engine or _engine
    if engine is None:
        DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(actual_engine)


def get_engine():
    return _engine


def get_session(engine=None) -> Session:
    # objects stay readable after commit so rows can keep showing them
    return Session(engine or _engine, expire_on_commit=False)
