from pathlib import Path
import sys

import pytest
from sqlmodel import create_engine

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storage.db import get_session, init_db  # noqa: E402
from storage.store import TaskStore  # noqa: E402


@pytest.fixture()
def db_path(tmp_path):
    return tmp_path / "tasks.db"


@pytest.fixture()
def session_factory(db_path):
    # short busy timeout so a held lock turns into a quick commit failure
    engine = create_engine(f"sqlite:///{db_path.as_posix()}", connect_args={"timeout": 0.2})
    init_db(engine)

    def factory():
        return get_session(engine)

    yield factory
    engine.dispose()


@pytest.fixture()
def store(session_factory):
    store = TaskStore(session_factory)
    yield store
    store.close()
