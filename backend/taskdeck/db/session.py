from pathlib import Path

from sqlalchemy.engine import Engine, make_url
from sqlmodel import SQLModel, create_engine


def make_engine(database_url: str, echo: bool = False) -> Engine:
    connect_args = {}
    if make_url(database_url).get_backend_name() == "sqlite":
        # FastAPI runs sync endpoints in a thread pool
        connect_args["check_same_thread"] = False
    return create_engine(database_url, echo=echo, connect_args=connect_args)


def init_db(engine: Engine) -> None:
    from . import models  # noqa: F401
    url = engine.url
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(engine)
