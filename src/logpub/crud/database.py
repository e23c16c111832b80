"""Engine construction and schema creation"""

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from logpub.crud.models import PostRow  # noqa: F401  registers the table


def make_engine(db_url: str) -> Engine:
    connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}
    return create_engine(db_url, echo=False, connect_args=connect_args)


def init_db(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    SQLModel.metadata.create_all(engine)
