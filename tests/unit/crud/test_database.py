"""Unit tests for crud/database.py"""

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from logpub.crud.database import init_db, make_engine


SQLITE_MEM = "sqlite://"


def test_make_engine_returns_engine():
    """make_engine returns an SQLAlchemy Engine instance."""
    assert isinstance(make_engine(SQLITE_MEM), Engine)


def test_init_db_creates_posts_table():
    engine = make_engine(SQLITE_MEM)
    init_db(engine)
    assert "posts" in inspect(engine).get_table_names()


def test_init_db_is_idempotent():
    """Running init_db on an initialized database leaves the table in place."""
    engine = make_engine(SQLITE_MEM)
    init_db(engine)
    init_db(engine)
    assert inspect(engine).get_table_names() == ["posts"]
