"""Shared fixtures for crud unit tests"""

import pytest
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from logpub.core.builder import create_blog_post, create_content


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s


@pytest.fixture(name="post")
def post_fixture():
    """A minimal valid BlogPost."""
    return (
        create_blog_post()
        .id(1).title("Stored").date("2024-02-02").tags(["db"])
        .content(create_content().hero("Stored").text("Row body"))
        .build()
    )
