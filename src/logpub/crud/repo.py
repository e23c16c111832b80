"""Post repositories: the storage seam behind ContentManager"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from sqlalchemy.engine import Engine
from sqlmodel import Session

from logpub.core.models import BlogPost
from logpub.crud.posts import commit_post, delete_by_slug, get_all_rows, get_by_slug, row_to_post


class PostRepo(ABC):
    """Keyed post storage; slugs are the keys."""

    @abstractmethod
    def put(self, slug: str, post: BlogPost) -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, slug: str) -> BlogPost | None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, slug: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def items(self) -> list[tuple[str, BlogPost]]:
        """All (slug, post) pairs."""
        raise NotImplementedError


@dataclass
class MemoryRepo(PostRepo):
    _posts: dict[str, BlogPost] = field(default_factory=dict)

    def put(self, slug: str, post: BlogPost) -> None:
        self._posts[slug] = post

    def get(self, slug: str) -> BlogPost | None:
        return self._posts.get(slug)

    def delete(self, slug: str) -> bool:
        return self._posts.pop(slug, None) is not None

    def items(self) -> list[tuple[str, BlogPost]]:
        return list(self._posts.items())


class SQLRepo(PostRepo):
    """PostRepo over the posts table; each call runs in its own transaction."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def put(self, slug: str, post: BlogPost) -> None:
        with Session(self.engine) as session:
            commit_post(session, slug, post)
            session.commit()

    def get(self, slug: str) -> BlogPost | None:
        with Session(self.engine) as session:
            row = get_by_slug(session, slug)
            return row_to_post(row) if row else None

    def delete(self, slug: str) -> bool:
        with Session(self.engine) as session:
            deleted = delete_by_slug(session, slug)
            session.commit()
            return deleted

    def items(self) -> list[tuple[str, BlogPost]]:
        with Session(self.engine) as session:
            return [(row.slug, row_to_post(row)) for row in get_all_rows(session)]
