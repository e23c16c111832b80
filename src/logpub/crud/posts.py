"""Post persistence: upsert with change detection, slug lookup, batch queries"""

from datetime import datetime

from sqlalchemy import func
from sqlmodel import Session, select

from logpub.core.models import BlogPost
from logpub.core.utils.hashing import hash_payload
from logpub.crud.models import PostRow


def post_payload(post: BlogPost) -> dict:
    """camelCase JSON-ready dict of a post, as stored in PostRow.data."""
    return post.model_dump(mode="json", by_alias=True, exclude_none=True)


def row_to_post(row: PostRow) -> BlogPost:
    return BlogPost.model_validate(row.data)


def get_by_slug(session: Session, slug: str) -> PostRow | None:
    """Return the PostRow with the given slug, or None if not found."""
    return session.exec(select(PostRow).where(PostRow.slug == slug)).one_or_none()


def get_all_rows(session: Session) -> list[PostRow]:
    """Return every stored post row."""
    return list(session.exec(select(PostRow)).all())


def get_last_committed(session: Session) -> list[PostRow]:
    """Return rows from the most recent commit batch (MAX committed_at)."""
    max_ts = session.exec(select(func.max(PostRow.committed_at))).one()
    if max_ts is None:
        return []
    return list(session.exec(select(PostRow).where(PostRow.committed_at == max_ts)).all())


def delete_by_slug(session: Session, slug: str) -> bool:
    """Delete the row for slug; return whether one existed. Caller commits."""
    row = get_by_slug(session, slug)
    if row is None:
        return False
    session.delete(row)
    session.flush()
    return True


def commit_post(
    session: Session,
    slug: str,
    post: BlogPost,
    path: str | None = None,
    committed_at: datetime | None = None,
    ) -> tuple[PostRow, str]:
    """Upsert a post under slug.

    Returns (row, status) where status is 'created', 'updated', or 'unchanged'.
    Flushes but does not commit; caller controls the transaction.
    committed_at is set on created/updated rows only.
    """
    data = post_payload(post)
    digest = hash_payload(data)
    row = get_by_slug(session, slug)

    if row:
        if row.hash == digest:
            return row, 'unchanged'
        row.post_id = post.id
        row.title = post.title
        row.date = post.date
        row.tags = list(post.tags)
        row.hash = digest
        row.data = data
        row.path = path or row.path
        row.updated_at = datetime.now()
        row.committed_at = committed_at
        session.add(row)
        session.flush()
        return row, 'updated'

    row = PostRow(
        slug=slug,
        post_id=post.id,
        title=post.title,
        date=post.date,
        tags=list(post.tags),
        hash=digest,
        data=data,
        path=path,
        committed_at=committed_at,
    )
    session.add(row)
    session.flush()
    return row, 'created'
