"""Pipeline step functions: extract, commit, and export orchestration"""

import logging
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel
from sqlmodel import Session

from logpub.core.export import write_post
from logpub.core.models import BlogPost
from logpub.core.parse import discover_files, parse_file
from logpub.core.stats import WORDS_PER_MINUTE
from logpub.core.validate import validate_post
from logpub.crud.models import PostRow
from logpub.crud.posts import commit_post, row_to_post


logger = logging.getLogger(__name__)


class StagedPost(BaseModel):
    """Staging contract: written by extract, read by commit."""
    slug: str
    path: str
    post: BlogPost


def run_extract(
    path: str,
    staging_dir: Path,
    strict: bool = False,
    words_per_minute: int = WORDS_PER_MINUTE,
    ) -> list[tuple[Path, Path]]:
    """Parse path and write StagedPost JSON to staging_dir. Returns (source_path, staging_file) pairs.

    A file whose post is incomplete or fails validation aborts the run with a
    RuntimeError naming the file.
    """
    staging_dir.mkdir(parents=True, exist_ok=True)
    results = []
    for p in discover_files(Path(path)):
        try:
            parsed = parse_file(p, strict)
            post = parsed.to_post(words_per_minute)
            check = validate_post(post)
            if not check.is_valid:
                raise ValueError("; ".join(check.errors))
            staged = StagedPost(slug=parsed.slug, path=str(p), post=post)
            out_file = staging_dir / f"{staged.slug}.json"
            out_file.write_text(staged.model_dump_json(indent=2, by_alias=True, exclude_none=True))
            results.append((p, out_file))
            logger.debug("Staged %s as %s", p, out_file)
        except Exception as e:
            raise RuntimeError(f"Failed to extract {p}: {e}") from e
    return results


def run_commit(engine, staging_dir: Path) -> tuple[dict[str, int], list[tuple[str, str]]]:
    """Read staged posts and upsert them into the database.

    Returns (counts, changes) where changes is a list of (status, slug) for
    created/updated posts. Returns ({}, []) when staging_dir is empty.
    """
    files = sorted(staging_dir.glob('*.json')) if staging_dir.exists() else []
    if not files:
        return {}, []

    committed_at = datetime.now()
    counts = {"created": 0, "updated": 0, "unchanged": 0}
    changes = []
    with Session(engine) as session:
        for f in files:
            staged = StagedPost.model_validate_json(f.read_text())
            row, status = commit_post(session, staged.slug, staged.post, staged.path, committed_at)
            counts[status] += 1
            if status != 'unchanged':
                changes.append((status, row.slug))
        session.commit()
    logger.info("Committed %d staged post(s): %s", len(files), counts)
    return counts, changes


def run_export(
    rows: list[PostRow],
    output_dir: Path,
    fmt: str,
    words_per_minute: int = WORDS_PER_MINUTE,
    ) -> list[tuple[str, Path]]:
    """Write stored posts to output_dir. Returns (slug, mdx_path) pairs."""
    results = []
    for row in rows:
        mdx_path, _ = write_post(row_to_post(row), row.slug, output_dir, fmt, row.path, words_per_minute)
        results.append((row.slug, mdx_path))
    return results
