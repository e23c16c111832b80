"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from sqlmodel import Session, SQLModel

from logpub.config import Settings, load_config
from logpub.core.errors import MarkdownSyntaxError
from logpub.core.manager import ContentManager
from logpub.core.models import dump_blocks
from logpub.core.parse import parse_file
from logpub.core.pipeline import run_commit, run_export, run_extract
from logpub.core.stats import get_content_stats
from logpub.core.validate import validate_post
from logpub.crud.database import init_db, make_engine
from logpub.crud.posts import get_all_rows, get_by_slug, get_last_committed
from logpub.crud.repo import SQLRepo


StrictOption = Annotated[Optional[bool], typer.Option("--strict/--lenient", help="Fail on malformed markdown")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    return settings


def _read(file: Path, strict: bool):
    """Parse one authored file, turning parser failures into CLI errors."""
    try:
        return parse_file(file, strict)
    except MarkdownSyntaxError as e:
        _fail(f"Malformed markdown in {file}", e)
    except ValueError as e:
        _fail(f"Could not read {file}", e)


def _echo_commit(counts: dict, changes: list) -> None:
    """Print per-post commit status and a summary line."""
    for status, slug in changes:
        typer.echo(f"  {status}: {slug}")
    typer.echo(
        f"Commit complete - "
        f"{counts['created']} created, "
        f"{counts['updated']} updated, "
        f"{counts['unchanged']} unchanged"
    )


def build_cmd(
    path: Annotated[str, typer.Argument(help="File or directory of posts to process")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    staging: Annotated[Optional[str], typer.Option("--staging-dir", help="Staging directory")] = None,
    fmt: Annotated[Optional[str], typer.Option("--format", help="md or mdx")] = None,
    strict: StrictOption = None,
    ):
    """Run the full pipeline: extract -> commit -> export."""
    settings = _settings(overrides={
        "output_dir": out, "staging_dir": staging, "output_format": fmt, "strict": strict,
    })
    engine = make_engine(settings.db_url)
    init_db(engine)
    staging_dir = Path(settings.staging_dir)

    # --- extract ---
    try:
        extracted = run_extract(path, staging_dir, settings.strict, settings.words_per_minute)
    except RuntimeError as e:
        _fail(str(e))
    for src, out_file in extracted:
        typer.echo(f"  {src} -> {out_file}")
    typer.echo(f"Extracted {len(extracted)} post(s) to {staging_dir}/")

    # --- commit ---
    try:
        counts, changes = run_commit(engine, staging_dir)
    except Exception as e:
        _fail("Commit failed", e)
    if counts:
        _echo_commit(counts, changes)

    # --- export ---
    output_dir = Path(settings.output_dir)
    try:
        with Session(engine) as session:
            results = run_export(
                get_last_committed(session), output_dir,
                settings.output_format, settings.words_per_minute,
            )
    except Exception as e:
        _fail("Export failed", e)
    for slug, mdx_path in results:
        typer.echo(f"  {slug} -> {mdx_path}")
    typer.echo(f"Exported {len(results)} post(s) to {output_dir}/")


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize database schema. Use --reset to clear existing posts."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        SQLModel.metadata.drop_all(engine)
        typer.echo("Existing data cleared.")
    init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")


def extract_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to extract from")],
    staging: Annotated[Optional[str], typer.Option("--staging-dir", help="Staging directory")] = None,
    strict: StrictOption = None,
    ):
    """Parse posts, validate them, and stage them as JSON."""
    settings = _settings(overrides={"staging_dir": staging, "strict": strict})
    staging_dir = Path(settings.staging_dir)
    try:
        results = run_extract(path, staging_dir, settings.strict, settings.words_per_minute)
    except RuntimeError as e:
        _fail(str(e))
    for src, out_file in results:
        typer.echo(f"  {src} -> {out_file}")
    typer.echo(f"Extracted {len(results)} post(s) to {staging_dir}/")


def commit_cmd(
    staging: Annotated[Optional[str], typer.Option("--staging-dir", help="Staging directory")] = None,
    ):
    """Upsert staged posts to the database."""
    settings = _settings(overrides={"staging_dir": staging})
    engine = make_engine(settings.db_url)
    init_db(engine)

    try:
        counts, changes = run_commit(engine, Path(settings.staging_dir))
    except Exception as e:
        _fail("Commit failed", e)
    if not counts:
        typer.echo("Nothing staged. Run 'logpub extract <path>' first.")
        raise typer.Exit(1)

    _echo_commit(counts, changes)


def export_cmd(
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    slug: Annotated[Optional[str], typer.Option("--slug", help="Export a single post")] = None,
    all_posts: Annotated[bool, typer.Option("--all", help="Export all posts in the database")] = False,
    fmt: Annotated[Optional[str], typer.Option("--format", help="md or mdx")] = None,
    ):
    """Write MD/MDX + sidecar JSON for stored posts."""
    settings = _settings(overrides={"output_dir": out, "output_format": fmt})
    engine = make_engine(settings.db_url)
    init_db(engine)
    output_dir = Path(settings.output_dir)

    try:
        with Session(engine) as session:
            if slug:
                row = get_by_slug(session, slug)
                rows = [row] if row else []
                scope = f"slug '{slug}'"
            elif all_posts:
                rows = get_all_rows(session)
                scope = "all"
            else:
                rows = get_last_committed(session)
                scope = "last commit"

            if not rows:
                typer.echo(f"No posts found for scope: {scope}.")
                raise typer.Exit(1)

            results = run_export(rows, output_dir, settings.output_format, settings.words_per_minute)
    except typer.Exit:
        raise
    except Exception as e:
        _fail("Export failed", e)

    for slug_, mdx_path in results:
        typer.echo(f"  {slug_} -> {mdx_path}")
    typer.echo(f"Exported {len(results)} post(s) to {output_dir}/")


def list_cmd(
    tag: Annotated[Optional[str], typer.Option("--tag", help="Only posts carrying this tag")] = None,
    search: Annotated[Optional[str], typer.Option("--search", help="Match title, excerpt, or tags")] = None,
    ):
    """List stored posts, newest first."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    manager = ContentManager(SQLRepo(engine), settings.words_per_minute)

    if search:
        posts = manager.search_posts(search)
    elif tag:
        posts = manager.get_posts_by_tag(tag)
    else:
        posts = manager.get_all_posts()
    if tag and search:
        posts = [p for p in posts if tag in p.tags]

    if not posts:
        typer.echo("No posts found.")
        raise typer.Exit(1)
    for p in posts:
        typer.echo(f"{p.date}  {p.slug}  {p.title}  [{', '.join(p.tags)}]")


def parse_cmd(
    file: Annotated[Path, typer.Argument(exists=True, dir_okay=False, help="Markdown file to parse")],
    strict: StrictOption = None,
    ):
    """Print the content blocks of a file as JSON."""
    settings = _settings(overrides={"strict": strict})
    parsed = _read(file, settings.strict)
    typer.echo(json.dumps(dump_blocks(parsed.blocks), indent=2))


def validate_cmd(
    file: Annotated[Path, typer.Argument(exists=True, dir_okay=False, help="Post file to validate")],
    strict: StrictOption = None,
    ):
    """Check a post's frontmatter and content blocks."""
    settings = _settings(overrides={"strict": strict})
    parsed = _read(file, settings.strict)
    try:
        post = parsed.to_post(settings.words_per_minute)
    except ValueError as e:  # MissingRequiredFieldError or bad frontmatter types
        _fail(f"Invalid post {file}", e)

    result = validate_post(post)
    if not result.is_valid:
        for err in result.errors:
            typer.echo(f"  {err}", err=True)
        _fail(f"{file} failed validation with {len(result.errors)} error(s)")
    typer.echo(f"{file}: OK ({len(post.content)} blocks)")


def stats_cmd(
    file: Annotated[Path, typer.Argument(exists=True, dir_okay=False, help="Markdown file to measure")],
    ):
    """Print block counts, word count, and estimated read time."""
    settings = _settings()
    parsed = _read(file, settings.strict)
    stats = get_content_stats(parsed.blocks, settings.words_per_minute)
    for key, value in stats.model_dump(by_alias=True).items():
        typer.echo(f"{key}: {value}")
