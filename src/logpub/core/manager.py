"""Keyed post collection: add, look up, list, search, and JSON import/export"""

import logging
from datetime import date

from pydantic import ValidationError

from logpub.core.builder import build_post
from logpub.core.errors import InvalidPostError
from logpub.core.markdown import parse_markdown
from logpub.core.models import BlogPost, BlogPostSummary, PostMetadata
from logpub.core.stats import WORDS_PER_MINUTE
from logpub.core.validate import ValidationResult, validate_post
from logpub.crud.repo import MemoryRepo, PostRepo


logger = logging.getLogger(__name__)


def _date_key(summary: BlogPostSummary) -> date:
    """Sort key for post dates; unparseable dates sort oldest."""
    try:
        return date.fromisoformat(summary.date[:10])
    except ValueError:
        return date.min


class ContentManager:
    """Stores full posts by slug and serves summary views over them.

    Posts are validated before they are accepted; once stored they are only
    replaced, never edited in place.
    """

    def __init__(self, repo: PostRepo | None = None, words_per_minute: int = WORDS_PER_MINUTE):
        self.repo = repo if repo is not None else MemoryRepo()
        self.words_per_minute = words_per_minute

    def add_post(self, slug: str, post: BlogPost) -> None:
        """Store post under slug; raises InvalidPostError if it fails validation."""
        result = validate_post(post)
        if not result.is_valid:
            raise InvalidPostError(slug, result.errors)
        self.repo.put(slug, post)
        logger.debug("Stored post %s", slug)

    def get_post(self, slug: str) -> BlogPost | None:
        return self.repo.get(slug)

    def remove_post(self, slug: str) -> bool:
        return self.repo.delete(slug)

    def get_all_posts(self) -> list[BlogPostSummary]:
        """Summaries of every post, newest first."""
        summaries = [post.summary_view(slug) for slug, post in self.repo.items()]
        return sorted(summaries, key=_date_key, reverse=True)

    def get_posts_by_tag(self, tag: str) -> list[BlogPostSummary]:
        return [p for p in self.get_all_posts() if tag in p.tags]

    def search_posts(self, query: str) -> list[BlogPostSummary]:
        """Case-insensitive substring match over title, excerpt, and tags."""
        q = query.lower()
        return [
            p for p in self.get_all_posts()
            if q in p.title.lower()
            or q in p.excerpt.lower()
            or any(q in t.lower() for t in p.tags)
        ]

    def get_all_tags(self) -> list[str]:
        return sorted({t for p in self.get_all_posts() for t in p.tags})

    def add_post_from_markdown(
        self,
        slug: str,
        metadata: PostMetadata | dict,
        markdown: str,
        strict: bool = False,
        ) -> BlogPost:
        """Parse markdown, fill read time from stats when absent, then build, validate and store."""
        if isinstance(metadata, dict):
            metadata = PostMetadata.model_validate(metadata)
        content = parse_markdown(markdown, strict=strict)
        post = build_post(metadata.model_copy(update={"slug": slug}), content, self.words_per_minute)
        self.add_post(slug, post)
        return post

    def validate_post(self, post: BlogPost) -> ValidationResult:
        return validate_post(post)

    def export_post(self, slug: str) -> str | None:
        """Return the post as indented camelCase JSON, or None if unknown."""
        post = self.get_post(slug)
        return post.to_json() if post else None

    def import_post(self, slug: str, json_data: str) -> bool:
        """Store a post from JSON; False (and a log entry) if it is unreadable or invalid."""
        try:
            post = BlogPost.model_validate_json(json_data)
        except ValidationError as e:
            logger.error("Failed to import post %s: %s", slug, e)
            return False

        try:
            self.add_post(slug, post)
        except InvalidPostError as e:
            logger.error("Invalid post data for %s: %s", slug, e.errors)
            return False
        return True
