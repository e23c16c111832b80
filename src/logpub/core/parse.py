"""File discovery, frontmatter extraction, and content parsing of authored posts"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

from logpub.core.builder import build_post
from logpub.core.markdown import parse_markdown
from logpub.core.models import BlogPost, ContentBlock, PostMetadata
from logpub.core.stats import WORDS_PER_MINUTE
from logpub.core.utils.hashing import sha256
from logpub.core.utils.slug import slugify


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)
MD_EXTENSIONS = {'.md', '.mdx'}


def _iso(value: Any) -> Any:
    """YAML turns bare dates into date objects; posts keep them as ISO strings."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return {k: _iso(v) for k, v in fm.items()}, text[m.end():]
    return {}, text


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS)


@dataclass
class ParsedPost:
    """An authored file split into metadata and content blocks."""
    path:         Path
    slug:         str
    markdown:     str          # body only (frontmatter stripped)
    hash:         str
    frontmatter:  dict[str, Any]
    blocks:       list[ContentBlock]

    def to_post(self, words_per_minute: int = WORDS_PER_MINUTE) -> BlogPost:
        """Build the BlogPost; raises MissingRequiredFieldError on incomplete frontmatter."""
        metadata = PostMetadata.model_validate({**self.frontmatter, "slug": self.slug})
        return build_post(metadata, self.blocks, words_per_minute)


def parse_text(text: str, slug: str, path: Path = Path("."), strict: bool = False) -> ParsedPost:
    """Parse authored text that may start with a YAML frontmatter block."""
    frontmatter, body = _strip_frontmatter(text)
    return ParsedPost(
        path=path,
        slug=frontmatter.get('slug') or slug,
        markdown=body,
        hash=sha256(text),
        frontmatter=frontmatter,
        blocks=parse_markdown(body, strict=strict),
    )


def parse_file(path: Path, strict: bool = False) -> ParsedPost:
    """Parse a single markdown file into a ParsedPost."""
    raw = path.read_text(encoding='utf-8')
    return parse_text(raw, slugify(path.stem), path=path, strict=strict)


def parse_dir(path: Path, strict: bool = False) -> list[ParsedPost]:
    """Parse all .md/.mdx files under path (file or directory)."""
    return [parse_file(p, strict) for p in discover_files(path)]
