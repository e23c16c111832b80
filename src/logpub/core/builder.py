"""Fluent builders for content block sequences and blog posts"""

from __future__ import annotations

from typing import Any, Optional, Union

from logpub.core.errors import MissingRequiredFieldError
from logpub.core.models import (
    AccordionBlock, AccordionItem,
    Author, BlogPost, CalloutBlock, CodeBlock, ContentBlock, EmbedBlock,
    HeadingBlock, HeroBlock, ImageBlock, InteractiveBlock, ListBlock,
    MarkdownBlock, MetricItem, MetricsBlock, PostMetadata, QuoteBlock,
    SeparatorBlock, SubheadingBlock, Tab, TableBlock, TabsBlock, TextBlock,
    TimelineBlock, TimelineItem, TwoColumnBlock, VideoBlock,
)
from logpub.core.stats import WORDS_PER_MINUTE, get_content_stats


class ContentBuilder:
    """Append-only block accumulator; every method returns the builder itself."""

    def __init__(self):
        self._blocks: list[ContentBlock] = []

    def _add(self, block: ContentBlock) -> "ContentBuilder":
        self._blocks.append(block)
        return self

    # --- text ---

    def hero(self, content: str) -> "ContentBuilder":
        return self._add(HeroBlock(content=content))

    def heading(self, content: str) -> "ContentBuilder":
        return self._add(HeadingBlock(content=content))

    def subheading(self, content: str) -> "ContentBuilder":
        return self._add(SubheadingBlock(content=content))

    def text(self, content: str) -> "ContentBuilder":
        return self._add(TextBlock(content=content))

    def markdown(self, content: str) -> "ContentBuilder":
        return self._add(MarkdownBlock(content=content))

    def interactive(self, content: str) -> "ContentBuilder":
        return self._add(InteractiveBlock(content=content))

    # --- code, lists, callouts ---

    def code(
        self,
        content: str,
        language: str = "typescript",
        file_name: Optional[str] = None,
        highlight_lines: Optional[list[int]] = None,
        ) -> "ContentBuilder":
        return self._add(CodeBlock(
            content=content, language=language,
            file_name=file_name, highlight_lines=highlight_lines,
        ))

    def list(self, items: list[str], ordered: bool = False) -> "ContentBuilder":
        return self._add(ListBlock(items=list(items), ordered=ordered))

    def callout(self, content: str, variant: str = "info", title: Optional[str] = None) -> "ContentBuilder":
        return self._add(CalloutBlock(content=content, variant=variant, title=title))

    def info(self, content: str, title: Optional[str] = None) -> "ContentBuilder":
        return self.callout(content, "info", title)

    def warning(self, content: str, title: Optional[str] = None) -> "ContentBuilder":
        return self.callout(content, "warning", title)

    def success(self, content: str, title: Optional[str] = None) -> "ContentBuilder":
        return self.callout(content, "success", title)

    def danger(self, content: str, title: Optional[str] = None) -> "ContentBuilder":
        return self.callout(content, "danger", title)

    # --- media ---

    def image(
        self,
        src: str,
        alt: str,
        caption: Optional[str] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
        ) -> "ContentBuilder":
        return self._add(ImageBlock(src=src, alt=alt, caption=caption, width=width, height=height))

    def video(self, src: str, poster: Optional[str] = None, caption: Optional[str] = None) -> "ContentBuilder":
        return self._add(VideoBlock(src=src, poster=poster, caption=caption))

    def quote(self, content: str, author: Optional[str] = None, source: Optional[str] = None) -> "ContentBuilder":
        return self._add(QuoteBlock(content=content, author=author, source=source))

    def embed(
        self,
        url: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        provider: Optional[str] = None,
        ) -> "ContentBuilder":
        return self._add(EmbedBlock(url=url, title=title, description=description, provider=provider))

    # --- data ---

    def table(self, headers: list[str], rows: list[list[str]], caption: Optional[str] = None) -> "ContentBuilder":
        return self._add(TableBlock(headers=headers, rows=rows, caption=caption))

    def timeline(self, items: list[Union[TimelineItem, dict]]) -> "ContentBuilder":
        return self._add(TimelineBlock(items=items))

    def metrics(self, items: list[Union[MetricItem, dict]]) -> "ContentBuilder":
        return self._add(MetricsBlock(items=items))

    def separator(self, style: str = "line") -> "ContentBuilder":
        return self._add(SeparatorBlock(style=style))

    # --- layout ---

    def two_column(self, left: list[ContentBlock], right: list[ContentBlock]) -> "ContentBuilder":
        return self._add(TwoColumnBlock(left=left, right=right))

    def tabs(self, tabs: list[Union[Tab, dict]]) -> "ContentBuilder":
        return self._add(TabsBlock(tabs=tabs))

    def accordion(self, items: list[Union[AccordionItem, dict]]) -> "ContentBuilder":
        return self._add(AccordionBlock(items=items))

    # --- output ---

    def build(self) -> list[ContentBlock]:
        """Return a snapshot; later builder calls do not touch it."""
        return list(self._blocks)

    def clear(self) -> "ContentBuilder":
        self._blocks = []
        return self

    def __len__(self) -> int:
        return len(self._blocks)


def create_content() -> ContentBuilder:
    return ContentBuilder()


class _Templates:
    """Pre-filled builders for common post shapes."""

    @staticmethod
    def tutorial(title: str, description: str) -> ContentBuilder:
        return (
            create_content()
            .hero(description)
            .heading("Overview")
            .text("This tutorial will guide you through...")
            .heading("Prerequisites")
            .list(["Basic knowledge of...", "Familiarity with..."])
            .separator()
            .heading("Getting Started")
        )

    @staticmethod
    def showcase(title: str, description: str, demo_url: Optional[str] = None) -> ContentBuilder:
        return (
            create_content()
            .hero(description)
            .heading("Project Overview")
            .embed(demo_url or "", title="Demo", description="View the demo", provider="Vercel")
            .text("In this post, I'll walk you through...")
            .metrics([
                {"label": "Development Time", "value": "2 weeks"},
                {"label": "Technologies", "value": "5"},
                {"label": "Features", "value": "12"},
            ])
            .separator()
        )

    @staticmethod
    def learning_log(title: str, description: str) -> ContentBuilder:
        return (
            create_content()
            .hero(description)
            .heading("What I Learned")
            .text("Key takeaways from this experience...")
            .timeline([
                {"time": "Week 1", "title": "Discovery", "description": "Initial exploration and setup"},
                {"time": "Week 2", "title": "Implementation", "description": "Building the core features"},
                {"time": "Week 3", "title": "Optimization", "description": "Performance improvements and testing"},
            ])
            .separator()
        )


templates = _Templates()


REQUIRED_POST_FIELDS = ("id", "title", "date", "tags", "content")


class BlogPostBuilder:
    """Collect post metadata and content, then validate presence in build()."""

    def __init__(self):
        self._fields: dict[str, Any] = {}

    def _set(self, name: str, value: Any) -> "BlogPostBuilder":
        self._fields[name] = value
        return self

    def id(self, value: int) -> "BlogPostBuilder":
        return self._set("id", value)

    def title(self, value: str) -> "BlogPostBuilder":
        return self._set("title", value)

    def excerpt(self, value: str) -> "BlogPostBuilder":
        return self._set("excerpt", value)

    def date(self, value: str) -> "BlogPostBuilder":
        return self._set("date", value)

    def tags(self, value: list[str]) -> "BlogPostBuilder":
        return self._set("tags", list(value))

    def read_time(self, value: str) -> "BlogPostBuilder":
        return self._set("read_time", value)

    def hero_gradient(self, value: str) -> "BlogPostBuilder":
        return self._set("hero_gradient", value)

    def reactions(self, value: int) -> "BlogPostBuilder":
        return self._set("reactions", value)

    def slug(self, value: str) -> "BlogPostBuilder":
        return self._set("slug", value)

    def author(self, name: str, url: str = "") -> "BlogPostBuilder":
        return self._set("author", Author(name=name, url=url))

    def cover(self, value: str) -> "BlogPostBuilder":
        return self._set("cover", value)

    def summary(self, value: str) -> "BlogPostBuilder":
        return self._set("summary", value)

    def updated(self, value: str) -> "BlogPostBuilder":
        return self._set("updated", value)

    def content(self, value: Union[list[ContentBlock], ContentBuilder]) -> "BlogPostBuilder":
        if isinstance(value, ContentBuilder):
            value = value.build()
        return self._set("content", list(value))

    def build(self) -> BlogPost:
        """Raise MissingRequiredFieldError naming every absent required field."""
        missing = [
            name for name in REQUIRED_POST_FIELDS
            if self._fields.get(name) in (None, "", [])
        ]
        if missing:
            raise MissingRequiredFieldError(missing)

        return BlogPost(**{k: v for k, v in self._fields.items() if v is not None})


def create_blog_post() -> BlogPostBuilder:
    return BlogPostBuilder()


def build_post(
    metadata: PostMetadata,
    content: list[ContentBlock],
    words_per_minute: int = WORDS_PER_MINUTE,
    ) -> BlogPost:
    """Assemble a post from metadata and parsed content.

    read_time falls back to the estimate from content stats when the
    metadata does not supply one.
    """
    builder = create_blog_post()
    for name, value in metadata.model_dump(exclude_none=True, exclude={"author"}).items():
        getattr(builder, name)(value)
    if metadata.author is not None:
        builder.author(metadata.author.name, metadata.author.url)
    if metadata.read_time is None:
        builder.read_time(get_content_stats(content, words_per_minute).estimated_read_time)
    return builder.content(content).build()
