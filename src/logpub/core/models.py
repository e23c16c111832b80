"""Content model: the closed set of content block variants and blog post metadata"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel


class BlockType(str, Enum):
    """Restrict content blocks to a predefined set of variants"""
    hero = "hero"
    heading = "heading"
    subheading = "subheading"
    text = "text"
    markdown = "markdown"
    code = "code"
    callout = "callout"
    list = "list"
    image = "image"
    video = "video"
    quote = "quote"
    table = "table"
    timeline = "timeline"
    metrics = "metrics"
    separator = "separator"
    two_column = "two-column"
    tabs = "tabs"
    accordion = "accordion"
    embed = "embed"
    interactive = "interactive"


CALLOUT_VARIANTS = ("info", "warning", "success", "danger")
TRENDS = ("up", "down", "neutral")
TEXT_TYPES = ("text", "hero", "heading", "subheading", "markdown")


class _Model(BaseModel):
    """Immutable base; snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


# --- text-like blocks ---

class HeroBlock(_Model):
    type: Literal["hero"] = "hero"
    content: str


class HeadingBlock(_Model):
    type: Literal["heading"] = "heading"
    content: str


class SubheadingBlock(_Model):
    type: Literal["subheading"] = "subheading"
    content: str


class TextBlock(_Model):
    type: Literal["text"] = "text"
    content: str


class MarkdownBlock(_Model):
    """Raw markdown carried through untouched."""
    type: Literal["markdown"] = "markdown"
    content: str


class InteractiveBlock(_Model):
    type: Literal["interactive"] = "interactive"
    content: str


# --- structured blocks ---

class CodeBlock(_Model):
    type: Literal["code"] = "code"
    content: str
    language: str = "text"
    file_name: Optional[str] = None
    highlight_lines: Optional[list[int]] = None     # 1-based


class CalloutBlock(_Model):
    type: Literal["callout"] = "callout"
    variant: str = "info"
    content: str
    title: Optional[str] = None

    @property
    def resolved_variant(self) -> str:
        """Variant to render with; anything unrecognised shows as info."""
        return self.variant if self.variant in CALLOUT_VARIANTS else "info"


class ListBlock(_Model):
    type: Literal["list"] = "list"
    items: list[str]
    ordered: Optional[bool] = None


class ImageBlock(_Model):
    type: Literal["image"] = "image"
    src: str = ""
    alt: str = ""
    caption: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class VideoBlock(_Model):
    type: Literal["video"] = "video"
    src: str
    poster: Optional[str] = None
    caption: Optional[str] = None


class QuoteBlock(_Model):
    type: Literal["quote"] = "quote"
    content: str
    author: Optional[str] = None
    source: Optional[str] = None


class TableBlock(_Model):
    type: Literal["table"] = "table"
    headers: list[str] = []
    rows: list[list[str]] = []
    caption: Optional[str] = None


class TimelineItem(_Model):
    time: str
    title: str
    description: str


class TimelineBlock(_Model):
    type: Literal["timeline"] = "timeline"
    items: list[TimelineItem] = []


class MetricItem(_Model):
    label: str
    value: Union[str, int, float]
    change: Optional[str] = None
    trend: Optional[Literal["up", "down", "neutral"]] = None


class MetricsBlock(_Model):
    type: Literal["metrics"] = "metrics"
    items: list[MetricItem] = []


class SeparatorBlock(_Model):
    type: Literal["separator"] = "separator"
    style: Literal["line", "dots", "gradient"] = "line"


class EmbedBlock(_Model):
    type: Literal["embed"] = "embed"
    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    provider: Optional[str] = None


# --- containers ---

class TwoColumnBlock(_Model):
    type: Literal["two-column"] = "two-column"
    left: list["ContentBlock"] = []
    right: list["ContentBlock"] = []


class Tab(_Model):
    label: str
    content: list["ContentBlock"] = []


class TabsBlock(_Model):
    type: Literal["tabs"] = "tabs"
    tabs: list[Tab] = []


class AccordionItem(_Model):
    title: str
    content: list["ContentBlock"] = []


class AccordionBlock(_Model):
    type: Literal["accordion"] = "accordion"
    items: list[AccordionItem] = []


ContentBlock = Annotated[
    Union[
        HeroBlock, HeadingBlock, SubheadingBlock, TextBlock, MarkdownBlock,
        CodeBlock, CalloutBlock, ListBlock, ImageBlock, VideoBlock, QuoteBlock,
        TableBlock, TimelineBlock, MetricsBlock, SeparatorBlock, TwoColumnBlock,
        TabsBlock, AccordionBlock, EmbedBlock, InteractiveBlock,
    ],
    Field(discriminator="type"),
]

for _container in (TwoColumnBlock, Tab, AccordionItem):
    _container.model_rebuild()

ContentAdapter = TypeAdapter(list[ContentBlock])


def load_blocks(data: list[dict]) -> list[ContentBlock]:
    """Validate a list of camelCase block dicts into typed blocks."""
    return ContentAdapter.validate_python(data)


def dump_blocks(blocks: list[ContentBlock]) -> list[dict]:
    """Serialize blocks to camelCase dicts, omitting unset optionals."""
    return ContentAdapter.dump_python(blocks, mode="json", by_alias=True, exclude_none=True)


# --- posts ---

DEFAULT_READ_TIME = "5 min"
DEFAULT_HERO_GRADIENT = "from-blue-500 via-purple-500 to-cyan-500"


class Author(_Model):
    name: str = ""
    url: str = ""


class PostMetadata(_Model):
    """Author-supplied metadata (frontmatter or API call); presence is checked at build time."""
    model_config = ConfigDict(extra="ignore")
    id: Optional[int] = None
    title: Optional[str] = None
    date: Optional[str] = None
    tags: Optional[list[str]] = None
    excerpt: Optional[str] = None
    read_time: Optional[str] = None
    hero_gradient: Optional[str] = None
    reactions: Optional[int] = None
    slug: Optional[str] = None
    author: Optional[Author] = None
    cover: Optional[str] = None
    summary: Optional[str] = None
    updated: Optional[str] = None

    @field_validator("author", mode="before")
    @classmethod
    def _author_from_name(cls, value):
        return {"name": value} if isinstance(value, str) else value


class BlogPostSummary(_Model):
    """Post metadata without its body, as listed on index pages."""
    id: int
    title: str
    excerpt: str = ""
    date: str
    tags: list[str]
    reactions: int = Field(default=0, ge=0)
    read_time: str = DEFAULT_READ_TIME
    slug: str = ""
    summary: str = ""
    author: Author = Author()
    cover: str = ""
    updated: str = ""


class BlogPost(BlogPostSummary):
    """A full post: metadata plus its ordered content blocks."""
    hero_gradient: str = DEFAULT_HERO_GRADIENT
    content: list[ContentBlock]

    def summary_view(self, slug: str | None = None) -> BlogPostSummary:
        """Return the listing view of this post, optionally under a different slug."""
        data = self.model_dump(exclude={"hero_gradient", "content"})
        if slug is not None:
            data["slug"] = slug
        return BlogPostSummary(**data)

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(indent=indent, by_alias=True, exclude_none=True)
