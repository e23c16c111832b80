"""Content statistics and reading-time estimation"""

import math

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from logpub.core.models import TEXT_TYPES, ContentBlock


WORDS_PER_MINUTE = 200


class ContentStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)
    total_blocks: int = 0
    word_count: int = 0
    code_blocks: int = 0
    images: int = 0
    videos: int = 0
    tables: int = 0
    estimated_read_time: str = "1 min"


def estimate_read_time(word_count: int, words_per_minute: int = WORDS_PER_MINUTE) -> str:
    """Ceiling of words / wpm, never less than one minute."""
    return f"{max(1, math.ceil(word_count / words_per_minute))} min"


def get_content_stats(blocks: list[ContentBlock], words_per_minute: int = WORDS_PER_MINUTE) -> ContentStats:
    """Count blocks by kind; words come from text-like blocks only, never code."""
    words = sum(len(b.content.split()) for b in blocks if b.type in TEXT_TYPES)
    return ContentStats(
        total_blocks=len(blocks),
        word_count=words,
        code_blocks=sum(1 for b in blocks if b.type == "code"),
        images=sum(1 for b in blocks if b.type == "image"),
        videos=sum(1 for b in blocks if b.type == "video"),
        tables=sum(1 for b in blocks if b.type == "table"),
        estimated_read_time=estimate_read_time(words, words_per_minute),
    )
