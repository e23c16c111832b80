"""Structural validation of content blocks and posts"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from logpub.core.models import BlogPost, ContentBlock


class ValidationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)
    is_valid: bool
    errors: list[str] = []


def _block_error(block: ContentBlock, index: int) -> str | None:
    """Return a message if the block is missing a required field, else None."""
    match block.type:
        case "code":
            if not block.content.strip():
                return f"Code block at index {index} has empty content"
        case "image":
            if not block.src or not block.alt:
                return f"Image at index {index} missing required src or alt text"
        case "table":
            if not block.headers or not block.rows:
                return f"Table at index {index} missing headers or rows"
        case "timeline":
            if not block.items:
                return f"Timeline at index {index} has no items"
    return None


def validate_content(blocks: list[ContentBlock]) -> ValidationResult:
    """Check every block and report all failures, not just the first."""
    errors = [
        msg for index, block in enumerate(blocks)
        if (msg := _block_error(block, index)) is not None
    ]
    return ValidationResult(is_valid=not errors, errors=errors)


def validate_post(post: BlogPost) -> ValidationResult:
    """Check post metadata presence plus every content block."""
    errors = []
    if not post.title.strip():
        errors.append("Title is required")
    if not post.date:
        errors.append("Date is required")
    if not post.tags:
        errors.append("At least one tag is required")
    if not post.content:
        errors.append("Content is required")
    errors.extend(validate_content(post.content).errors)
    return ValidationResult(is_valid=not errors, errors=errors)
