"""Unit tests for core/validate.py"""

from logpub.core.builder import create_blog_post, create_content
from logpub.core.models import (
    BlogPost, CodeBlock, ImageBlock, TableBlock, TextBlock, TimelineBlock,
)
from logpub.core.validate import validate_content, validate_post


def test_valid_content():
    result = validate_content(create_content().text("fine").code("x = 1", "python").build())
    assert result.is_valid
    assert result.errors == []


def test_empty_content_is_valid():
    assert validate_content([]).is_valid


def test_reports_every_failure():
    """All failing blocks are reported, each with its index."""
    blocks = [
        TextBlock(content="ok"),
        ImageBlock(src="/a.png", alt=""),
        TableBlock(headers=["A"], rows=[]),
    ]
    result = validate_content(blocks)
    assert not result.is_valid
    assert result.errors == [
        "Image at index 1 missing required src or alt text",
        "Table at index 2 missing headers or rows",
    ]


def test_empty_code_block():
    result = validate_content([CodeBlock(content="  \n ")])
    assert result.errors == ["Code block at index 0 has empty content"]


def test_empty_timeline():
    result = validate_content([TimelineBlock(items=[])])
    assert result.errors == ["Timeline at index 0 has no items"]


def test_result_dumps_camel_case():
    dumped = validate_content([]).model_dump(by_alias=True)
    assert dumped == {"isValid": True, "errors": []}


# --- posts ---

def test_validate_built_post():
    post = (
        create_blog_post()
        .id(1).title("T").date("2024-01-01").tags(["a"])
        .content(create_content().text("body"))
        .build()
    )
    assert validate_post(post).is_valid


def test_validate_post_collects_metadata_and_block_errors():
    """A post assembled without the builder is checked for the same fields."""
    post = BlogPost(
        id=1, title=" ", date="", tags=[],
        content=[ImageBlock(src="", alt="x")],
    )
    result = validate_post(post)
    assert result.errors == [
        "Title is required",
        "Date is required",
        "At least one tag is required",
        "Image at index 0 missing required src or alt text",
    ]


def test_validate_post_without_content():
    post = BlogPost(id=1, title="T", date="2024-01-01", tags=["a"], content=[])
    assert validate_post(post).errors == ["Content is required"]
