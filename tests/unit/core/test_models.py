"""Unit tests for core/models.py"""

import pytest
from pydantic import ValidationError

from logpub.core.models import (
    BlockType, BlogPost, CalloutBlock, CodeBlock, ImageBlock, MetricItem,
    PostMetadata, TextBlock, TwoColumnBlock, dump_blocks, load_blocks,
)


def test_block_type_covers_all_variants():
    assert len(BlockType) == 20
    assert BlockType.two_column.value == "two-column"


def test_dump_uses_camel_case_and_skips_none():
    block = CodeBlock(content="x", language="python", file_name="a.py", highlight_lines=[2])
    assert dump_blocks([block]) == [{
        "type": "code", "content": "x", "language": "python",
        "fileName": "a.py", "highlightLines": [2],
    }]
    assert dump_blocks([ImageBlock(src="a.png", alt="A")]) == [{"type": "image", "src": "a.png", "alt": "A"}]


def test_load_blocks_dispatches_on_type():
    blocks = load_blocks([
        {"type": "text", "content": "hi"},
        {"type": "code", "content": "x", "fileName": "f.ts"},
        {"type": "two-column", "left": [{"type": "text", "content": "l"}], "right": []},
    ])
    assert isinstance(blocks[0], TextBlock)
    assert blocks[1].file_name == "f.ts"
    assert blocks[1].language == "text"
    assert isinstance(blocks[2], TwoColumnBlock)
    assert blocks[2].left == [TextBlock(content="l")]


def test_load_blocks_rejects_unknown_type():
    with pytest.raises(ValidationError):
        load_blocks([{"type": "carousel", "content": "x"}])


def test_blocks_are_frozen():
    block = TextBlock(content="x")
    with pytest.raises(ValidationError):
        block.content = "y"


def test_unknown_callout_variant_resolves_to_info():
    assert CalloutBlock(variant="tip", content="x").resolved_variant == "info"
    assert CalloutBlock(variant="danger", content="x").resolved_variant == "danger"


def test_metric_trend_is_closed():
    with pytest.raises(ValidationError):
        MetricItem(label="x", value=1, trend="sideways")


# --- posts ---

def test_post_metadata_accepts_author_string():
    meta = PostMetadata.model_validate({"title": "T", "author": "Ada", "unknown": 1})
    assert meta.author.name == "Ada"


def test_post_metadata_accepts_camel_case():
    meta = PostMetadata.model_validate({"readTime": "3 min", "heroGradient": "g"})
    assert (meta.read_time, meta.hero_gradient) == ("3 min", "g")


def test_post_defaults_and_summary_view():
    post = BlogPost(id=1, title="T", date="2024-01-01", tags=["a"], content=[TextBlock(content="x")])
    assert post.read_time == "5 min"
    assert post.reactions == 0
    summary = post.summary_view("t-post")
    assert summary.slug == "t-post"
    assert not hasattr(summary, "content")


def test_post_rejects_negative_reactions():
    with pytest.raises(ValidationError):
        BlogPost(id=1, title="T", date="d", tags=[], reactions=-1, content=[])


def test_post_json_round_trip():
    post = BlogPost(
        id=1, title="T", date="2024-01-01", tags=["a"],
        content=[CodeBlock(content="x", file_name="f.py")],
    )
    text = post.to_json()
    assert '"readTime": "5 min"' in text
    assert '"fileName": "f.py"' in text
    assert BlogPost.model_validate_json(text) == post
