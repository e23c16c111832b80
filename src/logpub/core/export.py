"""Export: render posts back to the authoring dialect (MD/MDX) plus sidecar JSON"""

import json
from pathlib import Path

import yaml

from logpub.core.models import BlogPost, ContentBlock
from logpub.core.stats import WORDS_PER_MINUTE, get_content_stats


FRONTMATTER_KEYS = (
    "id", "title", "date", "tags", "excerpt", "readTime", "heroGradient",
    "reactions", "author", "cover", "summary", "updated",
)


def _ranges(lines: list[int]) -> str:
    """Compress [1, 3, 4, 5] to '1,3-5'."""
    parts = []
    nums = sorted(set(lines))
    start = prev = nums[0]
    for n in nums[1:] + [None]:
        if n is not None and n == prev + 1:
            prev = n
            continue
        parts.append(str(start) if start == prev else f"{start}-{prev}")
        if n is not None:
            start = prev = n
    return ",".join(parts)


def _row(cells: list[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def render_block(block: ContentBlock) -> str:
    """Render a single block as authoring markdown."""
    match block.type:
        case "hero":
            return f"# {block.content}"
        case "heading":
            return f"## {block.content}"
        case "subheading":
            return f"### {block.content}"
        case "text" | "markdown" | "interactive":
            return block.content
        case "code":
            opts = []
            if block.file_name:
                opts.append(f"file:{block.file_name}")
            if block.highlight_lines:
                opts.append(f"highlight:{_ranges(block.highlight_lines)}")
            suffix = f"[{','.join(opts)}]" if opts else ""
            return f"```{block.language}{suffix}\n{block.content}\n```"
        case "callout":
            text = f"{block.title}: {block.content}" if block.title else block.content
            return f"> [!{block.resolved_variant.upper()}] {text}"
        case "list":
            marks = [f"{i}." for i in range(1, len(block.items) + 1)] if block.ordered else ["-"] * len(block.items)
            return "\n".join(f"{m} {item}" for m, item in zip(marks, block.items))
        case "image":
            caption = f' "{block.caption}"' if block.caption else ""
            return f"![{block.alt}]({block.src}{caption})"
        case "video":
            return f"[{block.caption or 'Video'}]({block.src})"
        case "quote":
            cite = ", ".join(p for p in (block.author, block.source) if p)
            return f"> {block.content}" + (f"\n>\n> -- {cite}" if cite else "")
        case "table":
            lines = [_row(block.headers), _row(["---"] * len(block.headers))]
            lines += [_row(r) for r in block.rows]
            return "\n".join(lines)
        case "timeline":
            lines = ["> [!TIMELINE]"]
            lines += [f"> {i.time} | {i.title} | {i.description}" for i in block.items]
            return "\n".join(lines)
        case "metrics":
            lines = ["> [!METRICS]"]
            for i in block.items:
                parts = [i.label, str(i.value)]
                if i.change or i.trend:
                    parts.append(i.change or "")
                if i.trend:
                    parts.append(i.trend)
                lines.append("> " + " | ".join(parts))
            return "\n".join(lines)
        case "separator":
            return "---"
        case "embed":
            return f"[{block.title or block.url}]({block.url})"
        case "two-column":
            return build_body(block.left + block.right)
        case "tabs":
            return "\n\n".join(f"### {t.label}\n\n{build_body(t.content)}".rstrip() for t in block.tabs)
        case "accordion":
            return "\n\n".join(f"### {i.title}\n\n{build_body(i.content)}".rstrip() for i in block.items)
    return ""


def build_body(blocks: list[ContentBlock]) -> str:
    """Join rendered blocks with blank lines, skipping ones that render empty."""
    return "\n\n".join(r for r in (render_block(b) for b in blocks) if r)


def build_mdx(post: BlogPost, slug: str) -> str:
    """Return the body with a YAML frontmatter block of the post metadata prepended."""
    data = post.model_dump(mode="json", by_alias=True, exclude_none=True)
    fm = {k: data[k] for k in FRONTMATTER_KEYS if data.get(k) not in (None, "", {"name": "", "url": ""})}
    fm["slug"] = slug
    header = yaml.dump(fm, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"---\n{header}---\n\n{build_body(post.content)}\n"


def build_sidecar(post: BlogPost, slug: str, words_per_minute: int = WORDS_PER_MINUTE) -> dict:
    """Full post payload (camelCase) plus computed content stats."""
    data = post.model_dump(mode="json", by_alias=True, exclude_none=True)
    data["slug"] = slug
    data["stats"] = get_content_stats(post.content, words_per_minute).model_dump(by_alias=True)
    return data


def write_post(
    post: BlogPost,
    slug: str,
    output_dir: Path,
    fmt: str = 'mdx',
    source_path: str | None = None,
    words_per_minute: int = WORDS_PER_MINUTE,
    ) -> tuple[Path, Path]:
    """Write MD/MDX + sidecar JSON for a single post.

    Output path mirrors the source directory when a relative one is known:
      output_dir / Path(source_path).parent / slug.{fmt|json}

    Returns (mdx_path, json_path).
    """
    src = Path(source_path) if source_path else None
    dest_dir = output_dir / src.parent if src and not src.is_absolute() else output_dir
    dest_dir.mkdir(parents=True, exist_ok=True)

    mdx_path = dest_dir / f"{slug}.{fmt}"
    json_path = dest_dir / f"{slug}.json"
    mdx_path.write_text(build_mdx(post, slug), encoding='utf-8')
    json_path.write_text(json.dumps(build_sidecar(post, slug, words_per_minute), indent=2), encoding='utf-8')
    return mdx_path, json_path
