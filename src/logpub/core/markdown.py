"""Markdown-to-content parser: authored text -> ordered content blocks

A single forward scan over the lines of the input. At each line the scanner
first tries the block openers (fenced code, timeline, metrics, callout, table);
anything else is classified as a heading, list item, or paragraph text.
Images are lifted out of ordinary lines wherever they appear.

Parsing is total: malformed special syntax degrades to plain text. Each such
recovery is recorded as a diagnostic, which strict mode turns into an error.
"""

import logging
import re
from dataclasses import dataclass, field

from logpub.core.errors import MarkdownSyntaxError, ParseDiagnostic
from logpub.core.models import (
    TRENDS, CalloutBlock, CodeBlock, ContentBlock, HeadingBlock, HeroBlock,
    ImageBlock, ListBlock, MetricItem, MetricsBlock, SubheadingBlock, TableBlock,
    TextBlock, TimelineBlock, TimelineItem,
)


logger = logging.getLogger(__name__)

CALLOUT_RE   = re.compile(r'^>\s*\[!(INFO|WARNING|SUCCESS|DANGER)\]\s*(.*?)$')
TAG_RE       = re.compile(r'^>\s*\[!(\w+)\]')
TIMELINE_RE  = re.compile(r'^>\s*\[!TIMELINE\]\s*$')
METRICS_RE   = re.compile(r'^>\s*\[!METRICS\]\s*$')
FENCE_RE     = re.compile(r'^```([\w+#.-]+)?\s*(?:\[(.*?)\])?\s*$')
FENCE_CLOSE  = '```'
TABLE_ROW_RE = re.compile(r'^\|(.+)\|$')
TABLE_SEP_RE = re.compile(r'^\|[-\s|:]+\|$')
IMAGE_RE     = re.compile(r'!\[([^\]]*)\]\(\s*([^)\s]+)(?:\s+"([^"]*)")?\s*\)')
HEADING_RE   = re.compile(r'^(#{1,6})\s+(.+)$')
BARE_HEADING_RE = re.compile(r'^#{1,6}$')
BULLET_RE    = re.compile(r'^[-*+]\s+(.+)$')
NUMBERED_RE  = re.compile(r'^\d+\.\s+(.+)$')
QUOTE_RE     = re.compile(r'^>\s?')
OPTION_KEY_RE = re.compile(r'(\w+):')
FILE_OPT_RE   = re.compile(r'file:([^\s,]+)')
HIGHLIGHT_RE  = re.compile(r'highlight:([0-9,-]+)')

KNOWN_TAGS = {"INFO", "WARNING", "SUCCESS", "DANGER", "TIMELINE", "METRICS"}
CODE_OPTIONS = {"file", "highlight"}


@dataclass
class ParseResult:
    blocks: list[ContentBlock]
    diagnostics: list[ParseDiagnostic] = field(default_factory=list)


def _is_empty_text(block: ContentBlock) -> bool:
    return block.type == "text" and not block.content.strip()


def _split_row(row: str) -> list[str]:
    """Split a '| a | b |' row into trimmed cells, dropping the outer pipes."""
    return [cell.strip() for cell in row.strip()[1:-1].split('|')]


def _unquote(line: str) -> str:
    """Strip the leading '>' marker from a timeline/metrics body line."""
    return QUOTE_RE.sub('', line.strip(), count=1).strip()


def parse_highlight(ranges: str, warn=None) -> list[int]:
    """Expand '1,3-5' into [1, 3, 4, 5]; bad entries are skipped."""
    lines: list[int] = []
    for part in ranges.split(','):
        part = part.strip()
        if not part:
            continue
        start, sep, end = part.partition('-')
        if not start.isdigit() or (sep and not end.isdigit()):
            if warn:
                warn(f"invalid highlight entry '{part}'")
            continue
        first = int(start)
        last = int(end) if sep else first
        if first < 1 or last < first:
            if warn:
                warn(f"invalid highlight range '{part}'")
            continue
        lines.extend(range(first, last + 1))
    return lines


def parse_code_options(options: str, warn=None) -> dict:
    """Parse a fence options string like 'file:a.ts,highlight:1,3-5'."""
    result: dict = {}
    if not options:
        return result
    for key in OPTION_KEY_RE.findall(options):
        if key not in CODE_OPTIONS and warn:
            warn(f"unknown code option '{key}'")
    if m := FILE_OPT_RE.search(options):
        result["file_name"] = m.group(1)
    if m := HIGHLIGHT_RE.search(options):
        result["highlight_lines"] = parse_highlight(m.group(1), warn) or None
    return result


class _Scanner:
    """One-shot scanning state for a single parse call."""

    def __init__(self, markdown: str):
        self.lines = markdown.replace('\r\n', '\n').split('\n')
        self.blocks: list[ContentBlock] = []
        self.diagnostics: list[ParseDiagnostic] = []
        self.paragraph: list[str] = []
        self.list_items: list[str] = []
        self.list_ordered: bool | None = None
        self.pending: list[ContentBlock] = []   # images waiting for their paragraph/list to close

    def run(self) -> ParseResult:
        i = 0
        while i < len(self.lines):
            i = self._step(i)
        self._flush()
        blocks = [b for b in self.blocks if not _is_empty_text(b)]
        return ParseResult(blocks=blocks, diagnostics=self.diagnostics)

    def _warn(self, index: int, message: str) -> None:
        self.diagnostics.append(ParseDiagnostic(line=index + 1, message=message))

    def _emit(self, block: ContentBlock) -> None:
        self._flush()
        self.blocks.append(block)

    def _flush(self) -> None:
        """Close the open paragraph or list, then release any images it held."""
        if self.paragraph:
            self.blocks.append(TextBlock(content=' '.join(self.paragraph).strip()))
            self.paragraph = []
        if self.list_items:
            self.blocks.append(ListBlock(items=self.list_items, ordered=bool(self.list_ordered)))
            self.list_items = []
            self.list_ordered = None
        self.blocks.extend(self.pending)
        self.pending = []

    def _step(self, i: int) -> int:
        """Consume the construct starting at line i; return the next line index."""
        line = self.lines[i].strip()

        if line.startswith(FENCE_CLOSE):
            end = self._fenced_code(i, line)
            if end is not None:
                return end
        elif TIMELINE_RE.match(line) or METRICS_RE.match(line):
            end = self._timeline(i) if TIMELINE_RE.match(line) else self._metrics(i)
            if end is not None:
                return end
        elif m := CALLOUT_RE.match(line):
            self._emit(CalloutBlock(variant=m.group(1).lower(), content=m.group(2).strip()))
            return i + 1
        elif m := TAG_RE.match(line):
            tag = m.group(1)
            if tag in KNOWN_TAGS:
                self._warn(i, f"[!{tag}] marker must stand alone on its line")
            else:
                self._warn(i, f"unknown callout tag [!{tag}]")
        elif line.startswith('|'):
            end = self._table(i)
            if end is not None:
                return end

        self._classify(line)
        return i + 1

    # --- block openers ---

    def _fenced_code(self, i: int, line: str) -> int | None:
        m = FENCE_RE.match(line)
        if not m:
            return None
        close = next(
            (j for j in range(i + 1, len(self.lines)) if self.lines[j].strip() == FENCE_CLOSE),
            None,
        )
        if close is None:
            self._warn(i, "unterminated code fence")
            return None

        body = self.lines[i + 1:close]
        while body and not body[0].strip():
            body = body[1:]
        while body and not body[-1].strip():
            body = body[:-1]
        options = parse_code_options(m.group(2) or '', lambda msg: self._warn(i, msg))
        self._emit(CodeBlock(
            content='\n'.join(body).rstrip(),
            language=m.group(1) or 'text',
            **options,
        ))
        return close + 1

    def _section(self, i: int) -> tuple[int, list[tuple[int, str]]]:
        """Collect the non-blank lines after a marker line; return (end, [(index, text)])."""
        j = i + 1
        body = []
        while j < len(self.lines) and self.lines[j].strip():
            body.append((j, _unquote(self.lines[j])))
            j += 1
        return j, body

    def _timeline(self, i: int) -> int | None:
        end, body = self._section(i)
        if not body:
            self._warn(i, "timeline marker has no body")
            return None
        items = []
        for j, text in body:
            parts = [p.strip() for p in text.split('|', 2)]
            if len(parts) == 3 and all(parts):
                items.append(TimelineItem(time=parts[0], title=parts[1], description=parts[2]))
            else:
                self._warn(j, "timeline line is not 'time | title | description'")
        if items:
            self._emit(TimelineBlock(items=items))
        else:
            self._flush()
            self._warn(i, "timeline block has no items")
        return end

    def _metrics(self, i: int) -> int | None:
        end, body = self._section(i)
        if not body:
            self._warn(i, "metrics marker has no body")
            return None
        items = []
        for j, text in body:
            parts = [p.strip() for p in text.split('|')]
            if len(parts) < 2 or not parts[0] or not parts[1]:
                self._warn(j, "metrics line is not 'label | value | change | trend'")
                continue
            trend = None
            if len(parts) > 3:
                if parts[3] in TRENDS:
                    trend = parts[3]
                else:
                    self._warn(j, f"invalid trend '{parts[3]}'")
            if len(parts) > 4:
                self._warn(j, "extra metrics segments ignored")
            items.append(MetricItem(
                label=parts[0],
                value=parts[1],
                change=(parts[2] or None) if len(parts) > 2 else None,
                trend=trend,
            ))
        if items:
            self._emit(MetricsBlock(items=items))
        else:
            self._flush()
            self._warn(i, "metrics block has no items")
        return end

    def _table(self, i: int) -> int | None:
        header = self.lines[i].strip()
        if i + 1 >= len(self.lines) or not TABLE_ROW_RE.match(header):
            return None
        separator = self.lines[i + 1].strip()
        if not TABLE_SEP_RE.match(separator) or '-' not in separator:
            return None

        j = i + 2
        rows = []
        while j < len(self.lines) and TABLE_ROW_RE.match(self.lines[j].strip()):
            rows.append(_split_row(self.lines[j]))
            j += 1
        if not rows:
            return None

        headers = _split_row(header)
        for offset, row in enumerate(rows):
            if len(row) != len(headers):
                self._warn(i + 2 + offset, f"table row has {len(row)} cells, header has {len(headers)}")
        self._emit(TableBlock(headers=headers, rows=rows))
        return j

    # --- generic lines ---

    def _take_images(self, line: str) -> tuple[str, list[ImageBlock]]:
        images = [
            ImageBlock(src=m.group(2), alt=m.group(1), caption=m.group(3))
            for m in IMAGE_RE.finditer(line)
        ]
        if not images:
            return line, images
        return ' '.join(IMAGE_RE.sub(' ', line).split()), images

    def _classify(self, line: str) -> None:
        line, images = self._take_images(line)
        if images and BARE_HEADING_RE.match(line):
            line = ''

        if not line:
            self._flush()
            self.blocks.extend(images)
            return

        if m := HEADING_RE.match(line):
            level, text = len(m.group(1)), m.group(2).strip()
            if level == 1:
                self._emit(HeroBlock(content=text))
            elif level == 2:
                self._emit(HeadingBlock(content=text))
            else:
                self._emit(SubheadingBlock(content=text))
            self.blocks.extend(images)
            return

        item = BULLET_RE.match(line)
        ordered = item is None
        item = item or NUMBERED_RE.match(line)
        if item:
            if self.paragraph or (self.list_items and self.list_ordered != ordered):
                self._flush()
            self.list_items.append(item.group(1))
            self.list_ordered = ordered
        else:
            if self.list_items:
                self._flush()
            self.paragraph.append(line)
        self.pending.extend(images)


class MarkdownParser:
    """Best-effort parser for the authoring dialect.

    With strict=False (the default) parse() never raises. With strict=True the
    same input raises MarkdownSyntaxError listing every recovery the scan made.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def scan(self, markdown: str) -> ParseResult:
        """Parse and return blocks together with any diagnostics."""
        return _Scanner(markdown or '').run()

    def parse(self, markdown: str) -> list[ContentBlock]:
        result = self.scan(markdown)
        if result.diagnostics:
            if self.strict:
                raise MarkdownSyntaxError(result.diagnostics)
            for d in result.diagnostics:
                logger.debug("Recovered from markdown problem at %s", d)
        return result.blocks


def parse_markdown(markdown: str, strict: bool = False) -> list[ContentBlock]:
    """Parse authored markdown into an ordered list of content blocks."""
    return MarkdownParser(strict=strict).parse(markdown)
