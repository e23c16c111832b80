"""Slug generation for post identifiers"""

import re


def slugify(text: str) -> str:
    """Convert a title or file stem to a lowercase, hyphen-separated URL slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-') or "post"
