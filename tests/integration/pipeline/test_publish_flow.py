"""Integration tests for the extract -> commit -> export pipeline.

Each test runs the pipeline against the canonical post below and asserts
stable expected values.

Canonical post (pipeline-test.md)
---------------------------------
    ---
    id: 12
    title: Pipeline Test
    date: 2026-01-15
    tags: [pipeline]
    author: Ada
    ---

    # Introduction

    An introductory paragraph.

    ```python[file:run.py,highlight:2]
    def run():
        return 1
    ```

    | Step | Result |
    |------|--------|
    | extract | staged |

Blocks after extract (4, in document order):
    [hero]   "Introduction"
    [text]   "An introductory paragraph."
    [code]   python, fileName run.py, highlightLines [2]
    [table]  headers [Step, Result], one row
"""

import json

import pytest
import yaml
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from logpub.core.markdown import parse_markdown
from logpub.core.pipeline import run_commit, run_export, run_extract
from logpub.crud.posts import get_last_committed


CANONICAL_MD = """\
---
id: 12
title: Pipeline Test
date: 2026-01-15
tags: [pipeline]
author: Ada
---

# Introduction

An introductory paragraph.

```python[file:run.py,highlight:2]
def run():
    return 1
```

| Step | Result |
|------|--------|
| extract | staged |
"""


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="staged")
def staged_fixture(tmp_path, monkeypatch):
    """Canonical post extracted into a staging directory; returns the staging dir."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "posts").mkdir()
    (tmp_path / "posts" / "pipeline-test.md").write_text(CANONICAL_MD)
    staging_dir = tmp_path / ".logpub" / "staging"
    run_extract("posts", staging_dir)
    return staging_dir


def test_extract_stages_camel_case_post(staged):
    data = json.loads((staged / "pipeline-test.json").read_text())
    post = data["post"]
    assert data["path"] == "posts/pipeline-test.md"
    assert [b["type"] for b in post["content"]] == ["hero", "text", "code", "table"]
    assert post["content"][2]["fileName"] == "run.py"
    assert post["content"][2]["highlightLines"] == [2]
    assert post["author"] == {"name": "Ada", "url": ""}
    assert post["readTime"] == "1 min"


def test_commit_then_export(staged, engine, tmp_path):
    counts, _ = run_commit(engine, staged)
    assert counts["created"] == 1

    with Session(engine) as session:
        results = run_export(get_last_committed(session), tmp_path / "dist", "mdx")

    [(slug, mdx_path)] = results
    assert slug == "pipeline-test"
    assert mdx_path == tmp_path / "dist" / "posts" / "pipeline-test.mdx"

    text = mdx_path.read_text()
    header = yaml.safe_load(text.split("---\n")[1])
    assert header["id"] == 12
    assert header["author"] == {"name": "Ada", "url": ""}
    assert header["date"] == "2026-01-15"


def test_exported_body_parses_to_same_blocks(staged, engine, tmp_path):
    """The exported MDX body is valid authoring markdown for the same content."""
    run_commit(engine, staged)
    with Session(engine) as session:
        [(_, mdx_path)] = run_export(get_last_committed(session), tmp_path / "dist", "mdx")

    body = mdx_path.read_text().split("---\n", 2)[2]
    expected = parse_markdown(CANONICAL_MD.split("---\n", 2)[2])
    assert parse_markdown(body) == expected


def test_recommit_is_unchanged(staged, engine):
    run_commit(engine, staged)
    counts, changes = run_commit(engine, staged)
    assert counts == {"created": 0, "updated": 0, "unchanged": 1}
    assert changes == []
