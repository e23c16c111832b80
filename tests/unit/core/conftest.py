"""Shared fixtures for core unit tests"""

import pytest


SAMPLE_MD = """\
# My First Blog Post

This is a hero section that introduces the post.

## Getting Started

Here's some regular text content explaining the concepts.

### Code Example

```typescript[file:example.ts,highlight:1,3-5]
import { useState } from 'react';

function MyComponent() {
  const [count, setCount] = useState(0);
  return <button onClick={() => setCount(count + 1)}>{count}</button>;
}
```

> [!WARNING] Mind the dependency array

## Features

- Easy to use
- TypeScript support

## Project Timeline

> [!TIMELINE]
> 2024-01-01 | Planning | Initial project planning and research
> 2024-01-07 | Development | Core feature development

## Metrics

> [!METRICS]
> Users | 1,234 | +12% | up
> Conversion | 3.4% | -0.2% | down

![Project Screenshot](/images/screenshot.png "Main dashboard view")

| Feature | Status | Priority |
|---------|--------|----------|
| Authentication | Complete | High |
| Analytics | Planned | Low |
"""

SAMPLE_POST = """\
---
id: 7
title: Sample Post
date: 2024-01-15
tags: [frontend, learning]
excerpt: A short sample.
---

# Sample Post

Some body text for the sample post.
"""


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="sample_post")
def sample_post_fixture():
    return SAMPLE_POST
