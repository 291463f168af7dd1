from __future__ import annotations

import os

import pytest

from mdbook_gen.renderer import render_markdown
from mdbook_gen.slugify import generate_slug

atheris = pytest.importorskip("atheris")


def test_generate_slug_with_fuzzed_input():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    generated = set()

    for _ in range(128):
        if provider.remaining_bytes() == 0:
            break
        text = provider.ConsumeUnicodeNoSurrogates(64)
        slug = generate_slug(text)
        assert slug == slug.lower()
        assert " " not in slug
        generated.add(slug)

    assert generated  # ensure we exercised the loop


def test_render_markdown_with_fuzzed_lines():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    prefixes = ["", "# ", "## ", "- ", "1. ", "> ", "| ", "```", "<!-- ", "  "]
    lines: list[str] = []

    while provider.remaining_bytes() > 0 and len(lines) < 64:
        prefix = prefixes[provider.ConsumeIntInRange(0, len(prefixes) - 1)]
        lines.append(prefix + provider.ConsumeUnicodeNoSurrogates(32))

    html = render_markdown("\n".join(lines))
    assert html.count("<table>") == html.count("</table>")
