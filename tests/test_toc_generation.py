from __future__ import annotations

import re

import pytest

from mdbook_gen.models import Chapter, TocSection
from mdbook_gen.renderer import render_markdown
from mdbook_gen.toc import (
    build_toc,
    collect_sections,
    collect_toc_entries,
    display_number,
    display_title,
    is_nested_number,
)

FRONT = Chapter(
    id="00.00-front-matter",
    title="前言",
    source="## Not listed\n",
    output_file="00.00-front-matter.html",
    is_front=True,
)
CONTENTS = Chapter(
    id="00.01-contents",
    title="目录",
    source="## Not listed either\n",
    output_file="00.01-contents.html",
    is_contents=True,
)
INTRO = Chapter(
    id="01.00-intro",
    number="1.",
    title="第 1 章：入门",
    source="# 第 1 章：入门\n## 1.1 安装\n```bash\n## not a heading\n```\n## 1.2 Hello World\n",
    output_file="01.00-intro.html",
)
DETAILS = Chapter(
    id="01.01-details",
    number="1.1.",
    title="细节",
    source="# 细节\n## 流程\n",
    output_file="01.01-details.html",
)


def test_build_toc_lists_chapters_and_sections():
    toc = build_toc([FRONT, CONTENTS, INTRO, DETAILS])

    assert toc == (
        '<h1 id="contents">目录</h1>\n\n<nav epub:type="toc">\n<ol>\n'
        '<li><a href="01.00-intro.html">1. 入门</a></li>\n'
        '<li class="indent"><a href="01.00-intro.html#安装">1.1 安装</a></li>\n'
        '<li class="indent"><a href="01.00-intro.html#hello-world">1.2 Hello World</a></li>\n'
        '<li class="indent"><a href="01.01-details.html">1.1. 细节</a></li>\n'
        '<li class="indent"><a href="01.01-details.html#流程">流程</a></li>\n'
        "</ol>\n</nav>\n"
    )


def test_build_toc_custom_heading():
    assert build_toc([], heading="Contents").startswith('<h1 id="contents">Contents</h1>')


def test_build_toc_empty_book():
    assert build_toc([]) == (
        '<h1 id="contents">目录</h1>\n\n<nav epub:type="toc">\n<ol>\n</ol>\n</nav>\n'
    )


def test_collect_toc_entries_skips_front_matter_and_contents():
    entries = collect_toc_entries([FRONT, CONTENTS, INTRO])

    assert len(entries) == 1
    assert entries[0].chapter is INTRO
    assert entries[0].number == "1"
    assert entries[0].title == "入门"
    assert entries[0].sections == (
        TocSection(title="1.1 安装", slug="安装"),
        TocSection(title="1.2 Hello World", slug="hello-world"),
    )


def test_collect_toc_entries_does_not_modify_chapters():
    chapters = [FRONT, CONTENTS, INTRO, DETAILS]
    snapshot = list(chapters)

    collect_toc_entries(chapters)

    assert chapters == snapshot


def test_toc_anchors_match_rendered_heading_ids():
    ids = set(re.findall(r'<h2 id="([^"]*)">', render_markdown(INTRO.source)))

    for section in collect_sections(INTRO):
        assert section.slug in ids


def test_section_title_is_trimmed_but_slug_uses_raw_text():
    chapter = Chapter(id="x", title="x", source="##   Spaced Out  \n", number="1.")

    assert collect_sections(chapter) == (TocSection(title="Spaced Out", slug="spaced-out"),)


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("第 2 章：并发", "并发"),
        ("第3章: 内存", "内存"),
        ("Chapter 4: Memory", "Memory"),
        ("chapter 10:Scheduling", "Scheduling"),
        ("Plain title", "Plain title"),
        ("第二章：不变", "第二章：不变"),
    ],
)
def test_display_title(title: str, expected: str):
    assert display_title(title) == expected


def test_display_number_and_nesting():
    assert display_number("2.") == "2"
    assert display_number("2.1.") == "2.1"
    assert display_number("") == ""
    assert is_nested_number("2.1.") is True
    assert is_nested_number("2.") is False
