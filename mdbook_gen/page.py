"""Full HTML page assembly around a rendered chapter fragment."""

from __future__ import annotations

import html
from string import Template

from .config import BookConfig
from .constants import (
    CHAPTER_INDICATOR,
    CONTENTS_ID,
    CONTENTS_TITLE,
    FRONT_MATTER_ID,
    NEXT_LABEL,
    PREVIOUS_LABEL,
)
from .models import Chapter

COPY_ICON = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" '
    'fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" '
    'stroke-linejoin="round"><rect x="9" y="9" width="13" height="13" rx="2" ry="2"></rect>'
    '<path d="M5 15H4a2 2 0 0 1-2-2V4a2 2 0 0 1 2-2h9a2 2 0 0 1 2 2v1"></path></svg>'
)
COPIED_ICON = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" '
    'fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" '
    'stroke-linejoin="round"><polyline points="20 6 9 17 4 12"></polyline></svg>'
)

PAGE_TEMPLATE = Template(
    """<!DOCTYPE html>
<html lang="$language">
	<head>
		<meta charset="utf-8">
		<meta http-equiv="x-ua-compatible" content="ie=edge">
		<meta name="author" content="$author">
		<meta name="copyright" content="$copyright">
		<title>$page_title &mdash; $book_title</title>
		<meta name="viewport" content="width=device-width, initial-scale=1, shrink-to-fit=no">
		<link rel="stylesheet" type="text/css" href="assets/css/main.css">
		<link rel="stylesheet" href="https://cdnjs.cloudflare.com/ajax/libs/highlight.js/11.9.0/styles/intellij-light.min.css">
		<script src="https://cdnjs.cloudflare.com/ajax/libs/highlight.js/11.9.0/highlight.min.js"></script>
		<script>hljs.highlightAll();</script>
		<script type="module">
			import mermaid from 'https://cdn.jsdelivr.net/npm/mermaid@11/dist/mermaid.esm.min.mjs';
			mermaid.initialize({ startOnLoad: true });
		</script>
	</head>
	<body>
		<header>
			<div class="wrapper">
				<div>
					$breadcrumb
				</div>
				<div>
					&lsaquo; $prev_link
					&middot; <a href="$contents_file">$contents_label</a> &middot;
					$next_link &rsaquo;
				</div>
			</div>
		</header>
		<main class="wrapper text">
			$chapter_indicator
			$content
		</main>
		<footer>
			<div class="wrapper">
				<div>
					&lsaquo; $prev_link
				</div>
				<div>
					<a href="$contents_file">$contents_label</a>
				</div>
				<div>
					$next_link &rsaquo;
				</div>
			</div>
		</footer>
		<script>
			document.onkeydown = function(evt) {
				evt = evt || window.event;
				switch (evt.keyCode) {
					case 37:
						$prev_js
						break;
					case 39:
						$next_js
						break;
				}
			};

			document.querySelectorAll('figure.code').forEach(container => {
				const button = document.createElement('button');
				button.className = 'copy-button';
				button.title = 'Copy to clipboard';
				button.innerHTML = '$copy_icon';
				container.appendChild(button);

				button.addEventListener('click', () => {
					const code = container.querySelector('pre').innerText;
					navigator.clipboard.writeText(code).then(() => {
						button.classList.add('copied');
						button.innerHTML = '$copied_icon';
						setTimeout(() => {
							button.classList.remove('copied');
							button.innerHTML = '$copy_icon';
						}, 2000);
					});
				});
			});
		</script>
	</body>
</html>
"""
)


def build_breadcrumb(chapter: Chapter, config: BookConfig) -> str:
    """Render ``book › category › chapter`` links for the page header."""
    breadcrumb = f'<a href="{FRONT_MATTER_ID}.html">{html.escape(config.title)}</a>'
    if chapter.is_front:
        return breadcrumb
    if chapter.category:
        breadcrumb += f' <span class="crumbs">&rsaquo; {html.escape(chapter.category)}</span>'
    title = CONTENTS_TITLE if chapter.is_contents else chapter.title
    return breadcrumb + f' <span class="crumbs">&rsaquo; {html.escape(title)}</span>'


def navigation_link(target: str | None, label: str) -> str:
    if not target:
        return f'<span class="disabled">{label}</span>'
    return f'<a href="{target}">{label}</a>'


def navigation_script(target: str | None) -> str:
    if not target:
        return ""
    return f'window.location.href = "{target}";'


def chapter_indicator(chapter: Chapter) -> str:
    if not chapter.number:
        return ""
    number = chapter.number.rstrip(".")
    return f'<div class="chapter">{CHAPTER_INDICATOR.format(number=number)}</div>'


def build_page(
    chapter: Chapter,
    content: str,
    prev_file: str | None,
    next_file: str | None,
    config: BookConfig,
) -> str:
    """Embed a chapter fragment into a complete HTML document.

    Args:
        chapter: Chapter being written.
        content: Rendered HTML fragment of the chapter.
        prev_file: Output file of the previous chapter, if any.
        next_file: Output file of the next chapter, if any.
        config: Book metadata used for titles and meta tags.

    Returns:
        str: The full page.
    """
    return PAGE_TEMPLATE.substitute(
        language=html.escape(config.language),
        author=html.escape(config.author),
        copyright=html.escape(config.copyright),
        page_title=html.escape(chapter.title),
        book_title=html.escape(config.title),
        breadcrumb=build_breadcrumb(chapter, config),
        prev_link=navigation_link(prev_file, PREVIOUS_LABEL),
        next_link=navigation_link(next_file, NEXT_LABEL),
        contents_file=f"{CONTENTS_ID}.html",
        contents_label=CONTENTS_TITLE,
        chapter_indicator=chapter_indicator(chapter),
        content=content,
        prev_js=navigation_script(prev_file),
        next_js=navigation_script(next_file),
        copy_icon=COPY_ICON,
        copied_icon=COPIED_ICON,
    )
