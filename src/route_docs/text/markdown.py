"""Markdown rendering for notes and descriptions."""

import re

import markdown

_INDENT = re.compile(r"^[ \t]*(?=\S)", re.MULTILINE)


def strip_heredoc(text: str) -> str:
    """Remove the common leading indentation of all non-blank lines."""
    indents = _INDENT.findall(text)
    width = min((len(i) for i in indents), default=0)
    if not width:
        return text
    return re.sub(rf"^[ \t]{{{width}}}", "", text, flags=re.MULTILINE)


class MarkdownRenderer:
    """Renders free text to HTML with Python-Markdown."""

    def __init__(self, extensions: list[str] | None = None):
        self.extensions = list(extensions or [])

    def render(self, text: str) -> str:
        return markdown.markdown(strip_heredoc(text), extensions=self.extensions)


def as_markdown(text: str | None, renderer: MarkdownRenderer | None) -> str | None:
    """Render ``text`` when a renderer is configured, otherwise return it unchanged."""
    if text and renderer is not None:
        return renderer.render(text)
    return text
