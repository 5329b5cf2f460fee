"""Notes renderers: turn an endpoint's free-text notes into the published form."""

from typing import Protocol

import markdown


class NotesRenderer(Protocol):
    def render(self, text: str) -> str: ...


class PlainNotesRenderer:
    """Publishes notes exactly as written."""

    def render(self, text: str) -> str:
        return text


class MarkdownNotesRenderer:
    """Renders notes written in Markdown to newline-terminated HTML, e.g. _test_ -> <p><em>test</em></p>."""

    def __init__(self, extensions: list[str] | None = None):
        self.extensions = extensions or []

    def render(self, text: str) -> str:
        # python-markdown strips the final newline of the last block
        return markdown.markdown(text, extensions=self.extensions) + "\n"


def renderer_for(markdown_enabled: bool) -> NotesRenderer:
    return MarkdownNotesRenderer() if markdown_enabled else PlainNotesRenderer()
