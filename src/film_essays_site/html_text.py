from __future__ import annotations

import re
from html.parser import HTMLParser

_SKIP_TAGS = {
    "script",
    "style",
    "nav",
    "header",
    "footer",
    "aside",
    "noscript",
    "form",
    "template",
}
_VOID_TAGS = {
    "area",
    "base",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
}
_WS_RE = re.compile(r"\s+")


class _HTMLToText(HTMLParser):
    """
    Visible text of a page body. Chrome (nav, header, footer, aside) and scripts are
    dropped so related-article lists and menus do not leak into search text.
    """

    def __init__(self, *, root_tag: str | None = None) -> None:
        super().__init__(convert_charrefs=True)
        self._chunks: list[str] = []
        self._skip_depth = 0
        self._root_tag = root_tag
        self._root_depth = 0 if root_tag else 1

    def handle_starttag(self, tag: str, attrs) -> None:  # noqa: ANN001
        tag = tag.lower()
        if tag in _VOID_TAGS:
            return
        if self._root_tag and tag == self._root_tag:
            self._root_depth += 1
            return
        if self._skip_depth > 0 or tag in _SKIP_TAGS:
            self._skip_depth += 1

    def handle_startendtag(self, tag: str, attrs) -> None:  # noqa: ANN001
        # <tag/> never opens a scope.
        return

    def handle_endtag(self, tag: str) -> None:
        tag = tag.lower()
        if tag in _VOID_TAGS:
            return
        if self._root_tag and tag == self._root_tag:
            self._root_depth = max(0, self._root_depth - 1)
            return
        if self._skip_depth > 0:
            self._skip_depth -= 1

    def handle_data(self, data: str) -> None:
        if self._skip_depth > 0 or self._root_depth == 0:
            return
        if data.strip():
            self._chunks.append(data)

    def text(self) -> str:
        return _WS_RE.sub(" ", " ".join(self._chunks)).strip()


def html_to_text(html: str, *, root_tag: str | None = None) -> str:
    """
    Flatten HTML to one line of text.

    With `root_tag` (e.g. "article") only text inside that element is kept.
    """
    parser = _HTMLToText(root_tag=root_tag)
    parser.feed(html or "")
    parser.close()
    return parser.text()
