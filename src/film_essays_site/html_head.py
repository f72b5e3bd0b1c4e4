from __future__ import annotations

import re
from dataclasses import dataclass
from html.parser import HTMLParser

# <meta> keys read from rendered pages; name= and property= share one namespace.
_META_KEYS = frozenset({"description", "og:title"})


@dataclass(frozen=True)
class PageMetadata:
    title: str | None
    description: str | None
    language: str | None
    canonical_url: str | None


class _PageHeadParser(HTMLParser):
    """Reads the tags the page templates emit: html[lang], <title>, description, og:title and canonical."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.language: str | None = None
        self.canonical_url: str | None = None
        self.meta: dict[str, str] = {}
        self._title: list[str] | None = None
        self._title_parts: list[str] = []
        self._head_done = False

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if self._head_done:
            return
        a = {k.lower(): (v or "").strip() for k, v in attrs}
        if tag == "html":
            self.language = a.get("lang") or None
        elif tag == "title":
            self._title = self._title_parts
        elif tag == "link" and a.get("rel", "").lower() == "canonical" and a.get("href"):
            self.canonical_url = self.canonical_url or a["href"]
        elif tag == "meta":
            key = (a.get("name") or a.get("property") or "").lower()
            if key in _META_KEYS and a.get("content"):
                self.meta.setdefault(key, a["content"])

    def handle_endtag(self, tag: str) -> None:
        if tag == "title":
            self._title = None
        elif tag == "head":
            self._head_done = True

    def handle_data(self, data: str) -> None:
        if self._title is not None:
            self._title.append(data)

    def title(self) -> str | None:
        text = re.sub(r"\s+", " ", "".join(self._title_parts)).strip()
        return text or None


def extract_page_metadata(html: str) -> PageMetadata:
    """<head> metadata of a rendered page. `og:title` wins over <title>, which carries the site suffix."""
    parser = _PageHeadParser()
    parser.feed(html or "")
    parser.close()
    return PageMetadata(
        title=parser.meta.get("og:title") or parser.title(),
        description=parser.meta.get("description"),
        language=parser.language,
        canonical_url=parser.canonical_url,
    )
