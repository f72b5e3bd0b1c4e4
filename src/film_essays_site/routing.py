from __future__ import annotations

from dataclasses import dataclass

from film_essays_site.models import Language
from film_essays_site.util import slugify

DEFAULT_LANGUAGE = Language.SK


@dataclass(frozen=True)
class RouteScheme:
    """URL layout for one language. `prefix` is "" for the unprefixed default-language tree."""

    language: Language
    prefix: str
    articles_segment: str
    tags_segment: str

    def _join(self, *parts: str) -> str:
        segments = [p.strip("/") for p in (self.prefix, *parts) if p and p.strip("/")]
        if not segments:
            return "/"
        return "/" + "/".join(segments) + "/"

    def home(self) -> str:
        return self._join()

    def article(self, slug: str) -> str:
        return self._join(self.articles_segment, slug)

    def tags(self) -> str:
        return self._join(self.tags_segment)

    def tag(self, tag: str) -> str:
        return self._join(self.tags_segment, slugify(tag) or "tag")


_SEGMENTS: dict[Language, tuple[str, str]] = {
    Language.EN: ("articles", "tags"),
    Language.SK: ("clanky", "tagy"),
}


def coerce_language(code: str | Language | None, *, default: Language = DEFAULT_LANGUAGE) -> Language:
    if isinstance(code, Language):
        return code
    try:
        return Language((code or "").strip().lower())
    except ValueError:
        return default


def route_scheme(language: str | Language | None, *, default: Language = DEFAULT_LANGUAGE) -> RouteScheme:
    lang = coerce_language(language, default=default)
    articles, tags = _SEGMENTS[lang]
    return RouteScheme(language=lang, prefix=lang.value, articles_segment=articles, tags_segment=tags)


def root_scheme(default: Language = DEFAULT_LANGUAGE) -> RouteScheme:
    """Unprefixed paths (`/clanky/{slug}/`) serving the default language."""
    articles, tags = _SEGMENTS[default]
    return RouteScheme(language=default, prefix="", articles_segment=articles, tags_segment=tags)


def language_from_path(path: str, *, default: Language = DEFAULT_LANGUAGE) -> Language:
    """
    Language of a site path. Unknown or missing prefixes resolve to `default`
    rather than a not-found.
    """
    first = (path or "").strip("/").split("/", 1)[0]
    return coerce_language(first, default=default)
