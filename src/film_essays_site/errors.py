from __future__ import annotations

from pathlib import Path


class ContentError(Exception):
    """Base class for build-time content errors. Any of these aborts the build."""


class SchemaViolation(ContentError):
    def __init__(self, field: str, message: str, *, source: Path | str | None = None) -> None:
        self.field = field
        self.message = message
        self.source = str(source) if source is not None else None
        where = f"{self.source}: " if self.source else ""
        super().__init__(f"{where}{field}: {message}")


class DuplicateSlugError(ContentError):
    def __init__(self, slug: str, language: str, sources: list[str]) -> None:
        self.slug = slug
        self.language = language
        self.sources = sources
        super().__init__(
            f"duplicate slug {slug!r} for language {language!r}: {', '.join(sources)}"
        )


class MissingTranslation(KeyError):
    def __init__(self, key: str, language: str) -> None:
        self.key = key
        self.language = language
        super().__init__(f"no translation for {key!r} (default language {language!r})")
