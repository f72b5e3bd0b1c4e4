from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class DocumentType(str, Enum):
    MOVEMENT = "movement"
    DIRECTOR = "director"
    FILM = "film"


class Language(str, Enum):
    SK = "sk"
    EN = "en"


FILM_ONLY_FIELDS = ("director", "year", "country", "runtime")


@dataclass(frozen=True)
class Document:
    slug: str
    title: str
    description: str
    publish_date: date
    type: DocumentType
    language: Language
    body: str = ""
    tags: frozenset[str] = field(default_factory=frozenset)
    cover_image: str | None = None
    draft: bool = False

    director: str | None = None
    year: int | None = None
    country: str | None = None
    runtime: int | None = None

    source_path: str | None = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.language.value, self.slug)


@dataclass(frozen=True)
class TagGroup:
    tag: str
    language: Language
    documents: tuple[Document, ...]

    @property
    def count(self) -> int:
        return len(self.documents)


@dataclass(frozen=True)
class ScoredDocument:
    document: Document
    score: int
