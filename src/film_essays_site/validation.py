from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, ValidationError, field_validator

from film_essays_site.errors import SchemaViolation
from film_essays_site.models import FILM_ONLY_FIELDS, Document, DocumentType, Language
from film_essays_site.sources.content_dir import ContentSource

logger = logging.getLogger(__name__)


class FrontMatter(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    title: StrictStr = Field(min_length=1)
    description: StrictStr = Field(min_length=1)
    publish_date: date = Field(alias="publishDate")
    type: DocumentType
    language: Language
    cover_image: StrictStr | None = Field(default=None, alias="coverImage")
    tags: list[StrictStr] | None = None
    draft: StrictBool = False

    director: StrictStr | None = None
    year: StrictInt | None = Field(default=None, gt=0)
    country: StrictStr | None = None
    runtime: StrictInt | None = Field(default=None, gt=0)

    @field_validator("title", "description")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("publish_date", mode="before")
    @classmethod
    def _datetime_to_date(cls, v: Any) -> Any:
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and ("T" in v or " " in v.strip()):
            try:
                return datetime.fromisoformat(v).date()
            except ValueError:
                return v
        return v


def _field_name(loc: tuple[int | str, ...]) -> str:
    for part in loc:
        if isinstance(part, str):
            return part
    return "front_matter"


def _clean_tags(tags: list[str] | None) -> frozenset[str]:
    return frozenset(t.strip() for t in (tags or []) if t and t.strip())


def validate_front_matter(
    raw: dict[str, Any],
    *,
    slug: str,
    body: str = "",
    source: Path | str | None = None,
) -> Document:
    """
    Validate one front-matter record into a Document.

    Raises SchemaViolation naming the first offending field. There is no partial result.
    """
    if not isinstance(raw, dict):
        raise SchemaViolation("front_matter", "front matter must be a mapping", source=source)
    try:
        fm = FrontMatter.model_validate(raw)
    except ValidationError as e:
        err = e.errors()[0]
        field = _field_name(tuple(err.get("loc") or ()))
        if err.get("type") == "missing":
            message = "required field is missing"
        elif err.get("type") == "extra_forbidden":
            message = "unknown field"
        else:
            message = str(err.get("msg") or "invalid value")
        raise SchemaViolation(field, message, source=source) from e

    if fm.type is not DocumentType.FILM:
        for name in FILM_ONLY_FIELDS:
            if getattr(fm, name) is not None:
                raise SchemaViolation(
                    name,
                    f"only allowed on film documents (type is {fm.type.value!r})",
                    source=source,
                )

    return Document(
        slug=slug,
        title=fm.title,
        description=fm.description,
        publish_date=fm.publish_date,
        type=fm.type,
        language=fm.language,
        body=body or "",
        tags=_clean_tags(fm.tags),
        cover_image=fm.cover_image or None,
        draft=fm.draft,
        director=fm.director,
        year=fm.year,
        country=fm.country,
        runtime=fm.runtime,
        source_path=str(source) if source is not None else None,
    )


def validate_source(src: ContentSource) -> Document:
    return validate_front_matter(src.front_matter, slug=src.slug, body=src.body, source=src.path)


def validate_documents(sources: Iterable[ContentSource]) -> list[Document]:
    """Validate every source; the first violation aborts the whole batch."""
    documents = [validate_source(src) for src in sources]
    logger.info("Validated %d documents", len(documents))
    return documents
