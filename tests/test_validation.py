from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime
from pathlib import Path

import pytest

from film_essays_site.errors import SchemaViolation
from film_essays_site.models import DocumentType, Language
from film_essays_site.sources.content_dir import iter_content_sources
from film_essays_site.validation import validate_documents, validate_front_matter


def _raw(**overrides: object) -> dict[str, object]:
    raw: dict[str, object] = {
        "title": "Stalker",
        "description": "Tarkovsky's Zone as a place of faith.",
        "publishDate": date(2024, 3, 1),
        "type": "film",
        "language": "en",
        "tags": ["tarkovsky", "soviet cinema"],
        "director": "Andrei Tarkovsky",
        "year": 1979,
        "country": "USSR",
        "runtime": 162,
    }
    raw.update(overrides)
    return {k: v for k, v in raw.items() if v is not None}


def test_valid_front_matter_passes_unchanged() -> None:
    doc = validate_front_matter(_raw(coverImage="/img/stalker.jpg"), slug="stalker", body="Some text")
    assert doc.title == "Stalker"
    assert doc.publish_date == date(2024, 3, 1)
    assert doc.type is DocumentType.FILM
    assert doc.language is Language.EN
    assert doc.tags == frozenset({"tarkovsky", "soviet cinema"})
    assert doc.cover_image == "/img/stalker.jpg"
    assert (doc.director, doc.year, doc.country, doc.runtime) == ("Andrei Tarkovsky", 1979, "USSR", 162)
    assert doc.draft is False
    assert doc.body == "Some text"


@pytest.mark.parametrize("field", ["title", "description", "publishDate", "type", "language"])
def test_missing_required_field_is_named(field: str) -> None:
    raw = _raw()
    del raw[field]
    with pytest.raises(SchemaViolation) as exc:
        validate_front_matter(raw, slug="stalker", source="content/en/stalker.md")
    assert exc.value.field == field
    assert "content/en/stalker.md" in str(exc.value)


@pytest.mark.parametrize(
    ("field", "value"),
    [("type", "documentary"), ("language", "de"), ("draft", "yes"), ("year", "1979"), ("tags", "one,two")],
)
def test_invalid_value_is_named(field: str, value: object) -> None:
    with pytest.raises(SchemaViolation) as exc:
        validate_front_matter(_raw(**{field: value}), slug="stalker")
    assert exc.value.field == field


def test_unknown_field_is_rejected() -> None:
    with pytest.raises(SchemaViolation) as exc:
        validate_front_matter(_raw(rating=5), slug="stalker")
    assert exc.value.field == "rating"


def test_film_fields_rejected_on_other_types() -> None:
    raw = _raw(type="director", year=None, country=None, runtime=None)
    with pytest.raises(SchemaViolation) as exc:
        validate_front_matter(raw, slug="tarkovsky")
    assert exc.value.field == "director"


def test_publish_date_accepts_iso_strings_and_datetimes() -> None:
    assert validate_front_matter(_raw(publishDate="2023-05-06"), slug="s").publish_date == date(2023, 5, 6)
    assert (
        validate_front_matter(_raw(publishDate=datetime(2023, 5, 6, 21, 30)), slug="s").publish_date
        == date(2023, 5, 6)
    )
    assert validate_front_matter(_raw(publishDate="2023-05-06T08:00:00"), slug="s").publish_date == date(2023, 5, 6)


def test_tags_are_stripped_and_blank_tags_dropped() -> None:
    doc = validate_front_matter(_raw(tags=[" noir ", "", "noir", "   "]), slug="s")
    assert doc.tags == frozenset({"noir"})


def test_blank_title_is_rejected() -> None:
    with pytest.raises(SchemaViolation) as exc:
        validate_front_matter(_raw(title="   "), slug="s")
    assert exc.value.field == "title"


def test_validate_documents_fails_on_first_violation(write_content: Callable[[str, str], Path]) -> None:
    write_content("en/a.md", "---\ntitle: A\ndescription: d\npublishDate: 2024-01-01\ntype: film\nlanguage: en\n---\nBody\n")
    bad = write_content("en/b.md", "---\ntitle: B\ndescription: d\npublishDate: 2024-01-01\ntype: essay\nlanguage: en\n---\n")
    with pytest.raises(SchemaViolation) as exc:
        validate_documents(iter_content_sources(bad.parent.parent))
    assert exc.value.field == "type"
    assert exc.value.source == str(bad)


def test_impossible_calendar_date_names_publish_date(write_content: Callable[[str, str], Path]) -> None:
    bad = write_content(
        "en/a.md", "---\ntitle: A\ndescription: d\npublishDate: 2024-13-45\ntype: film\nlanguage: en\n---\nBody\n"
    )
    with pytest.raises(SchemaViolation) as exc:
        validate_documents(iter_content_sources(bad.parent.parent))
    assert exc.value.field == "publishDate"
    assert exc.value.source == str(bad)


def test_unquoted_yaml_date_and_datetime_validate(write_content: Callable[[str, str], Path]) -> None:
    write_content("en/a.md", "---\ntitle: A\ndescription: d\npublishDate: 2024-02-29\ntype: film\nlanguage: en\n---\n")
    root = write_content(
        "en/b.md", "---\ntitle: B\ndescription: d\npublishDate: 2024-03-01 21:30:00\ntype: film\nlanguage: en\n---\n"
    ).parent.parent
    docs = {d.slug: d for d in validate_documents(iter_content_sources(root))}
    assert docs["a"].publish_date == date(2024, 2, 29)
    assert docs["b"].publish_date == date(2024, 3, 1)
