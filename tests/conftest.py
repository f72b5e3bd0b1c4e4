from __future__ import annotations

from collections.abc import Callable
from datetime import date
from pathlib import Path

import pytest

from film_essays_site.config import Settings
from film_essays_site.models import Document, DocumentType, Language


def make_doc(
    slug: str,
    *,
    type: DocumentType | str = DocumentType.FILM,
    language: Language | str = Language.EN,
    tags: set[str] | frozenset[str] = frozenset(),
    publish_date: date = date(2024, 1, 1),
    draft: bool = False,
    body: str = "",
) -> Document:
    return Document(
        slug=slug,
        title=slug.replace("-", " ").title(),
        description=f"About {slug}",
        publish_date=publish_date,
        type=DocumentType(type),
        language=Language(language),
        body=body,
        tags=frozenset(tags),
        draft=draft,
    )


@pytest.fixture()
def write_content(tmp_path: Path) -> Callable[[str, str], Path]:
    root = tmp_path / "content"
    root.mkdir()

    def _write(relpath: str, text: str) -> Path:
        path = root / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings.model_validate(
        {
            "SITE_URL": "https://kino.example",
            "SITE_TITLE": "Kino Eseje",
            "CONTENT_DIR": tmp_path / "content",
            "OUTPUT_DIR": tmp_path / "dist",
        }
    )
