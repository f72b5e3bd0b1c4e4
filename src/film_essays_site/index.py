from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable

from film_essays_site.errors import DuplicateSlugError
from film_essays_site.models import Document, DocumentType, Language, TagGroup
from film_essays_site.routing import DEFAULT_LANGUAGE, coerce_language

logger = logging.getLogger(__name__)


def _newest_first(docs: Iterable[Document]) -> list[Document]:
    # Slug breaks publish-date ties so the order does not depend on file discovery.
    return sorted(docs, key=lambda d: (d.publish_date, d.slug), reverse=True)


class ContentIndex:
    """
    Published (non-draft) documents of one build, with per-language views.

    Immutable once built; every view returns a fresh list.
    """

    def __init__(self, documents: list[Document], *, default_language: Language = DEFAULT_LANGUAGE):
        self._default = default_language
        self._docs = [d for d in documents if not d.draft]
        self._by_key = {d.key: d for d in self._docs}

    @classmethod
    def from_documents(
        cls,
        documents: Iterable[Document],
        *,
        default_language: Language = DEFAULT_LANGUAGE,
    ) -> ContentIndex:
        documents = list(documents)
        seen: dict[tuple[str, str], list[str]] = {}
        for d in documents:
            seen.setdefault(d.key, []).append(d.source_path or d.title)
        for (lang, slug), sources in seen.items():
            if len(sources) > 1:
                raise DuplicateSlugError(slug, lang, sources)

        index = cls(documents, default_language=default_language)
        drafts = len(documents) - len(index._docs)
        logger.info("Indexed %d documents (%d drafts skipped)", len(index._docs), drafts)
        return index

    def __len__(self) -> int:
        return len(self._docs)

    def _lang(self, lang: str | Language | None) -> Language:
        return coerce_language(lang, default=self._default)

    def all_documents(self) -> list[Document]:
        return _newest_first(self._docs)

    def get(self, lang: str | Language, slug: str) -> Document | None:
        return self._by_key.get((self._lang(lang).value, slug))

    def by_language(self, lang: str | Language, *, newest_first: bool = True) -> list[Document]:
        language = self._lang(lang)
        docs = _newest_first(d for d in self._docs if d.language is language)
        if not newest_first:
            docs.reverse()
        return docs

    def by_type(self, lang: str | Language, doc_type: DocumentType | str) -> list[Document]:
        doc_type = DocumentType(doc_type)
        return [d for d in self.by_language(lang) if d.type is doc_type]

    def by_tag(self, lang: str | Language, tag: str) -> list[Document]:
        return [d for d in self.by_language(lang) if tag in d.tags]

    def all_tags(self, lang: str | Language) -> set[tuple[str, int]]:
        counts: Counter[str] = Counter()
        for d in self.by_language(lang):
            counts.update(d.tags)
        return set(counts.items())

    def tag_groups(self, lang: str | Language) -> list[TagGroup]:
        language = self._lang(lang)
        return [
            TagGroup(tag=tag, language=language, documents=tuple(self.by_tag(language, tag)))
            for tag, _ in sorted(self.all_tags(language))
        ]
