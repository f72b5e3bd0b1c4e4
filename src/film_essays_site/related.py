from __future__ import annotations

from collections.abc import Sequence

from film_essays_site.models import Document, ScoredDocument

TYPE_MATCH_SCORE = 10
SHARED_TAG_SCORE = 5


def score(target: Document, candidate: Document) -> int:
    same_type = TYPE_MATCH_SCORE if candidate.type is target.type else 0
    return same_type + SHARED_TAG_SCORE * len(candidate.tags & target.tags)


def rank_scored(target: Document, pool: Sequence[Document], limit: int) -> list[ScoredDocument]:
    """
    Score every eligible candidate in `pool` against `target`.

    The target itself, drafts and other-language documents are dropped. Zero-score
    candidates are kept: this orders the pool, it does not filter it. Equal scores keep
    their pool order (sorted() is stable).
    """
    if limit <= 0:
        return []
    candidates = [
        ScoredDocument(document=d, score=score(target, d))
        for d in pool
        if not d.draft and d.language is target.language and d.key != target.key
    ]
    candidates = sorted(candidates, key=lambda s: s.score, reverse=True)
    return candidates[:limit]


def rank(target: Document, pool: Sequence[Document], limit: int) -> list[Document]:
    return [s.document for s in rank_scored(target, pool, limit)]
