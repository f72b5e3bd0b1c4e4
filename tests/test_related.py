from __future__ import annotations

from conftest import make_doc

from film_essays_site.related import rank, rank_scored


def test_rank_scores_type_match_and_shared_tags() -> None:
    target = make_doc("target", type="film", tags={"a", "b"})
    d1 = make_doc("d1", type="film", tags={"a"})
    d2 = make_doc("d2", type="director", tags={"a", "b"})
    d3 = make_doc("d3", type="film", tags=set())

    scored = rank_scored(target, [d1, d2, d3], 3)
    assert [(s.document.slug, s.score) for s in scored] == [("d1", 15), ("d2", 10), ("d3", 10)]
    assert rank(target, [d1, d2, d3], 3) == [d1, d2, d3]


def test_rank_excludes_target_drafts_and_other_languages() -> None:
    target = make_doc("target", tags={"a"})
    pool = [
        target,
        make_doc("draft", tags={"a"}, draft=True),
        make_doc("slovak", language="sk", tags={"a"}),
        make_doc("keep", tags={"a"}),
    ]
    assert [d.slug for d in rank(target, pool, 10)] == ["keep"]


def test_rank_keeps_zero_score_candidates_up_to_limit() -> None:
    target = make_doc("target", type="film", tags={"a"})
    pool = [make_doc(f"m{i}", type="movement") for i in range(4)]
    result = rank_scored(target, pool, 3)
    assert [s.document.slug for s in result] == ["m0", "m1", "m2"]
    assert all(s.score == 0 for s in result)


def test_rank_equal_scores_keep_pool_order() -> None:
    target = make_doc("target", type="film")
    pool = [make_doc("z", type="director"), make_doc("y", type="film"), make_doc("x", type="director")]
    assert [d.slug for d in rank(target, pool, 3)] == ["y", "z", "x"]


def test_rank_respects_limit() -> None:
    target = make_doc("target")
    pool = [make_doc(f"d{i}") for i in range(5)]
    assert len(rank(target, pool, 2)) == 2
    assert rank(target, pool, 0) == []
