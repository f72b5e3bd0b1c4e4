import pytest

from film_essays_site.reading_time import estimate, word_count


def test_estimate_rounds_up_per_200_words() -> None:
    assert estimate(" ".join(["word"] * 400)) == 2
    assert estimate(" ".join(["word"] * 401)) == 3
    assert estimate("one") == 1


def test_estimate_empty_body_is_zero() -> None:
    assert estimate("") == 0
    assert estimate("  \n\t ") == 0


def test_word_count_splits_on_whitespace_runs() -> None:
    assert word_count("a  b\n\nc\td") == 4


def test_estimate_rejects_non_positive_rate() -> None:
    with pytest.raises(ValueError):
        estimate("text", words_per_minute=0)
