from __future__ import annotations

import math

WORDS_PER_MINUTE = 200


def word_count(body: str) -> int:
    return len((body or "").split())


def estimate(body: str, *, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    """
    Minutes to read `body`, rounded up.

    An empty body is 0 minutes; callers decide whether to show it.
    """
    if words_per_minute <= 0:
        raise ValueError("words_per_minute must be > 0")
    return math.ceil(word_count(body) / words_per_minute)
