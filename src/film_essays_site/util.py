from __future__ import annotations

import re
import unicodedata

_NON_SLUG_RE = re.compile(r"[^a-z0-9-]")
_SEP_RE = re.compile(r"[\s_]+")
_DASHES_RE = re.compile(r"-{2,}")


def slugify(value: str) -> str:
    """
    URL-friendly slug: 'Nová vlna' -> 'nova-vlna'.

    Diacritics are folded to ASCII so Slovak titles and tags produce readable paths.
    """
    s = unicodedata.normalize("NFKD", value or "")
    s = s.encode("ascii", "ignore").decode("ascii")
    s = s.strip().lower()
    s = _SEP_RE.sub("-", s)
    s = _NON_SLUG_RE.sub("", s)
    s = _DASHES_RE.sub("-", s).strip("-")
    return s
