from __future__ import annotations

from film_essays_site.sources.content_dir import ContentSource, iter_content_sources, parse_front_matter

__all__ = [
    "ContentSource",
    "iter_content_sources",
    "parse_front_matter",
]
