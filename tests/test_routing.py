from __future__ import annotations

from film_essays_site.models import Language
from film_essays_site.routing import language_from_path, root_scheme, route_scheme


def test_language_prefixed_routes() -> None:
    en = route_scheme("en")
    assert en.home() == "/en/"
    assert en.article("stalker") == "/en/articles/stalker/"
    assert en.tags() == "/en/tags/"
    assert en.tag("Slow Cinema") == "/en/tags/slow-cinema/"

    sk = route_scheme(Language.SK)
    assert sk.article("stalker") == "/sk/clanky/stalker/"
    assert sk.tag("Nová vlna") == "/sk/tagy/nova-vlna/"


def test_root_scheme_serves_default_language_unprefixed() -> None:
    root = root_scheme()
    assert root.language is Language.SK
    assert root.home() == "/"
    assert root.article("stalker") == "/clanky/stalker/"
    assert root.tags() == "/tagy/"


def test_tag_without_slug_characters_gets_placeholder() -> None:
    assert route_scheme("en").tag("!!!") == "/en/tags/tag/"


def test_language_from_path_falls_back_to_default() -> None:
    assert language_from_path("/en/articles/stalker/") is Language.EN
    assert language_from_path("/sk/") is Language.SK
    assert language_from_path("/fr/articles/x/") is Language.SK
    assert language_from_path("/clanky/stalker/") is Language.SK
    assert language_from_path("") is Language.SK
