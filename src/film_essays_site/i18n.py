from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from film_essays_site.errors import MissingTranslation
from film_essays_site.models import Language
from film_essays_site.routing import DEFAULT_LANGUAGE, RouteScheme, coerce_language, route_scheme

UI_STRINGS: dict[Language, dict[str, str]] = {
    Language.SK: {
        "site.tagline": "Eseje o filmoch, režiséroch a filmových hnutiach",
        "nav.home": "Domov",
        "nav.articles": "Články",
        "nav.tags": "Tagy",
        "nav.search": "Hľadať",
        "nav.contact": "Kontakt",
        "article.published": "Publikované",
        "article.reading_time": "{minutes} min čítania",
        "article.related": "Súvisiace články",
        "article.tags": "Tagy",
        "film.director": "Réžia",
        "film.year": "Rok",
        "film.country": "Krajina",
        "film.runtime": "Dĺžka",
        "film.runtime_value": "{minutes} min",
        "type.movement": "Hnutie",
        "type.director": "Režisér",
        "type.film": "Film",
        "tags.title": "Všetky tagy",
        "tag.title": "Tag: {tag}",
        "tag.count": "{count} článkov",
        "list.empty": "Zatiaľ tu nič nie je.",
        "search.placeholder": "Hľadať v článkoch…",
        "search.no_results": "Nič sa nenašlo.",
        "theme.toggle": "Prepnúť tmavý režim",
        "language.switch": "English",
        "footer.rss": "RSS",
    },
    Language.EN: {
        "site.tagline": "Essays on films, directors and film movements",
        "nav.home": "Home",
        "nav.articles": "Articles",
        "nav.tags": "Tags",
        "nav.search": "Search",
        "nav.contact": "Contact",
        "article.published": "Published",
        "article.reading_time": "{minutes} min read",
        "article.related": "Related articles",
        "article.tags": "Tags",
        "film.director": "Director",
        "film.year": "Year",
        "film.country": "Country",
        "film.runtime": "Runtime",
        "film.runtime_value": "{minutes} min",
        "type.movement": "Movement",
        "type.director": "Director",
        "type.film": "Film",
        "tags.title": "All tags",
        "tag.title": "Tag: {tag}",
        "tag.count": "{count} articles",
        "list.empty": "Nothing here yet.",
        "search.placeholder": "Search articles…",
        "search.no_results": "No results.",
        "theme.toggle": "Toggle dark mode",
        "language.switch": "Slovensky",
        "footer.rss": "RSS",
    },
}


@dataclass(frozen=True)
class Dictionary:
    language: Language
    strings: Mapping[str, str]
    fallback: Mapping[str, str]
    default_language: Language = DEFAULT_LANGUAGE


@dataclass(frozen=True)
class Localization:
    language: Language
    dictionary: Dictionary
    routes: RouteScheme

    def t(self, key: str, **kwargs: object) -> str:
        value = string_for(self.dictionary, key)
        return value.format(**kwargs) if kwargs else value


def resolve(
    language_code: str | Language | None,
    *,
    default: Language = DEFAULT_LANGUAGE,
    strings: Mapping[Language, Mapping[str, str]] = UI_STRINGS,
) -> Localization:
    """
    Dictionary and route scheme for a language code.

    Unrecognized codes resolve to `default` instead of failing.
    """
    lang = coerce_language(language_code, default=default)
    dictionary = Dictionary(
        language=lang,
        strings=strings.get(lang, {}),
        fallback=strings.get(default, {}),
        default_language=default,
    )
    return Localization(language=lang, dictionary=dictionary, routes=route_scheme(lang, default=default))


def string_for(dictionary: Dictionary, key: str) -> str:
    """
    Look up `key`, falling back to the default-language string.

    Raises MissingTranslation when the default language has no non-empty value either.
    """
    value = dictionary.strings.get(key)
    if value:
        return value
    value = dictionary.fallback.get(key)
    if value:
        return value
    raise MissingTranslation(key, dictionary.default_language.value)
