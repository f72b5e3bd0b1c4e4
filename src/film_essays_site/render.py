from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

import markdown
from jinja2 import DictLoader, Environment
from markupsafe import Markup

from film_essays_site.errors import ContentError
from film_essays_site.i18n import Localization, resolve
from film_essays_site.index import ContentIndex
from film_essays_site.models import Document, Language
from film_essays_site.reading_time import WORDS_PER_MINUTE, estimate
from film_essays_site.related import rank
from film_essays_site.routing import DEFAULT_LANGUAGE, RouteScheme, root_scheme, route_scheme
from film_essays_site.search import SEARCH_INDEX_FILENAME, SEARCH_SCRIPT
from film_essays_site.theme import READING_PROGRESS_SCRIPT, THEME_SCRIPT

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = ["extra", "sane_lists", "smarty"]

SHARED_CSS = """\
:root { --bg: #fbfaf7; --fg: #1d1d1f; --muted: #6b6b70; --accent: #a4302b; --rule: #e3e0d8; }
html.dark { --bg: #121214; --fg: #e6e4df; --muted: #9a9aa0; --accent: #e0746d; --rule: #2b2b30; }
*, *::before, *::after { box-sizing: border-box; }
body {
  margin: 0; background: var(--bg); color: var(--fg);
  font-family: "Source Serif Pro", Georgia, serif; font-size: 18px; line-height: 1.65;
}
a { color: var(--accent); text-decoration: none; }
a:hover { text-decoration: underline; }
.site-header, main, .site-footer { max-width: 44rem; margin: 0 auto; padding: 0 1.25rem; }
.site-header { display: flex; flex-wrap: wrap; gap: 1rem; align-items: baseline; padding-top: 1.5rem; }
.site-header .brand { font-weight: 700; font-size: 1.2em; margin-right: auto; color: var(--fg); }
.site-header nav a { margin-left: 0.75rem; font-family: system-ui, sans-serif; font-size: 0.85em; }
.theme-toggle { background: none; border: 1px solid var(--rule); color: var(--fg); border-radius: 4px; cursor: pointer; }
#reading-progress { position: fixed; top: 0; left: 0; height: 3px; width: 0; background: var(--accent); }
.search { margin: 1rem 0; }
.search input { width: 100%; padding: 0.5rem; font: inherit; background: transparent; color: var(--fg); border: 1px solid var(--rule); }
.search ul { list-style: none; padding: 0; }
.meta { color: var(--muted); font-family: system-ui, sans-serif; font-size: 0.8em; }
.tags a { margin-right: 0.5rem; }
.cover { width: 100%; height: auto; }
.film-facts { display: grid; grid-template-columns: max-content 1fr; gap: 0.25rem 1rem; font-size: 0.9em; }
.film-facts dt { color: var(--muted); }
.film-facts dd { margin: 0; }
.cards { list-style: none; padding: 0; }
.cards li { border-top: 1px solid var(--rule); padding: 1rem 0; }
.site-footer { border-top: 1px solid var(--rule); margin-top: 3rem; padding: 1rem 1.25rem 2rem; color: var(--muted); font-size: 0.85em; }
"""

BASE_TEMPLATE = """\
<!DOCTYPE html>
<html lang="{{ loc.language.value }}">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{{ page_title }} | {{ site_title }}</title>
<meta name="description" content="{{ page_description }}">
<meta property="og:title" content="{{ page_title }}">
<meta property="og:description" content="{{ page_description }}">
<meta property="og:type" content="{{ og_type|default('website') }}">
<meta property="og:url" content="{{ site_url }}{{ canonical }}">
{% if og_image %}<meta property="og:image" content="{{ og_image }}">
{% endif %}<link rel="canonical" href="{{ site_url }}{{ canonical }}">
<link rel="alternate" type="application/rss+xml" title="{{ site_title }}" href="/rss.xml">
<link rel="stylesheet" href="/assets/style.css">
<script>{{ theme_script }}</script>
</head>
<body>
{% block progress %}{% endblock %}
<header class="site-header">
<a class="brand" href="{{ routes.home() }}">{{ site_title }}</a>
<nav>
<a href="{{ routes.home() }}">{{ loc.t('nav.articles') }}</a>
<a href="{{ routes.tags() }}">{{ loc.t('nav.tags') }}</a>
<a href="{{ other_home }}" hreflang="{{ other_language }}">{{ loc.t('language.switch') }}</a>
<button type="button" class="theme-toggle" onclick="toggleTheme()" aria-label="{{ loc.t('theme.toggle') }}">&#9680;</button>
</nav>
<div class="search">
<input type="search" id="search-input" placeholder="{{ loc.t('search.placeholder') }}" data-index="/{{ search_index }}" data-empty="{{ loc.t('search.no_results') }}" aria-label="{{ loc.t('nav.search') }}">
<ul id="search-results"></ul>
</div>
</header>
<main>
{% block content %}{% endblock %}
</main>
<footer class="site-footer">
<p>{{ loc.t('site.tagline') }} &middot; <a href="/rss.xml">{{ loc.t('footer.rss') }}</a></p>
</footer>
<script>{{ search_script }}</script>
{% block scripts %}{% endblock %}
</body>
</html>
"""

CARDS_MACRO = """\
{% macro cards(docs, loc, routes) %}
{% if docs %}
<ul class="cards">
{% for doc in docs %}
<li>
<a href="{{ routes.article(doc.slug) }}"><strong>{{ doc.title }}</strong></a>
<div class="meta">{{ loc.t('type.' ~ doc.type.value) }} &middot; <time datetime="{{ doc.publish_date.isoformat() }}">{{ doc.publish_date|datefmt(loc.language) }}</time></div>
<p>{{ doc.description }}</p>
</li>
{% endfor %}
</ul>
{% else %}
<p>{{ loc.t('list.empty') }}</p>
{% endif %}
{% endmacro %}
"""

HOME_TEMPLATE = """\
{% extends "base.html" %}
{% from "cards.html" import cards %}
{% block content %}
<h1>{{ loc.t('nav.articles') }}</h1>
{{ cards(documents, loc, routes) }}
{% endblock %}
"""

ARTICLE_TEMPLATE = """\
{% extends "base.html" %}
{% from "cards.html" import cards %}
{% block progress %}<div id="reading-progress" aria-hidden="true"></div>{% endblock %}
{% block content %}
<article>
<h1>{{ doc.title }}</h1>
<div class="meta">
{{ loc.t('type.' ~ doc.type.value) }} &middot;
{{ loc.t('article.published') }} <time datetime="{{ doc.publish_date.isoformat() }}">{{ doc.publish_date|datefmt(loc.language) }}</time>
{% if minutes > 0 %}&middot; {{ loc.t('article.reading_time', minutes=minutes) }}{% endif %}
</div>
{% if doc.cover_image %}<img class="cover" src="{{ doc.cover_image }}" alt="{{ doc.title }}">{% endif %}
<p class="lead">{{ doc.description }}</p>
{% if doc.director or doc.year or doc.country or doc.runtime %}
<dl class="film-facts">
{% if doc.director %}<dt>{{ loc.t('film.director') }}</dt><dd>{{ doc.director }}</dd>{% endif %}
{% if doc.year %}<dt>{{ loc.t('film.year') }}</dt><dd>{{ doc.year }}</dd>{% endif %}
{% if doc.country %}<dt>{{ loc.t('film.country') }}</dt><dd>{{ doc.country }}</dd>{% endif %}
{% if doc.runtime %}<dt>{{ loc.t('film.runtime') }}</dt><dd>{{ loc.t('film.runtime_value', minutes=doc.runtime) }}</dd>{% endif %}
</dl>
{% endif %}
<div class="body">
{{ body_html }}
</div>
</article>
{% if tags %}
<aside class="tags">
<h2>{{ loc.t('article.tags') }}</h2>
{% for tag in tags %}<a href="{{ routes.tag(tag) }}">#{{ tag }}</a>{% endfor %}
</aside>
{% endif %}
{% if related %}
<aside class="related">
<h2>{{ loc.t('article.related') }}</h2>
{{ cards(related, loc, routes) }}
</aside>
{% endif %}
{% endblock %}
{% block scripts %}<script>{{ progress_script }}</script>{% endblock %}
"""

TAG_INDEX_TEMPLATE = """\
{% extends "base.html" %}
{% block content %}
<h1>{{ loc.t('tags.title') }}</h1>
{% if groups %}
<ul class="tag-list">
{% for group in groups %}<li><a href="{{ routes.tag(group.tag) }}">#{{ group.tag }}</a> <span class="meta">{{ loc.t('tag.count', count=group.count) }}</span></li>
{% endfor %}
</ul>
{% else %}
<p>{{ loc.t('list.empty') }}</p>
{% endif %}
{% endblock %}
"""

TAG_PAGE_TEMPLATE = """\
{% extends "base.html" %}
{% from "cards.html" import cards %}
{% block content %}
<h1>{{ loc.t('tag.title', tag=group.tag) }}</h1>
{{ cards(group.documents, loc, routes) }}
{% endblock %}
"""

_MONTHS_SK = (
    "januára", "februára", "marca", "apríla", "mája", "júna",
    "júla", "augusta", "septembra", "októbra", "novembra", "decembra",
)
_MONTHS_EN = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def format_date(d: date, language: Language) -> str:
    if language is Language.SK:
        return f"{d.day}. {_MONTHS_SK[d.month - 1]} {d.year}"
    return f"{_MONTHS_EN[d.month - 1]} {d.day}, {d.year}"


def _make_env() -> Environment:
    env = Environment(
        loader=DictLoader(
            {
                "base.html": BASE_TEMPLATE,
                "cards.html": CARDS_MACRO,
                "home.html": HOME_TEMPLATE,
                "article.html": ARTICLE_TEMPLATE,
                "tags.html": TAG_INDEX_TEMPLATE,
                "tag.html": TAG_PAGE_TEMPLATE,
            }
        ),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["datefmt"] = format_date
    return env


def render_markdown(body: str) -> Markup:
    # Bodies are authored by the site owner, so their HTML passes through unescaped.
    return Markup(markdown.markdown(body or "", extensions=MARKDOWN_EXTENSIONS, output_format="html"))


@dataclass(frozen=True)
class RenderedPage:
    path: str
    html: str
    kind: str
    language: Language
    canonical: bool = True

    @property
    def output_name(self) -> str:
        return self.path.strip("/") + "/index.html" if self.path.strip("/") else "index.html"


class SiteRenderer:
    """Renders every public page of the site from a ContentIndex."""

    def __init__(
        self,
        index: ContentIndex,
        *,
        site_url: str,
        site_title: str,
        default_language: Language = DEFAULT_LANGUAGE,
        related_limit: int = 3,
        words_per_minute: int = WORDS_PER_MINUTE,
    ) -> None:
        self.index = index
        self.site_url = site_url.rstrip("/")
        self.site_title = site_title
        self.default_language = default_language
        self.related_limit = related_limit
        self.words_per_minute = words_per_minute
        self._env = _make_env()

    def _schemes(self, language: Language) -> list[tuple[RouteScheme, bool]]:
        schemes = [(route_scheme(language, default=self.default_language), True)]
        if language is self.default_language:
            schemes.append((root_scheme(self.default_language), False))
        return schemes

    def _common(self, loc: Localization, routes: RouteScheme, canonical: str) -> dict[str, object]:
        other = Language.EN if loc.language is Language.SK else Language.SK
        return {
            "loc": loc,
            "routes": routes,
            "site_url": self.site_url,
            "site_title": self.site_title,
            "canonical": canonical,
            "other_language": other.value,
            "other_home": route_scheme(other).home(),
            "search_index": SEARCH_INDEX_FILENAME,
            "theme_script": Markup(THEME_SCRIPT),
            "search_script": Markup(SEARCH_SCRIPT),
        }

    def _render(self, template: str, **context: object) -> str:
        return self._env.get_template(template).render(**context)

    def render_home(self, language: Language, routes: RouteScheme) -> str:
        loc = resolve(language, default=self.default_language)
        return self._render(
            "home.html",
            **self._common(loc, routes, loc.routes.home()),
            page_title=loc.t("nav.articles"),
            page_description=loc.t("site.tagline"),
            documents=self.index.by_language(language),
        )

    def render_article(self, doc: Document, routes: RouteScheme) -> str:
        loc = resolve(doc.language, default=self.default_language)
        related = rank(doc, self.index.by_language(doc.language), self.related_limit)
        og_image = None
        if doc.cover_image:
            og_image = doc.cover_image if "://" in doc.cover_image else self.site_url + "/" + doc.cover_image.lstrip("/")
        return self._render(
            "article.html",
            **self._common(loc, routes, loc.routes.article(doc.slug)),
            page_title=doc.title,
            page_description=doc.description,
            og_type="article",
            og_image=og_image,
            doc=doc,
            tags=sorted(doc.tags),
            minutes=estimate(doc.body, words_per_minute=self.words_per_minute),
            body_html=render_markdown(doc.body),
            related=related,
            progress_script=Markup(READING_PROGRESS_SCRIPT),
        )

    def render_tag_index(self, language: Language, routes: RouteScheme) -> str:
        loc = resolve(language, default=self.default_language)
        return self._render(
            "tags.html",
            **self._common(loc, routes, loc.routes.tags()),
            page_title=loc.t("tags.title"),
            page_description=loc.t("tags.title"),
            groups=self.index.tag_groups(language),
        )

    def render_tag_page(self, language: Language, tag: str, routes: RouteScheme) -> str:
        loc = resolve(language, default=self.default_language)
        group = next(g for g in self.index.tag_groups(language) if g.tag == tag)
        title = loc.t("tag.title", tag=tag)
        return self._render(
            "tag.html",
            **self._common(loc, routes, loc.routes.tag(tag)),
            page_title=title,
            page_description=title,
            group=group,
        )

    def render_site(self) -> list[RenderedPage]:
        pages: list[RenderedPage] = []
        for language in Language:
            for routes, canonical in self._schemes(language):
                pages.append(
                    RenderedPage(routes.home(), self.render_home(language, routes), "home", language, canonical)
                )
                for doc in self.index.by_language(language):
                    pages.append(
                        RenderedPage(
                            routes.article(doc.slug),
                            self.render_article(doc, routes),
                            "article",
                            language,
                            canonical,
                        )
                    )
                pages.append(
                    RenderedPage(routes.tags(), self.render_tag_index(language, routes), "tags", language, canonical)
                )
                for group in self.index.tag_groups(language):
                    pages.append(
                        RenderedPage(
                            routes.tag(group.tag),
                            self.render_tag_page(language, group.tag, routes),
                            "tag",
                            language,
                            canonical,
                        )
                    )
        _check_unique_paths(pages)
        logger.info("Rendered %d pages", len(pages))
        return pages


def _check_unique_paths(pages: list[RenderedPage]) -> None:
    seen: set[str] = set()
    for page in pages:
        if page.path in seen:
            raise ContentError(f"two pages render to {page.path}; check for tags that differ only in case or accents")
        seen.add(page.path)
