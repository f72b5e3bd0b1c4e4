from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, date, datetime, time
from email.utils import format_datetime
from html import escape as html_escape

from film_essays_site.models import Document
from film_essays_site.routing import route_scheme

RSS_FILENAME = "rss.xml"
SITEMAP_FILENAME = "sitemap.xml"


def x(s: str) -> str:
    return html_escape(s or "", quote=True)


def absolute_url(site_url: str, path: str) -> str:
    return site_url.rstrip("/") + "/" + path.lstrip("/")


def rfc822(d: date) -> str:
    return format_datetime(datetime.combine(d, time.min, tzinfo=UTC))


def article_url(site_url: str, doc: Document) -> str:
    return absolute_url(site_url, route_scheme(doc.language).article(doc.slug))


def feed_documents(documents: Iterable[Document]) -> list[Document]:
    """Non-draft documents of every language, newest first."""
    docs = [d for d in documents if not d.draft]
    return sorted(docs, key=lambda d: (d.publish_date, d.slug), reverse=True)


def build_rss(
    documents: Iterable[Document],
    *,
    site_url: str,
    title: str,
    description: str = "",
    now: datetime | None = None,
) -> str:
    """One RSS 2.0 channel over both languages; tags become <category> elements."""
    now = now or datetime.now(UTC)
    items: list[str] = []
    for doc in feed_documents(documents):
        link = article_url(site_url, doc)
        categories = "\n".join(f"      <category>{x(t)}</category>" for t in sorted(doc.tags))
        item = [
            "    <item>",
            f"      <title>{x(doc.title)}</title>",
            f"      <link>{x(link)}</link>",
            f'      <guid isPermaLink="true">{x(link)}</guid>',
            f"      <description>{x(doc.description)}</description>",
            f"      <pubDate>{rfc822(doc.publish_date)}</pubDate>",
        ]
        if categories:
            item.append(categories)
        item.append("    </item>")
        items.append("\n".join(item))

    body = "\n".join(items)
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">
  <channel>
    <title>{x(title)}</title>
    <link>{x(absolute_url(site_url, "/"))}</link>
    <description>{x(description or title)}</description>
    <atom:link href="{x(absolute_url(site_url, RSS_FILENAME))}" rel="self" type="application/rss+xml"/>
    <lastBuildDate>{format_datetime(now)}</lastBuildDate>
{body}
  </channel>
</rss>
"""


def build_sitemap(paths: Iterable[str], *, site_url: str) -> str:
    urls = "\n".join(
        f"  <url><loc>{x(absolute_url(site_url, p))}</loc></url>" for p in sorted(set(paths))
    )
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
{urls}
</urlset>
"""
