from __future__ import annotations

import logging
import shutil
import tempfile
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from film_essays_site.config import Settings
from film_essays_site.errors import ContentError
from film_essays_site.feeds import RSS_FILENAME, SITEMAP_FILENAME, build_rss, build_sitemap
from film_essays_site.index import ContentIndex
from film_essays_site.render import SHARED_CSS, RenderedPage, SiteRenderer
from film_essays_site.search import SEARCH_INDEX_FILENAME, IndexablePage, build_search_index, dump_search_index
from film_essays_site.sources.content_dir import iter_content_sources
from film_essays_site.validation import validate_documents

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildResult:
    output_dir: Path
    documents: int
    pages: int
    files: dict[str, str]


def load_index(settings: Settings) -> ContentIndex:
    """Read, validate and index the content directory. Raises ContentError on the first bad document."""
    sources = iter_content_sources(settings.content_dir)
    documents = validate_documents(sources)
    return ContentIndex.from_documents(documents, default_language=settings.default_language)


def render_files(index: ContentIndex, settings: Settings, *, now: datetime | None = None) -> dict[str, str]:
    """
    Every output file of the site, keyed by path relative to the output directory.

    Nothing is written here, so a failure leaves a previous build untouched.
    """
    renderer = SiteRenderer(
        index,
        site_url=settings.site_url,
        site_title=settings.site_title,
        default_language=settings.default_language,
        related_limit=settings.related_limit,
        words_per_minute=settings.words_per_minute,
    )
    pages: list[RenderedPage] = renderer.render_site()

    files = {page.output_name: page.html for page in pages}
    files["assets/style.css"] = SHARED_CSS
    files[RSS_FILENAME] = build_rss(
        index.all_documents(),
        site_url=settings.site_url,
        title=settings.site_title,
        description=settings.site_description,
        now=now or datetime.now(UTC),
    )
    files[SITEMAP_FILENAME] = build_sitemap(
        [p.path for p in pages if p.canonical],
        site_url=settings.site_url,
    )
    entries = build_search_index(
        IndexablePage(url=p.path, html=p.html) for p in pages if p.kind == "article" and p.canonical
    )
    files[SEARCH_INDEX_FILENAME] = dump_search_index(entries)
    logger.info("Search index holds %d articles", len(entries))
    return files


def check_output_dir(output_dir: Path, content_dir: Path) -> None:
    """
    Refuse an output directory whose replacement would delete authored content
    or the working directory.
    """
    out = Path(output_dir).resolve()
    content = Path(content_dir).resolve()
    cwd = Path.cwd().resolve()
    if out == content or out in content.parents:
        raise ContentError(f"output directory {output_dir} contains the content directory {content_dir}")
    if content in out.parents:
        raise ContentError(f"output directory {output_dir} lies inside the content directory {content_dir}")
    if out == cwd or out in cwd.parents:
        raise ContentError(f"output directory {output_dir} contains the working directory")


def write_files(files: dict[str, str], output_dir: Path) -> None:
    """
    Write the site into a sibling temp directory, then swap it in for `output_dir`.

    A failed write removes the temp directory and leaves the previous build in place.
    """
    output_dir = Path(output_dir)
    output_dir.parent.mkdir(parents=True, exist_ok=True)
    staging = Path(tempfile.mkdtemp(prefix=f".{output_dir.name}-", dir=output_dir.parent))
    try:
        for name, content in sorted(files.items()):
            path = staging / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
    except Exception:
        shutil.rmtree(staging, ignore_errors=True)
        raise
    staging.chmod(0o755)
    if output_dir.exists():
        shutil.rmtree(output_dir)
    staging.rename(output_dir)


def build_site(settings: Settings, *, now: datetime | None = None) -> BuildResult:
    output_dir = Path(settings.output_dir)
    check_output_dir(output_dir, settings.content_dir)
    index = load_index(settings)
    files = render_files(index, settings, now=now)
    write_files(files, output_dir)
    pages = sum(1 for name in files if name.endswith(".html"))
    logger.info("Wrote %d files (%d pages) to %s", len(files), pages, output_dir)
    return BuildResult(output_dir=output_dir, documents=len(index), pages=pages, files=files)
