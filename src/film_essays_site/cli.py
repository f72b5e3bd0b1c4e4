"""Command line entry for the film essays site generator."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from film_essays_site.build import build_site, load_index
from film_essays_site.config import Settings, load_settings
from film_essays_site.errors import ContentError
from film_essays_site.search import SearchClient

logger = logging.getLogger(__name__)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="film-essays")
    parser.add_argument("--content-dir", type=Path, help="overrides CONTENT_DIR")
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="validate content and write the static site")
    build.add_argument("--output-dir", type=Path, help="overrides OUTPUT_DIR")

    sub.add_parser("check", help="validate content without writing anything")

    search = sub.add_parser("search", help="query a published search index")
    search.add_argument("query")
    search.add_argument("--index-url", help="overrides SEARCH_INDEX_URL")
    search.add_argument("--language", choices=["sk", "en"])
    return parser


def _settings(args: argparse.Namespace) -> Settings:
    settings = load_settings()
    updates: dict[str, object] = {}
    if args.content_dir:
        updates["content_dir"] = args.content_dir
    if getattr(args, "output_dir", None):
        updates["output_dir"] = args.output_dir
    return settings.model_copy(update=updates) if updates else settings


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    settings = _settings(args)
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "search":
        index_url = args.index_url or settings.search_index_url
        if not index_url:
            logger.error("No search index URL; set SEARCH_INDEX_URL or pass --index-url")
            return 2
        for result in SearchClient(index_url).search(args.query, language=args.language):
            print(f"{result.title}\n  {result.url}\n  {result.excerpt}")
        return 0

    try:
        if args.command == "check":
            index = load_index(settings)
            logger.info("Content OK: %d published documents", len(index))
        else:
            result = build_site(settings)
            logger.info("Built %d documents into %s", result.documents, result.output_dir)
    except (ContentError, FileNotFoundError) as e:
        logger.error("Build failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
