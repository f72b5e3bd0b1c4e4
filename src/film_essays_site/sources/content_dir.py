from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from film_essays_site.errors import SchemaViolation
from film_essays_site.util import slugify

logger = logging.getLogger(__name__)

CONTENT_SUFFIXES = (".md", ".markdown")

_FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)(.*)\Z", re.DOTALL)

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that leaves dates as strings, so the schema validator parses them and names the field."""


_FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass(frozen=True)
class ContentSource:
    path: Path
    slug: str
    front_matter: dict[str, Any]
    body: str


def _is_ignored_path(path: Path, root: Path) -> bool:
    parts = path.relative_to(root).parts
    if not parts:
        return True
    for part in parts:
        if part.startswith((".", "_")):
            return True
    return False


def parse_front_matter(text: str, *, source: Path | str | None = None) -> tuple[dict[str, Any], str]:
    """
    Split a Markdown document into its YAML front matter and body.

    The front matter block must open the file and be delimited by `---` lines.
    """
    text = (text or "").lstrip("\ufeff")
    m = _FRONT_MATTER_RE.match(text)
    if not m:
        raise SchemaViolation("front_matter", "missing front matter block", source=source)
    try:
        meta = yaml.load(m.group(1), Loader=_FrontMatterLoader)
    except (yaml.YAMLError, ValueError) as e:
        raise SchemaViolation("front_matter", f"invalid YAML: {e}", source=source) from e
    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise SchemaViolation("front_matter", "front matter must be a mapping", source=source)
    return {str(k): v for k, v in meta.items()}, m.group(2).strip()


def load_content_source(path: Path) -> ContentSource:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SchemaViolation("front_matter", "not valid UTF-8", source=path) from e
    meta, body = parse_front_matter(text, source=path)
    explicit = meta.pop("slug", None)
    if explicit is not None and not isinstance(explicit, str):
        raise SchemaViolation("slug", "must be a string", source=path)
    slug = slugify(explicit or path.stem)
    if not slug:
        raise SchemaViolation("slug", "cannot derive a slug", source=path)
    return ContentSource(path=path, slug=slug, front_matter=meta, body=body)


def iter_content_sources(root: Path) -> list[ContentSource]:
    """
    Read every authored document below `root`, sorted by path.

    Hidden files and anything under a `.`/`_` prefixed directory are skipped.
    """
    root = Path(root)
    if not root.is_dir():
        raise FileNotFoundError(f"content directory not found: {root}")

    sources: list[ContentSource] = []
    for path in sorted(root.rglob("*")):
        if not path.is_file() or path.suffix.lower() not in CONTENT_SUFFIXES:
            continue
        if _is_ignored_path(path, root):
            continue
        sources.append(load_content_source(path))
    logger.debug("Read %d content files from %s", len(sources), root)
    return sources
