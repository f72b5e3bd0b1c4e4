from __future__ import annotations

import json
import logging
import time
import unicodedata
from collections.abc import Callable, Iterable
from dataclasses import dataclass

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from film_essays_site.html_head import extract_page_metadata
from film_essays_site.html_text import html_to_text

logger = logging.getLogger(__name__)

SEARCH_INDEX_FILENAME = "search-index.json"
MAX_RESULTS = 5
MIN_QUERY_CHARS = 2
DEBOUNCE_SECONDS = 0.3
EXCERPT_CHARS = 160


class SearchIndexEntry(BaseModel):
    url: str
    title: str
    description: str = ""
    language: str | None = None
    text: str = ""


_INDEX_ADAPTER = TypeAdapter(list[SearchIndexEntry])


@dataclass(frozen=True)
class SearchResult:
    url: str
    title: str
    excerpt: str


@dataclass(frozen=True)
class IndexablePage:
    url: str
    html: str


def build_search_index(pages: Iterable[IndexablePage]) -> list[SearchIndexEntry]:
    """
    Post-process rendered article pages into index entries.

    Title and description come from the page <head>; text from the <article> element.
    """
    entries: list[SearchIndexEntry] = []
    for page in pages:
        meta = extract_page_metadata(page.html)
        entries.append(
            SearchIndexEntry(
                url=page.url,
                title=meta.title or page.url,
                description=meta.description or "",
                language=meta.language,
                text=html_to_text(page.html, root_tag="article"),
            )
        )
    return entries


def dump_search_index(entries: list[SearchIndexEntry]) -> str:
    return json.dumps(
        [e.model_dump() for e in entries],
        ensure_ascii=False,
        separators=(",", ":"),
    )


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text or "")
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def _excerpt(entry: SearchIndexEntry, term: str, *, width: int = EXCERPT_CHARS) -> str:
    text = entry.text or entry.description
    # NFKD folding keeps one base char per source char for Latin scripts, so offsets line up.
    pos = _fold(text).find(term)
    if pos < 0:
        return entry.description or text[:width]
    start = max(0, pos - width // 4)
    end = min(len(text), start + width)
    out = text[start:end].strip()
    if start > 0:
        out = "…" + out
    if end < len(text):
        out = out + "…"
    return out


def query_index(
    entries: Iterable[SearchIndexEntry],
    query: str,
    *,
    limit: int = MAX_RESULTS,
    language: str | None = None,
) -> list[SearchResult]:
    """
    Every query term must occur (case and diacritic insensitive) in the entry.

    Hits are ordered by where they matched: title over description over body text.
    """
    query = (query or "").strip()
    if len(query) < MIN_QUERY_CHARS or limit <= 0:
        return []
    terms = [_fold(t) for t in query.split()]

    scored: list[tuple[int, SearchIndexEntry]] = []
    for entry in entries:
        if language and entry.language and entry.language != language:
            continue
        title = _fold(entry.title)
        description = _fold(entry.description)
        text = _fold(entry.text)
        score = 0
        for term in terms:
            if term in title:
                score += 3
            elif term in description:
                score += 2
            elif term in text:
                score += 1
            else:
                score = 0
                break
        if score:
            scored.append((score, entry))

    scored.sort(key=lambda s: s[0], reverse=True)
    return [
        SearchResult(url=e.url, title=e.title, excerpt=_excerpt(e, terms[0]))
        for _, e in scored[:limit]
    ]


class SearchClient:
    """
    Queries the static search index published with the site.

    The index is fetched once and kept. A fetch or decode failure yields zero results
    and is not retried within the same query.
    """

    def __init__(
        self,
        index_url: str,
        *,
        timeout_s: float = 10.0,
        max_results: int = MAX_RESULTS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if timeout_s <= 0:
            raise ValueError("timeout_s must be > 0")
        self.index_url = index_url
        self.timeout_s = timeout_s
        self.max_results = max_results
        self._transport = transport
        self._entries: list[SearchIndexEntry] | None = None

    def _load(self) -> list[SearchIndexEntry] | None:
        if self._entries is not None:
            return self._entries
        try:
            with httpx.Client(timeout=self.timeout_s, transport=self._transport) as client:
                resp = client.get(self.index_url)
                resp.raise_for_status()
                self._entries = _INDEX_ADAPTER.validate_json(resp.content)
        except (httpx.HTTPError, httpx.InvalidURL, ValidationError) as e:
            logger.warning("Search index unavailable at %s: %s", self.index_url, e)
            return None
        return self._entries

    def search(self, query: str, *, language: str | None = None) -> list[SearchResult]:
        if len((query or "").strip()) < MIN_QUERY_CHARS:
            return []
        entries = self._load()
        if not entries:
            return []
        return query_index(entries, query, limit=self.max_results, language=language)


class QueryDebouncer:
    """
    Holds back a query until input has been quiet for `delay` seconds.

    Every push() restarts the timer; ready() hands out the pending query once.
    """

    def __init__(self, delay: float = DEBOUNCE_SECONDS, *, clock: Callable[[], float] = time.monotonic) -> None:
        self.delay = delay
        self._clock = clock
        self._pending: str | None = None
        self._deadline = 0.0

    def push(self, query: str) -> None:
        self._pending = query
        self._deadline = self._clock() + self.delay

    def ready(self) -> str | None:
        if self._pending is None or self._clock() < self._deadline:
            return None
        query, self._pending = self._pending, None
        if len(query.strip()) < MIN_QUERY_CHARS:
            return None
        return query


SEARCH_SCRIPT = """\
(function () {
  var input = document.getElementById("search-input");
  var list = document.getElementById("search-results");
  if (!input || !list) return;
  var index = null, timer = null;
  var lang = document.documentElement.lang;
  function fold(s) { return (s || "").normalize("NFKD").replace(/[\\u0300-\\u036f]/g, "").toLowerCase(); }
  function load() {
    if (index) return Promise.resolve(index);
    return fetch(input.dataset.index).then(function (r) {
      if (!r.ok) throw new Error(r.status);
      return r.json();
    }).then(function (data) { index = data; return data; }).catch(function () { return []; });
  }
  function run(q) {
    var terms = fold(q).split(/\\s+/).filter(Boolean);
    load().then(function (entries) {
      var scored = [];
      entries.forEach(function (e, i) {
        if (lang && e.language && e.language !== lang) return;
        var title = fold(e.title), desc = fold(e.description), text = fold(e.text), score = 0;
        for (var k = 0; k < terms.length; k++) {
          var t = terms[k];
          if (title.indexOf(t) >= 0) score += 3;
          else if (desc.indexOf(t) >= 0) score += 2;
          else if (text.indexOf(t) >= 0) score += 1;
          else return;
        }
        scored.push({ score: score, pos: i, entry: e });
      });
      // title > description > body; equal scores keep index order
      scored.sort(function (a, b) { return b.score - a.score || a.pos - b.pos; });
      var hits = scored.slice(0, 5).map(function (s) { return s.entry; });
      list.innerHTML = "";
      hits.forEach(function (e) {
        var li = document.createElement("li"), a = document.createElement("a");
        a.href = e.url; a.textContent = e.title; li.appendChild(a);
        var p = document.createElement("p"); p.textContent = e.description; li.appendChild(p);
        list.appendChild(li);
      });
      if (!hits.length) { var none = document.createElement("li"); none.textContent = input.dataset.empty; list.appendChild(none); }
    });
  }
  input.addEventListener("input", function () {
    clearTimeout(timer);
    var q = input.value.trim();
    if (q.length < 2) { list.innerHTML = ""; return; }
    timer = setTimeout(function () { run(q); }, 300);
  });
})();
"""
