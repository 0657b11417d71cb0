"""
Search engine strategies - implement ISearchEngine.

Each engine renders a professional-network-scoped query through the headless
browser and pulls profile candidates out of the result page. The browser only
loads pages and captures raw HTML; all parsing is done in Python with
BeautifulSoup, so result-page layout changes only touch the extraction rules.
"""

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple
from urllib.parse import parse_qs, quote_plus, unquote, urlparse

from bs4 import BeautifulSoup, Tag

from ..domain.entities.search_candidate import PROFILE_NETWORK_DOMAIN, SearchCandidate
from ..domain.interfaces.i_browser_gateway import (
    NAVIGATION_TIMEOUT_SECONDS,
    IBrowserGateway,
)
from ..domain.interfaces.i_search_engine import ISearchEngine

logger = logging.getLogger(__name__)

_PROFILE_RE = re.compile(
    r"https?://(?:[a-z]{2,3}\.)?linkedin\.com/in/([^/?#&\s\"']+)", re.IGNORECASE
)

# Query parameters that search engines use to wrap the real target URL
_REDIRECT_PARAMS = ("q", "uddg", "u", "url")


@dataclass(frozen=True)
class ExtractionRules:
    """
    Ordered CSS selectors per field. The first selector that matches wins,
    so several page layouts of the same engine can be tolerated.
    """

    containers: Tuple[str, ...]
    titles: Tuple[str, ...]
    snippets: Tuple[str, ...]


def _decode_bing_target(value: str) -> Optional[str]:
    # Bing click-tracking links carry the target as "a1" + urlsafe base64
    if not value.startswith("a1"):
        return None
    payload = value[2:]
    payload += "=" * (-len(payload) % 4)
    try:
        return base64.urlsafe_b64decode(payload).decode("utf-8", errors="ignore")
    except (binascii.Error, ValueError):
        return None


def canonical_profile_url(href: str) -> Optional[str]:
    """
    Return https://www.linkedin.com/in/<slug> if `href` points at a profile,
    directly or through a search engine redirect wrapper. Otherwise None.
    """
    if not href:
        return None

    targets = [href]
    for key in _REDIRECT_PARAMS:
        for value in parse_qs(urlparse(href).query).get(key, []):
            targets.append(value)
            decoded = _decode_bing_target(value)
            if decoded:
                targets.append(decoded)

    for target in targets:
        match = _PROFILE_RE.search(unquote(target))
        if match:
            slug = match.group(1).rstrip("/.")
            if slug:
                return f"https://www.{PROFILE_NETWORK_DOMAIN}/in/{slug}"
    return None


def _first_text(root: Tag, selectors: Tuple[str, ...]) -> str:
    for selector in selectors:
        el = root.select_one(selector)
        if el is not None:
            text = el.get_text(" ", strip=True)
            if text:
                return text
    return ""


class ResultPageEngine(ISearchEngine):
    """
    Base strategy: build the engine URL, render it, extract candidates.
    Subclasses only declare `name`, `search_url` and `rules`.
    """

    name = "engine"
    search_url = ""
    rules = ExtractionRules(containers=(), titles=(), snippets=())

    def __init__(
        self,
        browser: IBrowserGateway,
        timeout_seconds: float = NAVIGATION_TIMEOUT_SECONDS,
    ):
        self.browser = browser
        self.timeout_seconds = timeout_seconds

    def build_url(self, query: str) -> str:
        return self.search_url.format(query=quote_plus(query))

    async def attempt(self, query: str) -> List[SearchCandidate]:
        url = self.build_url(query)
        logger.debug(f"[Search] {self.name}: navigating to {url}")
        html = await self.browser.fetch_html(url, timeout_seconds=self.timeout_seconds)
        candidates = self.extract_candidates(html)
        logger.info(f"[Search] {self.name}: {len(candidates)} profile candidate(s)")
        return candidates

    def extract_candidates(self, html: str) -> List[SearchCandidate]:
        soup = BeautifulSoup(html or "", "html.parser")
        candidates: List[SearchCandidate] = []
        seen = set()

        for anchor in soup.find_all("a", href=True):
            url = canonical_profile_url(anchor["href"])
            if not url or url in seen:
                continue
            seen.add(url)

            container = self._resolve_container(anchor)
            title = _first_text(container, self.rules.titles) or anchor.get_text(" ", strip=True)
            snippet = _first_text(container, self.rules.snippets)
            candidates.append(SearchCandidate(title=title, url=url, snippet=snippet))

        return candidates

    def _resolve_container(self, anchor: Tag) -> Tag:
        """Nearest enclosing result block, trying each known layout in order."""
        for selector in self.rules.containers:
            container = anchor.css.closest(selector)
            if container is not None:
                return container
        return anchor.parent if isinstance(anchor.parent, Tag) else anchor


class GoogleEngine(ResultPageEngine):
    name = "google"
    search_url = "https://www.google.com/search?q={query}&num=10&hl=en"
    rules = ExtractionRules(
        containers=("div.g", "div.MjjYud", "div[data-hveid]", "div[data-sokoban-container]"),
        titles=("h3", "div[role='heading']"),
        snippets=("div.VwiC3b", "div[data-sncf]", "span.aCOpRe", "div.IsZvec"),
    )


class BingEngine(ResultPageEngine):
    name = "bing"
    search_url = "https://www.bing.com/search?q={query}&setlang=en"
    rules = ExtractionRules(
        containers=("li.b_algo", "div.b_algo", "li.b_ans"),
        titles=("h2", "div.b_title"),
        snippets=("div.b_caption p", "p.b_lineclamp2", "p.b_lineclamp3", "p.b_lineclamp4", "p"),
    )


class DuckDuckGoEngine(ResultPageEngine):
    name = "duckduckgo"
    search_url = "https://html.duckduckgo.com/html/?q={query}"
    rules = ExtractionRules(
        containers=("article[data-testid='result']", "div.result", "div.web-result", "li[data-layout='organic']"),
        titles=("h2", "a.result__a"),
        snippets=("div[data-result='snippet']", "a.result__snippet", "div.result__snippet"),
    )


def default_engines(browser: IBrowserGateway) -> List[ISearchEngine]:
    """Engines in fallback priority order."""
    return [GoogleEngine(browser), BingEngine(browser), DuckDuckGoEngine(browser)]
