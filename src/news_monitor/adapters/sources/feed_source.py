"""Shared machinery for keyword-search feed sources."""

import asyncio
from abc import abstractmethod
from dataclasses import dataclass
from functools import partial
from urllib.parse import quote

import httpx

from news_monitor.adapters.sources.feed_parser import parse_payload
from news_monitor.core import Article, ArticleSource, ParseFailure, TransportFailure
from news_monitor.core.fallback import run_fallback
from news_monitor.core.normalizer import normalize_items
from news_monitor.stages import dedup_by_id, sort_by_pub_date

DEFAULT_TIMEOUT = 8.0

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


@dataclass(frozen=True)
class FeedTransport:
    """A way of reaching a feed URL.

    An empty prefix means a direct request. Otherwise the feed URL is
    percent-encoded and appended to the prefix.
    """

    name: str
    prefix: str = ""

    def wrap(self, feed_url: str) -> str:
        if not self.prefix:
            return feed_url
        return self.prefix + quote(feed_url, safe="")


DIRECT = FeedTransport("direct")

DEFAULT_TRANSPORTS = (
    DIRECT,
    FeedTransport("allorigins", "https://api.allorigins.win/raw?url="),
    FeedTransport("rss2json", "https://api.rss2json.com/v1/api.json?rss_url="),
)


class FeedSearchSource(ArticleSource):
    """Base class for sources that expose search results as a feed.

    Subclasses only build the feed URL; transport fallback, parsing and
    normalization happen here.
    """

    emoji = "📰"
    name = "Feed"
    default_source_name = ""

    def __init__(
        self,
        transports: tuple[FeedTransport, ...] | list[FeedTransport] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.transports = tuple(transports) if transports else (DIRECT,)
        self.timeout = timeout
        self.user_agent = user_agent

    @abstractmethod
    def build_feed_url(self, keywords: list[str]) -> str:
        """Search feed URL for the given keywords."""
        pass

    async def fetch_articles(self, keywords: list[str], category: str) -> list[Article]:
        feed_url = self.build_feed_url(keywords)
        attempts = [
            (transport.name, partial(self._fetch_via, transport, feed_url, category))
            for transport in self.transports
        ]
        return await run_fallback(attempts, f"{self.name}[{category}]")

    async def _fetch_via(self, transport: FeedTransport, feed_url: str, category: str) -> list[Article]:
        url = transport.wrap(feed_url)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                headers={"User-Agent": self.user_agent},
            ) as client:
                # Per-phase httpx timeouts do not bound a slowly trickled body
                response = await asyncio.wait_for(client.get(url), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise TransportFailure(f"{transport.name}: timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise TransportFailure(f"{transport.name}: {e}") from e

        if not 200 <= response.status_code < 300:
            raise TransportFailure(f"{transport.name}: HTTP {response.status_code}")

        text = response.text
        if not text or not text.strip():
            raise ParseFailure(f"{transport.name}: empty response body")

        content_type = response.headers.get("content-type", "")
        source_name, raw_items = parse_payload(text, content_type, self.default_source_name)

        articles = normalize_items(raw_items, category, source_name)
        return sort_by_pub_date(dedup_by_id(articles))
