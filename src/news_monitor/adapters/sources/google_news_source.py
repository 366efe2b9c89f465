"""Google News RSS search source."""

from urllib.parse import quote, urlencode

from news_monitor.adapters.sources.feed_source import (
    DEFAULT_TIMEOUT,
    DEFAULT_TRANSPORTS,
    DEFAULT_USER_AGENT,
    FeedSearchSource,
    FeedTransport,
)

# Locale parameters per search scope
SCOPES = {
    "jp": {"hl": "ja", "gl": "JP", "ceid": "JP:ja"},
    "global": {"hl": "ja", "gl": "US", "ceid": "US:en"},
}


class GoogleNewsSource(FeedSearchSource):
    """Primary source: Google News search feed, reached through proxies if needed."""

    emoji = "🔎"
    name = "Google News"
    default_source_name = "Google News"

    def __init__(
        self,
        negative_terms: tuple[str, ...] | list[str] = (),
        scope: str = "jp",
        transports: tuple[FeedTransport, ...] | list[FeedTransport] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        if scope not in SCOPES:
            raise ValueError(f"Unknown scope {scope!r}, expected one of {sorted(SCOPES)}")
        super().__init__(
            transports=transports or DEFAULT_TRANSPORTS,
            timeout=timeout,
            user_agent=user_agent,
        )
        self.negative_terms = tuple(negative_terms)
        self.scope = scope
        self.base_url = "https://news.google.com/rss/search"

    def build_query(self, keywords: list[str]) -> str:
        query = " OR ".join(keywords)
        if self.negative_terms:
            query += " " + " ".join(f"-{term}" for term in self.negative_terms)
        return query

    def build_feed_url(self, keywords: list[str]) -> str:
        params = {"q": self.build_query(keywords), **SCOPES[self.scope]}
        return f"{self.base_url}?{urlencode(params, quote_via=quote)}"
