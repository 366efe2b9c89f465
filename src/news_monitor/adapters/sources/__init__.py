"""Source adapters for fetching articles."""

from news_monitor.adapters.sources.feed_source import DEFAULT_TRANSPORTS, FeedSearchSource, FeedTransport
from news_monitor.adapters.sources.google_news_source import GoogleNewsSource
from news_monitor.adapters.sources.news_fetcher import NewsFetcher
from news_monitor.adapters.sources.yahoo_news_source import YahooNewsSource

__all__ = [
    "DEFAULT_TRANSPORTS",
    "FeedSearchSource",
    "FeedTransport",
    "GoogleNewsSource",
    "YahooNewsSource",
    "NewsFetcher",
]
