"""Core domain layer."""

from news_monitor.core.entities import (
    Article,
    Cluster,
    KeywordFailure,
    PipelineResult,
    RawFeedItem,
    ScoredArticle,
)
from news_monitor.core.errors import (
    CacheFailure,
    ExhaustedSourcesFailure,
    NewsMonitorError,
    ParseFailure,
    ScorerFailure,
    TransportFailure,
)
from news_monitor.core.interfaces import ArticleScorer, ArticleSource, CacheStore, DigestGenerator
from news_monitor.core.vocabulary import Vocabulary, load_vocabulary

__all__ = [
    "Article",
    "ScoredArticle",
    "RawFeedItem",
    "Cluster",
    "KeywordFailure",
    "PipelineResult",
    "NewsMonitorError",
    "TransportFailure",
    "ParseFailure",
    "ExhaustedSourcesFailure",
    "ScorerFailure",
    "CacheFailure",
    "ArticleSource",
    "ArticleScorer",
    "CacheStore",
    "DigestGenerator",
    "Vocabulary",
    "load_vocabulary",
]
