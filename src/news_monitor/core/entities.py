"""Core domain entities."""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional


@dataclass(frozen=True)
class RawFeedItem:
    """Feed entry as parsed from markup or a JSON envelope.

    Every field is optional; several publish-date fields can be present
    because feeds disagree on where the date lives.
    """

    title: Optional[str] = None
    link: Optional[str] = None
    guid: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    pub_date: Optional[str] = None
    pub_date_iso: Optional[str] = None
    pub_date_tz: Optional[str] = None
    published: Optional[str] = None
    updated: Optional[str] = None
    source: Optional[str] = None


@dataclass(frozen=True)
class Article:
    """Canonical article record."""

    id: str
    title: str
    link: str
    description: str
    pub_date: str
    source: str
    category: str
    fetched_at: str

    def __post_init__(self) -> None:
        if not self.title:
            raise ValueError("Title cannot be empty")
        if not self.link:
            raise ValueError("Link cannot be empty")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ScoredArticle(Article):
    """Article annotated by the scorer."""

    keep: bool = True
    relevance_score: Optional[float] = None
    importance_score: Optional[float] = None
    summary: str = ""

    @property
    def combined_score(self) -> float:
        """Relevance plus importance; missing scores count as zero."""
        return (self.relevance_score or 0.0) + (self.importance_score or 0.0)

    @classmethod
    def from_article(
        cls,
        article: Article,
        keep: bool = True,
        relevance_score: Optional[float] = None,
        importance_score: Optional[float] = None,
        summary: str = "",
    ) -> "ScoredArticle":
        return cls(
            id=article.id,
            title=article.title,
            link=article.link,
            description=article.description,
            pub_date=article.pub_date,
            source=article.source,
            category=article.category,
            fetched_at=article.fetched_at,
            keep=keep,
            relevance_score=relevance_score,
            importance_score=importance_score,
            summary=summary,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScoredArticle":
        """Rebuild from a cached dict; plain Article dicts are accepted too."""
        return cls(
            id=str(data.get("id", "")),
            title=str(data.get("title", "")),
            link=str(data.get("link", "")),
            description=str(data.get("description", "")),
            pub_date=str(data.get("pub_date", "")),
            source=str(data.get("source", "")),
            category=str(data.get("category", "")),
            fetched_at=str(data.get("fetched_at", "")),
            keep=bool(data.get("keep", True)),
            relevance_score=_optional_float(data.get("relevance_score")),
            importance_score=_optional_float(data.get("importance_score")),
            summary=str(data.get("summary") or ""),
        )


@dataclass(frozen=True)
class Cluster:
    """Articles judged to report the same event, collapsed to one representative."""

    representative: ScoredArticle
    member_ids: tuple[str, ...]


@dataclass(frozen=True)
class KeywordFailure:
    """Diagnostic for a keyword that contributed no articles."""

    keyword: str
    stage: str
    error: str


@dataclass
class PipelineResult:
    """Output of a pipeline run."""

    articles: list[ScoredArticle]
    partial_failures: list[KeywordFailure]
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "articles": [article.to_dict() for article in self.articles],
            "partial_failures": [asdict(failure) for failure in self.partial_failures],
            "updated_at": self.updated_at.isoformat(),
        }


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
