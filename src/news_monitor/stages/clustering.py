"""Near-duplicate headline clustering."""

import logging
import re
import unicodedata

from rapidfuzz import fuzz

from news_monitor.core.entities import Cluster, ScoredArticle

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.75


def _canonical_title(title: str, source: str = "") -> str:
    text = unicodedata.normalize("NFKC", title or "").strip()
    # Search feeds append the publisher: "<headline> - <source>"
    if source:
        source_name = unicodedata.normalize("NFKC", source).strip()
        text = re.sub(r"\s+[-|]\s+" + re.escape(source_name) + r"$", "", text)
    text = text.casefold()
    return "".join(ch for ch in text if not unicodedata.category(ch).startswith(("P", "Z", "C")))


def title_similarity(title_a: str, title_b: str, source_a: str = "", source_b: str = "") -> float:
    """Indel-normalized similarity of two headlines, in [0, 1]."""
    canonical_a = _canonical_title(title_a, source_a)
    canonical_b = _canonical_title(title_b, source_b)
    if not canonical_a or not canonical_b:
        # Nothing left to compare once punctuation is gone
        return 1.0 if (title_a or "").strip() == (title_b or "").strip() else 0.0
    if canonical_a == canonical_b:
        return 1.0
    return fuzz.ratio(canonical_a, canonical_b) / 100.0


def build_clusters(
    articles: list[ScoredArticle],
    similarity_threshold: float = DEFAULT_THRESHOLD,
    debug: bool = False,
) -> list[Cluster]:
    """
    Greedy single-linkage grouping in input order.

    Each article is compared with the current representative of every open
    cluster and joins the first one at or above the threshold. A member with
    a strictly higher combined score takes over as representative.

    Args:
        articles: Articles to group, usually already ranked
        similarity_threshold: Merge threshold in (0, 1]
        debug: Log every merge with its similarity

    Returns:
        Clusters in the order their first member appeared

    Raises:
        ValueError: If the threshold is outside (0, 1]
    """
    if not 0.0 < similarity_threshold <= 1.0:
        raise ValueError(f"similarity_threshold must be in (0, 1], got {similarity_threshold}")

    representatives: list[ScoredArticle] = []
    members: list[list[str]] = []

    for article in articles:
        joined = False
        for index, representative in enumerate(representatives):
            similarity = title_similarity(
                article.title, representative.title, article.source, representative.source
            )
            if similarity < similarity_threshold:
                continue
            members[index].append(article.id)
            if article.combined_score > representative.combined_score:
                representatives[index] = article
            if debug:
                logger.debug(
                    "cluster.merge: sim=%.3f %r -> %r (rep=%r)",
                    similarity,
                    article.title,
                    representative.title,
                    representatives[index].title,
                )
            joined = True
            break
        if not joined:
            representatives.append(article)
            members.append([article.id])

    return [
        Cluster(representative=representative, member_ids=tuple(member_ids))
        for representative, member_ids in zip(representatives, members)
    ]


def cluster_articles(
    articles: list[ScoredArticle],
    similarity_threshold: float = DEFAULT_THRESHOLD,
    debug: bool = False,
) -> list[ScoredArticle]:
    """One representative per cluster, in cluster order."""
    if not articles:
        return []
    clusters = build_clusters(articles, similarity_threshold=similarity_threshold, debug=debug)
    merged = sum(len(cluster.member_ids) - 1 for cluster in clusters)
    logger.info(
        "cluster: clusters=%d merged=%d (thr=%.2f)",
        len(clusters),
        merged,
        similarity_threshold,
    )
    return [cluster.representative for cluster in clusters]
