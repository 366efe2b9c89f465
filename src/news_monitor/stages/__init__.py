"""Post-scoring stages: deduplication, clustering, ranking.

Each stage is a pure function over a list of articles that returns a new list.
"""

from news_monitor.stages.clustering import build_clusters, cluster_articles, title_similarity
from news_monitor.stages.dedup import dedup_articles, dedup_by_id, dedup_by_link, dedup_by_title
from news_monitor.stages.ranking import rank_articles, sort_by_pub_date

__all__ = [
    "build_clusters",
    "cluster_articles",
    "title_similarity",
    "dedup_articles",
    "dedup_by_id",
    "dedup_by_link",
    "dedup_by_title",
    "rank_articles",
    "sort_by_pub_date",
]
