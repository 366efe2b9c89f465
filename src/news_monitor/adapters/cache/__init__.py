"""Cache adapters for per-keyword results."""

from news_monitor.adapters.cache.file_cache import FileCacheStore, NullCacheStore

__all__ = ["FileCacheStore", "NullCacheStore"]
