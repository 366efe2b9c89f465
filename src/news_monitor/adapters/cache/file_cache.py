"""Result cache stored as individual YAML files."""

import hashlib
import logging
import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Optional

import yaml

from news_monitor.core import CacheFailure, CacheStore

logger = logging.getLogger(__name__)


class FileCacheStore(CacheStore):
    """One YAML file per key, each carrying its own expiry time."""

    def __init__(self, storage_dir: Path) -> None:
        self.storage_dir = Path(storage_dir)

    def get(self, key: str) -> Optional[list[dict[str, Any]]]:
        path = self._get_entry_path(key)
        if not path.exists():
            return None

        entry = self._read_entry(path)

        if self._is_expired(entry):
            logger.debug("cache: expired %s", key)
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                raise CacheFailure(f"Could not remove expired entry {path.name}: {e}") from e
            return None

        records = entry.get("records")
        if not isinstance(records, list):
            raise CacheFailure(f"Cache entry {path.name} has no records list")
        return records

    def put(self, key: str, records: list[dict[str, Any]], ttl: int) -> None:
        now = datetime.now(timezone.utc)
        entry = {
            "key": key,
            "stored_at": now.isoformat(),
            "expires_at": (now + timedelta(seconds=ttl)).isoformat(),
            "count": len(records),
            "records": records,
        }

        path = self._get_entry_path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump(entry, f, allow_unicode=True, default_flow_style=False, sort_keys=False)
        except (OSError, yaml.YAMLError) as e:
            raise CacheFailure(f"Could not write cache entry {path.name}: {e}") from e

    def prune_expired(self) -> int:
        """Remove expired entries.

        Returns:
            Number of entries removed
        """
        if not self.storage_dir.exists():
            return 0

        removed = 0
        for path in self.storage_dir.glob("*.yaml"):
            try:
                entry = self._read_entry(path)
            except CacheFailure as e:
                logger.warning("cache: skipping unreadable entry: %s", e)
                continue
            if self._is_expired(entry):
                path.unlink(missing_ok=True)
                removed += 1

        return removed

    def get_stats(self) -> dict:
        """Get statistics about cached entries."""
        if not self.storage_dir.exists():
            return {"total_entries": 0, "total_records": 0}

        entries = 0
        records = 0
        for path in self.storage_dir.glob("*.yaml"):
            try:
                entry = self._read_entry(path)
            except CacheFailure:
                continue
            entries += 1
            records += int(entry.get("count") or 0)

        return {
            "total_entries": entries,
            "total_records": records,
        }

    def _read_entry(self, path: Path) -> dict:
        try:
            with open(path, "r", encoding="utf-8") as f:
                entry = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise CacheFailure(f"Could not read cache entry {path.name}: {e}") from e

        if not isinstance(entry, dict):
            raise CacheFailure(f"Cache entry {path.name} is not a mapping")
        return entry

    def _is_expired(self, entry: dict) -> bool:
        try:
            expires_at = datetime.fromisoformat(str(entry.get("expires_at")))
        except ValueError as e:
            raise CacheFailure(f"Cache entry has invalid expires_at: {e}") from e
        return expires_at <= datetime.now(timezone.utc)

    def _get_entry_path(self, key: str) -> Path:
        """Get path for a cache entry file."""
        # Create safe filename from key and key hash
        safe_key = re.sub(r'[^\w\s-]', '-', key)
        safe_key = re.sub(r'[-\s]+', '-', safe_key).strip("-")
        safe_key = safe_key[:50]  # Limit length

        # Use key hash for uniqueness
        key_hash = hashlib.md5(key.encode()).hexdigest()[:8]

        return self.storage_dir / f"{safe_key}_{key_hash}.yaml"


class NullCacheStore(CacheStore):
    """Cache that never stores anything."""

    def get(self, key: str) -> Optional[list[dict[str, Any]]]:
        return None

    def put(self, key: str, records: list[dict[str, Any]], ttl: int) -> None:
        pass
