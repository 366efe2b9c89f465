"""News monitor: keyword news ingestion, scoring and ranking."""

__version__ = "0.1.0"
