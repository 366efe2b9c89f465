"""Digest renderers."""

from news_monitor.adapters.digest.markdown_generator import MarkdownDigestGenerator

__all__ = ["MarkdownDigestGenerator"]
