"""LLM adapters for scoring articles."""

from news_monitor.adapters.llm.claude_client import ClaudeScorer
from news_monitor.adapters.llm.summaries import FallbackScorer, fallback_summary, shorten_summary

__all__ = ["ClaudeScorer", "FallbackScorer", "fallback_summary", "shorten_summary"]
