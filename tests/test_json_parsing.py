"""Tests for JSON parsing in Claude scorer."""

import json

import pytest

from news_monitor.adapters.llm import ClaudeScorer
from news_monitor.config import Settings


@pytest.fixture
def claude_scorer() -> ClaudeScorer:
    """Create Claude scorer instance for testing."""
    settings = Settings(anthropic_api_key="test-key")
    return ClaudeScorer(settings)


def test_extract_json_from_markdown(claude_scorer: ClaudeScorer) -> None:
    """Test extracting JSON from markdown code block."""
    text = '```json\n[{"keep": true, "relevance": 0.8}]\n```'
    result = claude_scorer._extract_json(text)
    parsed = json.loads(result)
    assert parsed[0]["keep"] is True
    assert parsed[0]["relevance"] == 0.8


def test_extract_json_from_markdown_without_language(claude_scorer: ClaudeScorer) -> None:
    """Test extracting JSON from markdown code block without language tag."""
    text = '```\n[{"keep": false}]\n```'
    result = claude_scorer._extract_json(text)
    parsed = json.loads(result)
    assert parsed[0]["keep"] is False


def test_extract_json_array_with_prefix(claude_scorer: ClaudeScorer) -> None:
    """Test extracting an array when there's text before and after it."""
    text = '評価結果:\n[{"keep": true, "summary": "要約"}, {"keep": false, "summary": "別"}]\n以上です。'
    result = claude_scorer._extract_json(text)
    parsed = json.loads(result)
    assert len(parsed) == 2
    assert parsed[1]["summary"] == "別"


def test_extract_json_object(claude_scorer: ClaudeScorer) -> None:
    """Test extracting nested JSON object."""
    text = 'Analysis: {"data": {"keep": true}, "score": 0.7}'
    result = claude_scorer._extract_json(text)
    parsed = json.loads(result)
    assert parsed["data"]["keep"] is True


def test_fix_json_trailing_comma(claude_scorer: ClaudeScorer) -> None:
    """Test fixing trailing comma in JSON."""
    text = '{"keep": true, "relevance": 0.8,}'
    result = claude_scorer._fix_json(text)
    parsed = json.loads(result)
    assert parsed["keep"] is True


def test_fix_json_trailing_comma_in_array(claude_scorer: ClaudeScorer) -> None:
    """Test fixing trailing comma in JSON array."""
    text = '[{"keep": true}, {"keep": false},]'
    result = claude_scorer._extract_json(text)
    parsed = json.loads(result)
    assert len(parsed) == 2


def test_extract_json_plain_text_fallback(claude_scorer: ClaudeScorer) -> None:
    """Test fallback for plain text without JSON."""
    text = "This is just plain text"
    result = claude_scorer._extract_json(text)
    assert result == "This is just plain text"


def test_extract_json_with_newlines(claude_scorer: ClaudeScorer) -> None:
    """Test extracting JSON with newlines."""
    text = '''```json
[
  {
    "keep": true,
    "relevance": 0.85,
    "importance": 0.4,
    "summary": "新店舗を開業"
  }
]
```'''
    result = claude_scorer._extract_json(text)
    parsed = json.loads(result)
    assert parsed[0]["relevance"] == 0.85
    assert parsed[0]["summary"] == "新店舗を開業"
