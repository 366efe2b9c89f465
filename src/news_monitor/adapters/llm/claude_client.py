"""Claude API client for article scoring and summarization."""

import asyncio
import json
import logging
import re
from typing import Any

import httpx

from news_monitor.adapters.llm.summaries import shorten_summary
from news_monitor.config import Settings
from news_monitor.core import Article, ArticleScorer, ScoredArticle, ScorerFailure

logger = logging.getLogger(__name__)

DESCRIPTION_CHARS = 500


class ClaudeScorer(ArticleScorer):
    """Scores articles in small batches through the Claude Messages API."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.api_key = settings.anthropic_api_key
        self.model = settings.claude.model
        self.max_tokens = settings.claude.max_tokens
        self.temperature = settings.claude.temperature
        self.base_url = "https://api.anthropic.com/v1"
        self.max_retries = settings.claude.max_retries
        self.initial_retry_delay = settings.claude.initial_retry_delay
        self.request_delay = settings.claude.request_delay
        self.batch_size = max(1, settings.claude.batch_size)
        self._last_request_time = 0.0

    async def evaluate(self, articles: list[Article], keyword: str) -> list[ScoredArticle]:
        """Score articles in batches, preserving input order.

        Raises:
            ScorerFailure: When any batch fails or comes back malformed
        """
        results: list[ScoredArticle] = []

        for start in range(0, len(articles), self.batch_size):
            batch = articles[start:start + self.batch_size]
            results.extend(await self._evaluate_batch(batch, keyword))

        return results

    async def _evaluate_batch(self, batch: list[Article], keyword: str) -> list[ScoredArticle]:
        prompt_template = self.settings.prompts.scoring.get("user", "")
        system_prompt = self.settings.prompts.scoring.get("system", "")

        articles_data = [
            {
                "title": article.title,
                "description": article.description[:DESCRIPTION_CHARS],
                "source": article.source,
            }
            for article in batch
        ]

        prompt = prompt_template.format(
            keyword=keyword,
            count=len(batch),
            articles_json=json.dumps(articles_data, ensure_ascii=False, indent=2),
        )

        try:
            response = await self._call_api(prompt=prompt, system=system_prompt)
        except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as e:
            raise ScorerFailure(f"Claude request failed: {type(e).__name__}: {e}") from e

        json_text = self._extract_json(response)

        try:
            data = json.loads(json_text)
        except json.JSONDecodeError as e:
            logger.warning("Claude returned invalid JSON: %s", response[:250])
            raise ScorerFailure(f"Invalid JSON in reply: {e}") from e

        return self._build_results(batch, data)

    def _build_results(self, batch: list[Article], data: Any) -> list[ScoredArticle]:
        """Validate the reply and pair it with the batch by position."""
        if isinstance(data, dict) and isinstance(data.get("articles"), list):
            data = data["articles"]

        if not isinstance(data, list):
            raise ScorerFailure(f"Expected a JSON array, got {type(data).__name__}")

        if len(data) != len(batch):
            raise ScorerFailure(f"Expected {len(batch)} results, got {len(data)}")

        results = []
        for position, (article, entry) in enumerate(zip(batch, data)):
            if not isinstance(entry, dict):
                raise ScorerFailure(f"Result {position} is not an object")

            keep = entry.get("keep")
            summary = entry.get("summary")
            if not isinstance(keep, bool):
                raise ScorerFailure(f"Result {position}: 'keep' must be a boolean")
            if not isinstance(summary, str):
                raise ScorerFailure(f"Result {position}: 'summary' must be a string")

            results.append(ScoredArticle.from_article(
                article,
                keep=keep,
                relevance_score=self._score(entry, "relevance", position),
                importance_score=self._score(entry, "importance", position),
                summary=shorten_summary(summary),
            ))

        return results

    def _score(self, entry: dict, key: str, position: int) -> float:
        value = entry.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ScorerFailure(f"Result {position}: '{key}' must be a number")
        return min(1.0, max(0.0, float(value)))

    async def _call_api(self, prompt: str, system: str) -> str:
        """Call Claude API with retry logic and rate limiting."""
        # Rate limiting: ensure minimum delay between requests
        current_time = asyncio.get_event_loop().time()
        time_since_last_request = current_time - self._last_request_time
        if time_since_last_request < self.request_delay:
            await asyncio.sleep(self.request_delay - time_since_last_request)

        last_exception = None

        for attempt in range(self.max_retries):
            try:
                async with httpx.AsyncClient(timeout=60.0) as client:
                    response = await client.post(
                        f"{self.base_url}/messages",
                        headers={
                            "x-api-key": self.api_key,
                            "anthropic-version": "2023-06-01",
                            "content-type": "application/json",
                        },
                        json={
                            "model": self.model,
                            "max_tokens": self.max_tokens,
                            "temperature": self.temperature,
                            "system": system,
                            "messages": [
                                {"role": "user", "content": prompt}
                            ],
                        },
                    )

                    self._last_request_time = asyncio.get_event_loop().time()

                    # Success case
                    if response.status_code == 200:
                        data = response.json()
                        return data["content"][0]["text"]

                    # Rate limit - retry with backoff
                    if response.status_code == 429:
                        retry_after = self._get_retry_delay(response, attempt)
                        logger.warning(
                            "Rate limit hit, retrying after %.1fs (attempt %d/%d)",
                            retry_after, attempt + 1, self.max_retries,
                        )
                        await asyncio.sleep(retry_after)
                        continue

                    # Server errors - retry with backoff
                    if response.status_code >= 500:
                        retry_delay = self.initial_retry_delay * (2 ** attempt)
                        logger.warning("Server error %d, retrying after %.1fs", response.status_code, retry_delay)
                        await asyncio.sleep(retry_delay)
                        continue

                    # Other errors are not retried
                    raise ScorerFailure(f"Claude API returned HTTP {response.status_code}")

            except httpx.RequestError as e:
                last_exception = e
                if attempt < self.max_retries - 1:
                    retry_delay = self.initial_retry_delay * (2 ** attempt)
                    logger.warning("Network error, retrying after %.1fs: %s", retry_delay, e)
                    await asyncio.sleep(retry_delay)
                    continue
                raise

        # If we exhausted all retries
        if last_exception:
            raise last_exception
        raise ScorerFailure(f"Claude API still failing after {self.max_retries} attempts")

    def _get_retry_delay(self, response: httpx.Response, attempt: int) -> float:
        """Calculate retry delay from response headers or use exponential backoff."""
        # Check for Retry-After header
        retry_after = response.headers.get("retry-after")
        if retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass

        # Exponential backoff
        return self.initial_retry_delay * (2 ** attempt)

    def _fix_json(self, text: str) -> str:
        """Try to fix common JSON issues."""
        # Remove trailing commas before } or ]
        text = re.sub(r',(\s*[}\]])', r'\1', text)
        return text

    def _extract_json(self, text: str) -> str:
        """Extract JSON from markdown code block or raw text."""
        # Strategy 1: JSON in markdown code block
        code_block_match = re.search(r'```(?:json)?\s*\n(.*?)\n```', text, re.DOTALL)
        if code_block_match:
            return self._fix_json(code_block_match.group(1).strip())

        # Strategy 2: outermost array, since replies are one entry per article
        start, end = text.find("["), text.rfind("]")
        if start != -1 and end > start:
            candidate = self._fix_json(text[start:end + 1])
            try:
                json.loads(candidate)
                return candidate
            except json.JSONDecodeError:
                pass

        # Strategy 3: outermost object
        start, end = text.find("{"), text.rfind("}")
        if start != -1 and end > start:
            candidate = self._fix_json(text[start:end + 1])
            try:
                json.loads(candidate)
                return candidate
            except json.JSONDecodeError:
                pass

        # Strategy 4: Return as is (last resort)
        return self._fix_json(text.strip())
