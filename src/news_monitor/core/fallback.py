"""Ordered fallback over interchangeable fetch strategies."""

import logging
from typing import Awaitable, Callable, Optional, Sequence, TypeVar

from news_monitor.core.errors import ExhaustedSourcesFailure, NewsMonitorError, ParseFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")

Attempt = tuple[str, Callable[[], Awaitable[list[T]]]]


async def run_fallback(attempts: Sequence[Attempt], label: str) -> list[T]:
    """Run attempts in order and return the first non-empty result.

    Attempts are awaited one at a time; a later tier only starts after the
    previous one failed or came back empty.

    Args:
        attempts: (name, zero-argument coroutine factory) pairs
        label: Used in log lines and the final error message

    Raises:
        ExhaustedSourcesFailure: When no attempt produced results
    """
    last_error: Optional[BaseException] = None

    for name, attempt in attempts:
        try:
            result = await attempt()
        except NewsMonitorError as e:
            last_error = e
            logger.warning("%s: %s failed: %s", label, name, e)
            continue

        if result:
            logger.info("%s: %s returned %d", label, name, len(result))
            return result

        last_error = ParseFailure(f"{name} returned no results")
        logger.warning("%s: %s returned no results", label, name)

    raise ExhaustedSourcesFailure(f"{label}: all {len(attempts)} attempts failed", last_error)
