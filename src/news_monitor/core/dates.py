"""Date helpers."""

from datetime import datetime, timezone, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from dateutil.parser import parse as parse_date

# Abbreviations seen in RSS pubDate values
TZINFOS = {
    "JST": timezone(timedelta(hours=9)),
    "GMT": timezone.utc,
    "UTC": timezone.utc,
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
}

CACHE_TIMEZONE = "Asia/Tokyo"


def parse_pub_date(value: Optional[str]) -> Optional[datetime]:
    """Best-effort parse of a feed date; naive values are taken as UTC.

    Returns None instead of raising on anything unparseable.
    """
    if not value or not value.strip():
        return None
    try:
        parsed = parse_date(value.strip(), tzinfos=TZINFOS)
    except (ValueError, OverflowError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def date_key(moment: Optional[datetime] = None, tz_name: str = CACHE_TIMEZONE) -> str:
    """YYYY-MM-DD of moment in the cache timezone."""
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(ZoneInfo(tz_name)).strftime("%Y-%m-%d")


def cache_key(keyword: str, day: Optional[str] = None, tz_name: str = CACHE_TIMEZONE) -> str:
    """Cache key for a keyword's articles: news:<keyword>:<date>."""
    return f"news:{keyword.strip().lower()}:{day or date_key(tz_name=tz_name)}"
