"""Parsing of feed payloads into raw feed items.

Two payload shapes are supported: RSS 2.0 / Atom markup, and the JSON
envelope produced by feed-to-JSON aggregators (``{"feed": {...}, "items": [...]}``).
"""

import json
from typing import Any, Optional
from xml.etree import ElementTree as ET

from news_monitor.core.entities import RawFeedItem
from news_monitor.core.errors import ParseFailure


def detect_payload_kind(text: str, content_type: str = "") -> str:
    """Return "json" or "markup"."""
    if "json" in content_type.lower():
        return "json"
    stripped = text.lstrip()
    if stripped.startswith("{") or stripped.startswith("["):
        return "json"
    return "markup"


def parse_payload(text: str, content_type: str = "", default_source: str = "") -> tuple[str, list[RawFeedItem]]:
    """Parse either payload shape.

    Returns:
        Tuple of (feed title, items)

    Raises:
        ParseFailure: On empty, malformed or unrecognized payloads
    """
    if not text or not text.strip():
        raise ParseFailure("Empty payload")

    if detect_payload_kind(text, content_type) == "json":
        return parse_json_envelope(text, default_source)
    return parse_markup(text, default_source)


def parse_json_envelope(text: str, default_source: str = "") -> tuple[str, list[RawFeedItem]]:
    """Parse an aggregator JSON envelope."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseFailure(f"Invalid JSON payload: {e}") from e

    if not isinstance(data, dict):
        raise ParseFailure("JSON payload is not an object")

    if data.get("status") == "error":
        raise ParseFailure(f"Aggregator error: {data.get('message', 'unknown')}")

    entries = data.get("items")
    if not isinstance(entries, list):
        raise ParseFailure("JSON payload has no items list")

    feed = data.get("feed") if isinstance(data.get("feed"), dict) else {}
    source_name = _clean(feed.get("title")) or default_source

    items = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        items.append(RawFeedItem(
            title=_clean(entry.get("title")),
            link=_clean(entry.get("link")),
            guid=_clean(entry.get("guid")),
            description=_clean(entry.get("description")),
            content=_clean(entry.get("content")),
            pub_date=_clean(entry.get("pubDate")),
            pub_date_iso=_clean(entry.get("pubDate_iso")),
            pub_date_tz=_clean(entry.get("pubDate_tz")),
            source=_clean(entry.get("source")) or source_name,
        ))

    return source_name, items


def parse_markup(xml_content: str, default_source: str = "") -> tuple[str, list[RawFeedItem]]:
    """Parse RSS 2.0 or Atom markup."""
    try:
        root = ET.fromstring(xml_content.strip())
    except ET.ParseError as e:
        raise ParseFailure(f"Invalid feed markup: {e}") from e

    root_name = _local_name(root.tag)

    if root_name == "rss":
        channel = _find_child(root, "channel")
        if channel is None:
            raise ParseFailure("RSS document has no channel")
        source_name = _child_text(channel, "title") or default_source
        items = [_parse_rss_item(item, source_name) for item in _find_children(channel, "item")]
        return source_name, items

    if root_name == "feed":
        source_name = _child_text(root, "title") or default_source
        items = [_parse_atom_entry(entry, source_name) for entry in _find_children(root, "entry")]
        return source_name, items

    if root_name == "RDF":
        # RSS 1.0: items are siblings of the channel
        channel = _find_child(root, "channel")
        source_name = (_child_text(channel, "title") if channel is not None else None) or default_source
        items = [_parse_rss_item(item, source_name) for item in _find_children(root, "item")]
        return source_name, items

    raise ParseFailure(f"Unrecognized feed root element: {root_name}")


def _parse_rss_item(item: ET.Element, source_name: str) -> RawFeedItem:
    return RawFeedItem(
        title=_child_text(item, "title"),
        link=_child_text(item, "link"),
        guid=_child_text(item, "guid"),
        description=_child_text(item, "description"),
        content=_child_text(item, "encoded") or _child_text(item, "content"),
        pub_date=_child_text(item, "pubDate"),
        published=_child_text(item, "date"),
        source=_child_text(item, "source") or source_name,
    )


def _parse_atom_entry(entry: ET.Element, source_name: str) -> RawFeedItem:
    link = None
    for link_elem in _find_children(entry, "link"):
        rel = link_elem.get("rel", "alternate")
        if rel == "alternate" and link_elem.get("href"):
            link = link_elem.get("href")
            break

    source = None
    source_elem = _find_child(entry, "source")
    if source_elem is not None:
        source = _child_text(source_elem, "title")

    return RawFeedItem(
        title=_child_text(entry, "title"),
        link=link,
        guid=_child_text(entry, "id"),
        description=_child_text(entry, "summary"),
        content=_child_text(entry, "content"),
        published=_child_text(entry, "published"),
        updated=_child_text(entry, "updated"),
        source=source or source_name,
    )


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1] if "}" in tag else tag


def _find_children(elem: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in elem if _local_name(child.tag) == name]


def _find_child(elem: ET.Element, name: str) -> Optional[ET.Element]:
    for child in elem:
        if _local_name(child.tag) == name:
            return child
    return None


def _child_text(elem: ET.Element, name: str) -> Optional[str]:
    child = _find_child(elem, name)
    if child is None:
        return None
    return _clean("".join(child.itertext()))


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
