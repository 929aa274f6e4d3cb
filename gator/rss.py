"""Fetching and parsing RSS feeds."""

from __future__ import annotations

import html
import urllib.error
import urllib.request
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

USER_AGENT = "gator"
DEFAULT_TIMEOUT = 10.0


@dataclass
class RSSItem:
    """One entry of a feed."""

    title: str = ""
    link: str = ""
    description: str = ""
    pub_date: str = ""


@dataclass
class RSSFeed:
    """A feed's channel and its items."""

    title: str = ""
    link: str = ""
    description: str = ""
    items: list[RSSItem] = field(default_factory=list)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _text(element: ET.Element) -> str:
    """Character data directly inside ``element``, skipping nested elements."""
    return (element.text or "") + "".join(child.tail or "" for child in element)


_ITEM_FIELDS = {"title": "title", "link": "link", "description": "description", "pubDate": "pub_date"}
_CHANNEL_FIELDS = {"title": "title", "link": "link", "description": "description"}


def _parse_item(element: ET.Element) -> RSSItem:
    item = RSSItem()
    for child in element:
        name = _ITEM_FIELDS.get(_local(child.tag))
        if name is not None:
            setattr(item, name, _text(child))
    item.title = html.unescape(item.title)
    item.description = html.unescape(item.description)
    return item


def parse_feed(data: bytes | str) -> RSSFeed:
    """Parse an RSS document; titles and descriptions are HTML-unescaped."""
    try:
        root = ET.fromstring(data)
    except ET.ParseError as err:
        raise ValueError(f"invalid feed XML: {err}") from err

    feed = RSSFeed()
    for channel in (child for child in root if _local(child.tag) == "channel"):
        for element in channel:
            tag = _local(element.tag)
            if tag == "item":
                feed.items.append(_parse_item(element))
            elif tag in _CHANNEL_FIELDS:
                setattr(feed, _CHANNEL_FIELDS[tag], _text(element))
    feed.title = html.unescape(feed.title)
    feed.description = html.unescape(feed.description)
    return feed


def fetch_feed(feed_url: str, timeout: float = DEFAULT_TIMEOUT) -> RSSFeed:
    """Download ``feed_url`` and parse it, whatever the response status."""
    request = urllib.request.Request(feed_url, headers={"User-Agent": USER_AGENT})
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            data = response.read()
    except urllib.error.HTTPError as err:
        try:
            data = err.read()
        finally:
            err.close()
    return parse_feed(data)