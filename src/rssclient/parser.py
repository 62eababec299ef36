"""Feed document parsing into sanitized Item records."""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from rssclient.models import Item
from rssclient.protocols import Sanitizer

logger = logging.getLogger(__name__)


@dataclass
class ParsedFeed:
    """Items extracted from one feed document plus any non-fatal errors."""

    items: list[Item] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


# Item field -> child element of <item>, in the order fields are read.
PROPERTIES: dict[str, str] = {
    "title": "title",
    "link": "link",
    "description": "description",
    "author": "author",
    "comments": "comments",
    "enclosure": "enclosure",
    "guid": "guid",
    "pub_date": "pubDate",
    "source": "source",
}


def _element_text(element: ET.Element | None) -> str:
    if element is None:
        return ""
    return "".join(element.itertext())


def _property_text(node: ET.Element, tag: str) -> str:
    """Raw text of the first ``tag`` child of ``node``, ``""`` when absent."""
    element = node.find(tag)
    text = _element_text(element)
    if tag == "enclosure" and element is not None and not text:
        # <enclosure> is normally empty, its target lives in the url attribute
        return element.get("url", "")
    return text


def _build_item(node: ET.Element, sanitizer: Sanitizer, errors: list[str]) -> Item:
    values: dict = {}
    for name, tag in PROPERTIES.items():
        try:
            raw = _property_text(node, tag)
        except Exception as exc:
            errors.append(f"{tag}: {exc}")
            raw = ""
        values[name] = sanitizer.clean(raw)

    categories = []
    for element in node.findall("category"):
        try:
            raw = _element_text(element)
        except Exception as exc:
            errors.append(f"category: {exc}")
            raw = ""
        categories.append(sanitizer.clean(raw))
    values["categories"] = tuple(categories)

    return Item(**values)


def parse_feed(text: str, sanitizer: Sanitizer) -> ParsedFeed:
    """Parse the ``<item>`` elements of a feed document into Items, in document order.

    A document that is not well-formed XML yields no items and a single
    error. A problem reading one property of an item is recorded and the
    property left empty; the item is still returned.
    """
    result = ParsedFeed()
    if text[:1] == "\ufeff":
        text = text[1:]
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        result.errors.append(f"Malformed feed: {exc}")
        return result

    for node in root.iter("item"):
        result.items.append(_build_item(node, sanitizer, result.errors))

    logger.debug("Parsed %d items", len(result.items))
    return result
