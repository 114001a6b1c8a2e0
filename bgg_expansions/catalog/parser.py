"""
Parsing of BGG XML API 2 payloads into typed records.

The collection and thing endpoints describe the same things in different shapes:
collection items carry the id in ``objectid`` and the name as element text, while
thing items use ``id`` and a ``value`` attribute on ``<name type="primary">``.
All of that is handled here so the rest of the package only sees models.
"""

import logging
import xml.etree.ElementTree as ET
from typing import List, Optional

from ..error_handling import MalformedResponse
from ..models import BoardGame, CollectionGame, Link

logger = logging.getLogger(__name__)


def _parse_root(xml_text: str, path: Optional[str]) -> ET.Element:
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise MalformedResponse(f"Invalid XML from BGG: {e}", path) from e

    # BGG reports bad usernames and similar problems as <errors><error><message>
    if root.tag in ("errors", "error"):
        messages = [m.text.strip() for m in root.iter("message") if m.text and m.text.strip()]
        detail = "; ".join(messages) or "unknown error"
        raise MalformedResponse(f"BGG returned an error: {detail}", path)

    if root.tag != "items":
        raise MalformedResponse(f"Unexpected root element <{root.tag}>, expected <items>", path)
    return root


def _parse_id(raw: Optional[str], path: Optional[str]) -> int:
    try:
        item_id = int(raw)
    except (TypeError, ValueError):
        raise MalformedResponse(f"Invalid item id {raw!r}", path) from None
    if item_id <= 0:
        raise MalformedResponse(f"Invalid item id {raw!r}", path)
    return item_id


def _parse_year(raw: Optional[str]) -> Optional[int]:
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def parse_collection(xml_text: str, path: Optional[str] = None) -> List[CollectionGame]:
    """
    Parse a ``/collection`` response.

    Args:
        xml_text: Response body
        path: Request path, used in error messages

    Returns:
        List of collection entries in document order
    """
    root = _parse_root(xml_text, path)

    games = []
    for item in root.findall("item"):
        item_id = _parse_id(item.get("objectid"), path)

        name = item.find("name")
        name = name.text.strip() if name is not None and name.text else ""

        year = item.find("yearpublished")
        year = _parse_year(year.text) if year is not None else None

        status = item.find("status")
        owned = status is not None and status.get("own") == "1"

        games.append(CollectionGame(id=item_id, name=name, year=year, owned=owned))

    logger.debug(f"Parsed {len(games)} collection items")
    return games


def parse_things(xml_text: str, path: Optional[str] = None) -> List[BoardGame]:
    """
    Parse a ``/thing`` response, including every link of every item.

    Args:
        xml_text: Response body
        path: Request path, used in error messages

    Returns:
        List of games in document order
    """
    root = _parse_root(xml_text, path)

    games = []
    for item in root.findall("item"):
        item_id = _parse_id(item.get("id"), path)

        name = item.find('name[@type="primary"]')
        if name is None:
            name = item.find("name")
        name = name.get("value", "") if name is not None else ""

        year = item.find("yearpublished")
        year = _parse_year(year.get("value")) if year is not None else None

        links = []
        for link in item.findall("link"):
            links.append(Link(
                id=_parse_id(link.get("id"), path),
                type=link.get("type", ""),
                value=link.get("value", ""),
            ))

        games.append(BoardGame(id=item_id, name=name, year=year, links=tuple(links)))

    logger.debug(f"Parsed {len(games)} thing items")
    return games
