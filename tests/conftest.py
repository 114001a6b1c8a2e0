"""Shared pytest fixtures for BGG expansion tracker tests."""

from typing import Dict, List, Optional, Sequence, Tuple
from unittest.mock import MagicMock

import pytest

from bgg_expansions.models import BoardGame, CollectionGame, ItemType, Link


def make_response(status_code: int = 200, text: str = "") -> MagicMock:
    """Fake requests.Response with just the fields the client reads."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    return response


def collection_xml(items: Sequence[Tuple[int, str, Optional[int], bool]]) -> str:
    """Build a /collection body from (id, name, year, owned) tuples."""
    rows = []
    for item_id, name, year, owned in items:
        year_xml = f"<yearpublished>{year}</yearpublished>" if year is not None else ""
        rows.append(
            f'<item objecttype="thing" objectid="{item_id}" subtype="boardgame" collid="9{item_id}">'
            f'<name sortindex="1">{name}</name>{year_xml}'
            f'<status own="{1 if owned else 0}" prevowned="0" fortrade="0" want="0" '
            f'wanttoplay="0" wanttobuy="0" wishlist="0" preordered="0" lastmodified="2023-01-01 10:00:00"/>'
            f'<numplays>0</numplays></item>'
        )
    return (
        f'<?xml version="1.0" encoding="utf-8" standalone="yes"?>'
        f'<items totalitems="{len(items)}" termsofuse="https://boardgamegeek.com/xmlapi/termsofuse">'
        f'{"".join(rows)}</items>'
    )


def things_xml(items: Sequence[Tuple[int, str, int, Sequence[Tuple[str, int, str]]]],
               item_type: str = "boardgame") -> str:
    """Build a /thing body from (id, name, year, [(link type, link id, link value)]) tuples."""
    rows = []
    for item_id, name, year, links in items:
        links_xml = "".join(
            f'<link type="{link_type}" id="{link_id}" value="{value}"/>'
            for link_type, link_id, value in links
        )
        rows.append(
            f'<item type="{item_type}" id="{item_id}">'
            f'<thumbnail>https://cf.geekdo-images.com/thumb.jpg</thumbnail>'
            f'<name type="primary" sortindex="1" value="{name}"/>'
            f'<name type="alternate" sortindex="1" value="{name} (alt)"/>'
            f'<yearpublished value="{year}"/>{links_xml}</item>'
        )
    return (
        f'<?xml version="1.0" encoding="utf-8"?>'
        f'<items termsofuse="https://boardgamegeek.com/xmlapi/termsofuse">{"".join(rows)}</items>'
    )


class FakeCatalogClient:
    """In-memory stand-in for BGGCatalogClient used by reconciliation tests."""

    def __init__(self, owned_games: List[CollectionGame], things: Dict[int, BoardGame],
                 owned_expansions: List[CollectionGame]):
        self.owned_games = owned_games
        self.things = things
        self.owned_expansions = owned_expansions
        self.calls = []

    def fetch_collection(self, username, include=None, exclude=None):
        self.calls.append(("collection", username, include, exclude))
        if include == ItemType.EXPANSION:
            return list(self.owned_expansions)
        return list(self.owned_games)

    def fetch_items(self, ids, item_type):
        ids = list(ids)
        self.calls.append(("thing", ids, item_type))
        return [self.things[item_id] for item_id in ids if item_id in self.things]


def expansion_link(item_id: int, value: str) -> Link:
    return Link(id=item_id, type=ItemType.EXPANSION.value, value=value)


@pytest.fixture
def session():
    """A mock requests.Session whose get() returns queued responses."""
    return MagicMock()


@pytest.fixture
def catalog_data():
    """Two owned games: A links expansions X and Y, B links Z; the user owns X."""
    game_a = BoardGame(id=1, name="Game A", year=2015, links=(
        expansion_link(101, "Expansion X"),
        Link(id=5001, type="boardgamecategory", value="Economic"),
        expansion_link(102, "Expansion Y"),
    ))
    game_b = BoardGame(id=2, name="Game B", year=2018, links=(
        expansion_link(201, "Expansion Z"),
        Link(id=2040, type="boardgamemechanic", value="Hand Management"),
    ))
    things = {
        1: game_a,
        2: game_b,
        101: BoardGame(id=101, name="Expansion X", year=2016),
        102: BoardGame(id=102, name="Expansion Y", year=2017),
        201: BoardGame(id=201, name="Expansion Z", year=2019),
    }
    owned_games = [
        CollectionGame(id=1, name="Game A", year=2015, owned=True),
        CollectionGame(id=2, name="Game B", year=2018, owned=True),
    ]
    owned_expansions = [CollectionGame(id=101, name="Expansion X", year=2016, owned=True)]
    return owned_games, things, owned_expansions


@pytest.fixture
def fake_client(catalog_data):
    owned_games, things, owned_expansions = catalog_data
    return FakeCatalogClient(owned_games, things, owned_expansions)
