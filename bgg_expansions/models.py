"""
Shared data models for the BGG Expansions package.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class ItemType(str, Enum):
    """BGG item subtypes understood by the collection and thing endpoints."""
    BOARD_GAME = "boardgame"
    EXPANSION = "boardgameexpansion"


# Link type marking "this item has expansion X"
EXPANSION_LINK_TYPE = ItemType.EXPANSION.value


@dataclass(frozen=True)
class CollectionGame:
    """One entry of a user's collection."""
    id: int
    name: str
    year: Optional[int] = None
    owned: bool = False


@dataclass(frozen=True)
class Link:
    """Typed cross-reference from one catalog item to another."""
    id: int
    type: str
    value: str


@dataclass(frozen=True)
class BoardGame:
    """Full catalog item (game or expansion) with its links."""
    id: int
    name: str
    year: Optional[int] = None
    links: Tuple[Link, ...] = ()

    def expansion_links(self) -> List[Link]:
        return [link for link in self.links if link.type == EXPANSION_LINK_TYPE]


@dataclass
class GameWithExpansions:
    """A base game and the expansions for it that the user does not own."""
    game: BoardGame
    expansions: List[BoardGame] = field(default_factory=list)


@dataclass
class ReconciliationResult:
    """Outcome of one reconciliation run."""
    games: List[GameWithExpansions] = field(default_factory=list)

    @property
    def unowned_count(self) -> int:
        return sum(len(entry.expansions) for entry in self.games)
