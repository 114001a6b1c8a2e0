"""
Reconciliation of a user's owned games against the expansions that exist for them.
"""

import logging
from typing import AbstractSet, Dict, List, Optional, Sequence, Tuple

from .catalog import BGGCatalogClient
from .error_handling import safe_execute
from .models import BoardGame, CollectionGame, GameWithExpansions, ItemType, ReconciliationResult
from .notify import Notifier

logger = logging.getLogger(__name__)


class ExpansionReconciler:
    """
    Finds expansions of owned games that the user does not own yet.
    """

    def __init__(self, client: BGGCatalogClient, username: str,
                 game_ignore: Optional[AbstractSet[str]] = None,
                 expansion_ignore: Optional[AbstractSet[str]] = None,
                 notifiers: Sequence[Notifier] = ()):
        """
        Initialize the reconciler.

        Args:
            client: Catalog client used for every request
            username: BGG user whose collection is checked
            game_ignore: Base game names to skip
            expansion_ignore: Expansion names never to report
            notifiers: Receivers of the report when something is found
        """
        self.client = client
        self.username = username
        self.game_ignore = frozenset(game_ignore or ())
        self.expansion_ignore = frozenset(expansion_ignore or ())
        self.notifiers = list(notifiers)

    def filter_games(self, games: List[CollectionGame]) -> List[CollectionGame]:
        """
        Apply the game ignore list.

        With an ignore list configured only owned games not on the list survive;
        without one every entry is kept.
        """
        if not self.game_ignore:
            return list(games)

        kept = []
        for game in games:
            if not game.owned:
                logger.debug(f"Skipping '{game.name}' - not flagged as owned")
            elif game.name in self.game_ignore:
                logger.info(f"Ignoring game '{game.name}'")
            else:
                kept.append(game)
        return kept

    def map_expansions(self, games: List[BoardGame]) -> Tuple[List[int], Dict[int, BoardGame]]:
        """
        Collect candidate expansion ids from the games' links.

        When two games link the same expansion the first game seen owns it.

        Returns:
            Tuple of (expansion ids in discovery order, expansion id -> owning game)
        """
        expansion_ids = []
        owners = {}
        for game in games:
            for link in game.expansion_links():
                if link.value in self.expansion_ignore:
                    logger.info(f"Ignoring expansion '{link.value}' of '{game.name}'")
                    continue
                if link.id in owners:
                    if owners[link.id].id != game.id:
                        logger.debug(
                            f"Expansion {link.id} also linked from '{game.name}', "
                            f"keeping '{owners[link.id].name}'"
                        )
                    continue
                owners[link.id] = game
                expansion_ids.append(link.id)
        return expansion_ids, owners

    def reconcile(self) -> ReconciliationResult:
        """
        Run the fetch and diff pipeline.

        Returns:
            Unowned expansions grouped by owning game
        """
        logger.info(f"Checking expansions for games owned by '{self.username}'")

        collection = self.client.fetch_collection(
            self.username, include=ItemType.BOARD_GAME, exclude=ItemType.EXPANSION
        )
        owned_games = self.filter_games(collection)
        logger.info(f"{len(owned_games)} owned games to check (from {len(collection)} in collection)")

        games = self.client.fetch_items([game.id for game in owned_games], ItemType.BOARD_GAME)
        expansion_ids, owners = self.map_expansions(games)
        logger.info(f"Found {len(expansion_ids)} candidate expansions")

        candidates = self.client.fetch_items(expansion_ids, ItemType.EXPANSION)
        candidates_by_id = {}
        for expansion in candidates:
            candidates_by_id.setdefault(expansion.id, expansion)

        owned_expansions = self.client.fetch_collection(self.username, include=ItemType.EXPANSION)
        owned_expansion_ids = {expansion.id for expansion in owned_expansions if expansion.owned}
        logger.info(f"User owns {len(owned_expansion_ids)} expansions")

        groups: Dict[int, GameWithExpansions] = {}
        for expansion_id in expansion_ids:
            if expansion_id in owned_expansion_ids:
                continue
            expansion = candidates_by_id.get(expansion_id)
            if expansion is None:
                logger.debug(f"Expansion {expansion_id} was not returned by BGG, skipping")
                continue
            owner = owners[expansion_id]
            if owner.id not in groups:
                groups[owner.id] = GameWithExpansions(game=owner)
            groups[owner.id].expansions.append(expansion)

        result = ReconciliationResult(games=list(groups.values()))
        logger.info(f"Found {result.unowned_count} unowned expansions across {len(result.games)} games")
        return result

    def run(self) -> ReconciliationResult:
        """
        Reconcile and hand any findings to the notifiers.

        A notifier that fails is logged; the others still run.
        """
        result = self.reconcile()
        if result.unowned_count == 0:
            logger.info("Nothing found - every expansion is already owned")
            return result

        for notifier in self.notifiers:
            safe_execute(
                notifier.notify, result,
                error_msg=f"Notification via {type(notifier).__name__} failed",
            )
        return result
