"""
BGG Expansions Package - find BoardGameGeek expansions you do not own yet.

This package provides:
1. A client for the BoardGameGeek XML API with retry while requests are processed
2. Reconciliation of owned games against their expansions
3. Console and email reports of unowned expansions
"""

__version__ = "0.1.0"
__author__ = "BGG Expansions Team"

# Main package imports for convenience
from .catalog import BGGCatalogClient
from .models import BoardGame, CollectionGame, GameWithExpansions, ItemType, Link, ReconciliationResult
from .reconcile import ExpansionReconciler
from .logging_config import setup_logging

__all__ = [
    "BGGCatalogClient",
    "ExpansionReconciler",
    "BoardGame",
    "CollectionGame",
    "GameWithExpansions",
    "ItemType",
    "Link",
    "ReconciliationResult",
    "setup_logging",
]
