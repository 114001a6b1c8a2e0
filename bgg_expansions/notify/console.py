"""
Console report of unowned expansions.
"""

import sys
from typing import Optional, TextIO

from ..models import ReconciliationResult
from .base import Notifier


class ConsoleNotifier(Notifier):
    """Prints one line per unowned expansion."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def notify(self, result: ReconciliationResult) -> None:
        stream = self.stream or sys.stdout
        for entry in result.games:
            for expansion in entry.expansions:
                year = expansion.year if expansion.year is not None else "unknown"
                print(
                    f'Game "{entry.game.name}" has a new expansion "{expansion.name}" available "{year}"',
                    file=stream,
                )
