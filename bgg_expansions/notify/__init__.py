"""
Notifiers for delivering reconciliation reports.

This module handles:
- Printing unowned expansions to the console
- Rendering and sending the email digest
"""

from .base import Notifier
from .console import ConsoleNotifier
from .email import EmailNotifier

__all__ = [
    "Notifier",
    "ConsoleNotifier",
    "EmailNotifier",
]
