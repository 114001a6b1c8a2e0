"""
Base class for report receivers.
"""

from abc import ABC, abstractmethod

from ..models import ReconciliationResult


class Notifier(ABC):
    """Receives the unowned expansions found by a reconciliation run."""

    @abstractmethod
    def notify(self, result: ReconciliationResult) -> None:
        """
        Deliver the report.

        Raises:
            NotificationFailed: If delivery was not possible
        """
        pass
