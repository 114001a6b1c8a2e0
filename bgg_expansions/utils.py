"""
Utility functions for the BGG expansion tracker.
"""

import logging
from pathlib import Path
from typing import FrozenSet, List, Optional, Sequence, TypeVar, Union

from .error_handling import InvalidArgument

logger = logging.getLogger(__name__)

T = TypeVar("T")


def chunk(items: Sequence[T], size: int) -> List[List[T]]:
    """
    Split items into ordered batches of at most ``size`` elements.

    Args:
        items: Items to split
        size: Maximum batch length (must be >= 1)

    Returns:
        List of batches; only the last one may be shorter than ``size``
    """
    if isinstance(size, bool) or not isinstance(size, int) or size < 1:
        raise InvalidArgument(f"Batch size must be a positive integer, got {size!r}")

    items = list(items)
    return [items[start:start + size] for start in range(0, len(items), size)]


def load_ignore_list(path: Optional[Union[str, Path]]) -> FrozenSet[str]:
    """
    Load a newline separated list of names to ignore.

    Lines are trimmed; blank lines and lines starting with '#' are skipped.

    Args:
        path: File to read, or None/empty for no list

    Returns:
        Set of names (empty when no path is configured)
    """
    if not path:
        return frozenset()

    file_path = Path(path)
    if not file_path.is_file():
        raise InvalidArgument(f"Ignore list file not found: {file_path}")

    names = set()
    with open(file_path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            names.add(line)

    logger.info(f"Loaded {len(names)} ignored names from {file_path}")
    return frozenset(names)
