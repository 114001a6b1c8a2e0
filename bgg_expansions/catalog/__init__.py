"""
Catalog module for reading data from the BoardGameGeek XML API.

This module handles:
- HTTP requests with retry while BGG is processing
- Batched item lookups
- XML parsing into typed records
"""

from .client import BGGCatalogClient
from .parser import parse_collection, parse_things

__all__ = [
    "BGGCatalogClient",
    "parse_collection",
    "parse_things",
]
