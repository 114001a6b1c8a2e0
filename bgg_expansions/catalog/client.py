"""
Client for the BoardGameGeek XML API 2.

BGG answers some requests (collections in particular) with HTTP 202 while it
prepares the data. The client keeps re-issuing the same request until a final
answer arrives or the attempt budget is spent.
"""

import logging
import time
from typing import Iterable, List, Optional, Sequence, Tuple
from urllib.parse import urlencode

import requests

from ..config import (
    BGG_API_BASE_URL,
    DEFAULT_RETRY_MAX_ATTEMPTS,
    DEFAULT_RETRY_WAIT_SECONDS,
    REQUEST_TIMEOUT,
    THING_BATCH_SIZE,
)
from ..error_handling import InvalidArgument, UpstreamUnavailable
from ..models import BoardGame, CollectionGame, ItemType
from ..utils import chunk
from .parser import parse_collection, parse_things

logger = logging.getLogger(__name__)

# "Your request has been accepted and will be processed"
PROCESSING_STATUS = 202


class BGGCatalogClient:
    """
    Reads collections and items from the BGG XML API.
    """

    def __init__(self, base_url: str = BGG_API_BASE_URL, access_token: Optional[str] = None,
                 retry_wait_seconds: float = DEFAULT_RETRY_WAIT_SECONDS,
                 max_attempts: int = DEFAULT_RETRY_MAX_ATTEMPTS,
                 timeout: float = REQUEST_TIMEOUT,
                 session: Optional[requests.Session] = None):
        """
        Initialize the catalog client.

        Args:
            base_url: Root of the XML API (e.g. https://boardgamegeek.com/xmlapi2)
            access_token: Optional bearer token sent with every request
            retry_wait_seconds: Delay before re-issuing a request BGG is still processing
            max_attempts: Maximum number of attempts per request
            timeout: Transport timeout for a single attempt
            session: Optional requests session to use
        """
        if max_attempts < 1:
            raise InvalidArgument(f"max_attempts must be >= 1, got {max_attempts}")
        if retry_wait_seconds < 0:
            raise InvalidArgument(f"retry_wait_seconds must not be negative, got {retry_wait_seconds}")

        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.retry_wait_seconds = retry_wait_seconds
        self.max_attempts = max_attempts
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_collection(self, username: str, include: Optional[ItemType] = None,
                         exclude: Optional[ItemType] = None) -> List[CollectionGame]:
        """
        Get the owned items of a user's collection.

        Args:
            username: BGG username
            include: Only return items of this subtype
            exclude: Leave out items of this subtype

        Returns:
            Collection entries
        """
        params = [("username", username), ("own", "1")]
        if include:
            params.append(("subtype", ItemType(include).value))
        if exclude:
            params.append(("excludesubtype", ItemType(exclude).value))

        path = self._build_path("collection", params)
        games = parse_collection(self._request(path), path)
        logger.info(f"Fetched {len(games)} collection items for '{username}'")
        return games

    def fetch_items(self, ids: Iterable[int], item_type: ItemType) -> List[BoardGame]:
        """
        Get full records, links included, for a list of item ids.

        Ids are requested in batches; any failing batch aborts the whole call.

        Args:
            ids: BGG item ids
            item_type: Item type to request

        Returns:
            Items in the order BGG returned them, batch by batch
        """
        item_type = ItemType(item_type)
        batches = chunk(list(ids), THING_BATCH_SIZE)

        games = []
        for i, batch in enumerate(batches, 1):
            logger.debug(f"Fetching {item_type.value} batch {i}/{len(batches)} ({len(batch)} ids)")
            path = self._build_path("thing", [
                ("id", ",".join(str(item_id) for item_id in batch)),
                ("type", item_type.value),
            ])
            games.extend(parse_things(self._request(path), path))

        logger.info(f"Fetched {len(games)} {item_type.value} items in {len(batches)} request(s)")
        return games

    @staticmethod
    def _build_path(endpoint: str, params: Sequence[Tuple[str, str]]) -> str:
        return f"{endpoint}?{urlencode(params, safe=',')}"

    def _headers(self) -> dict:
        headers = {}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _request(self, path: str) -> str:
        """
        GET a path, re-issuing it while BGG reports that it is still processing.

        Args:
            path: Endpoint path and query string, relative to the base URL

        Returns:
            Body of the first final response

        Raises:
            UpstreamUnavailable: Transport failure or attempts exhausted
        """
        url = f"{self.base_url}/{path}"

        for attempt in range(1, self.max_attempts + 1):
            logger.debug(f"GET {path} (attempt {attempt}/{self.max_attempts})")
            try:
                response = self.session.get(url, headers=self._headers(), timeout=self.timeout)
            except requests.RequestException as e:
                raise UpstreamUnavailable(path, attempt, str(e)) from e

            text = response.text
            if response.status_code != PROCESSING_STATUS and text and text.strip():
                if response.status_code != 200:
                    logger.warning(f"BGG answered {response.status_code} for {path}; parsing body anyway")
                return text

            if attempt < self.max_attempts:
                logger.info(
                    f"BGG is still processing {path} (status {response.status_code}), "
                    f"retrying in {self.retry_wait_seconds}s"
                )
                time.sleep(self.retry_wait_seconds)

        raise UpstreamUnavailable(path, self.max_attempts, "still processing")
