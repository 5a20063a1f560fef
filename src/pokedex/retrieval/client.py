"""Upstream catalog client: a single-attempt JSON fetch with typed failures."""

from typing import Any, Dict, Optional

import requests
from pydantic import BaseModel, ConfigDict

from pokedex.config.loader import get_section
from pokedex.errors import FetchError
from pokedex.utils.logging import get_logger

logger = get_logger(__name__)


class FetchOutcome(BaseModel):
    """Tagged result of one upstream request."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    url: str
    ok: bool
    data: Any = None
    error: Optional[FetchError] = None

    def unwrap(self) -> Any:
        """Return the payload or raise the captured FetchError."""
        if not self.ok:
            raise self.error
        return self.data


class UpstreamClient:
    """Fetches raw JSON records from the catalog API.

    No retries: every call is one bounded attempt and callers decide what a
    failure means for them.
    """

    def __init__(
        self,
        upstream_config: Optional[Dict] = None,
        *,
        session: Optional[requests.Session] = None,
    ):
        settings = {**get_section(None, "upstream"), **(upstream_config or {})}
        self.base_url = settings["base_url"].rstrip("/")
        self.timeout = settings["timeout_seconds"]
        self.user_agent = settings["user_agent"]
        self.session = session or requests.Session()
        self.session.headers.update(self._get_headers())

    def _get_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    def index_url(self, limit: int) -> str:
        return f"{self.base_url}/pokemon?limit={limit}"

    def pokemon_url(self, name_or_id: str) -> str:
        return f"{self.base_url}/pokemon/{name_or_id}"

    def fetch_json(self, url: str) -> FetchOutcome:
        """
        Fetch a JSON document.

        Args:
            url: Absolute URL to request

        Returns:
            FetchOutcome with the decoded body, or with a FetchError describing
            a non-success status (status set) or a network/parse failure
            (transport set).
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.debug(f"Transport failure for {url}: {e}")
            return FetchOutcome(
                url=url,
                ok=False,
                error=FetchError(f"Failed to fetch {url}: {e}", url=url, transport=True),
            )

        if not response.ok:
            reason = response.reason or "error"
            logger.debug(f"Upstream returned {response.status_code} for {url}")
            return FetchOutcome(
                url=url,
                ok=False,
                error=FetchError(
                    f"Failed to fetch {url}: {response.status_code} {reason}",
                    url=url,
                    status=response.status_code,
                ),
            )

        try:
            data = response.json()
        except ValueError as e:
            return FetchOutcome(
                url=url,
                ok=False,
                error=FetchError(f"Failed to parse JSON from {url}: {e}", url=url, transport=True),
            )

        return FetchOutcome(url=url, ok=True, data=data)

    def close(self) -> None:
        self.session.close()
