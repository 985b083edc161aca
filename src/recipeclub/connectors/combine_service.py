"""Connector for the AI-assisted ingredient combination service."""

from collections.abc import Sequence
from typing import Any

import httpx

from recipeclub.config import get_settings
from recipeclub.connectors.base import ConnectorError, ConnectorResponse
from recipeclub.logging_config import get_logger
from recipeclub.schemas import PreCombinedItem

logger = get_logger(__name__)


class CombineServiceConnector:
    """
    Client for the combination service.

    The service receives locally consolidated items and returns a list that
    may merge synonyms the deterministic rules miss. Every call is a single
    attempt; deadlines are the caller's concern.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.base_url = base_url if base_url is not None else settings.combine_service_url
        self.api_key = api_key if api_key is not None else settings.combine_service_api_key
        self.timeout = timeout if timeout is not None else settings.combine_service_timeout
        self.user_agent = settings.user_agent
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def name(self) -> str:
        """Return connector name."""
        return "combine-service"

    @property
    def is_available(self) -> bool:
        """Check if a service URL is configured."""
        return bool(self.base_url)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            headers = {
                "Accept": "application/json",
                "User-Agent": self.user_agent,
            }
            if self.api_key:
                headers["Authorization"] = f"Bearer {self.api_key}"
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(self, payload: dict[str, Any]) -> ConnectorResponse:
        """POST a JSON payload to the service. No retry."""
        if not self.is_available:
            raise ConnectorError("Combination service URL is not configured")

        client = await self._get_client()

        try:
            response = await client.post(self.base_url, json=payload)
        except httpx.HTTPError as e:
            logger.warning(f"Request to {self.name} failed: {e!r}")
            raise ConnectorError(f"Request to {self.name} failed", response=str(e)) from e

        if response.status_code >= 400:
            error_detail = response.text[:500] if response.text else "No details"
            logger.warning(f"API error {response.status_code} from {self.name}: {error_detail}")
            raise ConnectorError(
                f"API request failed with status {response.status_code}",
                status_code=response.status_code,
                response=error_detail,
            )

        try:
            data = response.json() if response.text else {}
        except ValueError as e:
            logger.warning(f"Failed to parse JSON response: {e}")
            data = {}

        return ConnectorResponse(
            data=data,
            status_code=response.status_code,
            headers=dict(response.headers),
            raw_response=data,
        )

    async def combine(self, pre_combined: Sequence[PreCombinedItem]) -> dict[str, Any]:
        """
        Send pre-combined items and return the service's JSON body.

        Args:
            pre_combined: Locally consolidated items.

        Returns:
            The decoded response body, e.g. {"items": [...]} or {"skipped": true}.

        Raises:
            ConnectorError: On transport failure or an HTTP error status.
        """
        payload = {
            "preCombined": [
                item.model_dump(mode="json", by_alias=True) for item in pre_combined
            ]
        }
        logger.debug(f"Sending {len(pre_combined)} items to {self.name}")
        response = await self._request(payload)

        if not isinstance(response.data, dict):
            return {}
        return response.data

    async def health_check(self) -> bool:
        """
        Check if the service answers an empty request.

        Returns:
            True if healthy, False otherwise.
        """
        try:
            await self.combine([])
            return True
        except ConnectorError:
            return False
