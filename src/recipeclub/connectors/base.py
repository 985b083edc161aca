"""Shared response and error types for outbound service connectors."""

from dataclasses import dataclass
from typing import Any


@dataclass
class ConnectorResponse:
    """Standardized response from connector API calls."""

    data: Any
    status_code: int
    headers: dict[str, str]
    raw_response: dict[str, Any] | list[Any] | None = None

    @property
    def is_success(self) -> bool:
        """Check if response indicates success."""
        return 200 <= self.status_code < 300


class ConnectorError(Exception):
    """Raised when an outbound service call fails at the transport or HTTP level."""

    def __init__(self, message: str, status_code: int | None = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response
