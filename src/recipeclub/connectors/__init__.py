"""Connectors for outbound service integrations."""

from recipeclub.connectors.base import ConnectorError, ConnectorResponse
from recipeclub.connectors.combine_service import CombineServiceConnector

__all__ = [
    "CombineServiceConnector",
    "ConnectorError",
    "ConnectorResponse",
]
