"""
Systems API module for accessing star system information and metadata.
"""
from typing import TYPE_CHECKING

from api.handle_requests import response_data
from data.models.system import System

if TYPE_CHECKING:
    from api.client import ApiClient

class SystemsAPI:
    """Systems endpoints."""

    def __init__(self, client: 'ApiClient'):
        self.client = client

    def list(self, page: int = 1, limit: int = 20) -> list[System]:
        """Fetch a page of systems (GET /systems)."""
        payload = self.client.http.get_json(
            "systems", self.client.require_token(), params={"page": page, "limit": limit}
        )
        return [System.from_dict(s) for s in payload.get("data", [])]

    def get(self, system_symbol: str) -> System:
        """Fetch a single system (GET /systems/{systemSymbol})."""
        payload = self.client.http.get_json(f"systems/{system_symbol}", self.client.require_token())
        return System.from_dict(response_data(payload))
