from typing import TYPE_CHECKING, Any, Dict, List

from api.errors import InvalidSymbolError
from api.handle_requests import response_data
from data.enums import WaypointTraitType
from data.models.waypoints import Waypoint

if TYPE_CHECKING:
    from api.client import ApiClient


def system_symbol_for(waypoint_symbol: str) -> str:
    """'X1-DF55-20250Z' -> 'X1-DF55'."""
    parts = waypoint_symbol.split("-")
    if len(parts) < 3 or not all(parts):
        raise InvalidSymbolError(waypoint_symbol)
    return f"{parts[0]}-{parts[1]}"


class WaypointsAPI:
    """Waypoints endpoints."""

    def __init__(self, client: 'ApiClient'):
        self.client = client

    def list(
        self,
        system_symbol: str,
        *,
        page: int = 1,
        limit: int = 20,
        traits: WaypointTraitType | None = None,
        type: str | None = None,
    ) -> List[Waypoint]:
        """
        Fetch a page of waypoints for a system.
        GET /v2/systems/{systemSymbol}/waypoints
        """
        query: Dict[str, Any] = {"page": page, "limit": limit}
        if traits is not None:
            query["traits"] = traits.value
        if type:
            query["type"] = type
        payload = self.client.http.get_json(
            f"systems/{system_symbol}/waypoints",
            self.client.require_token(),
            params=query,
        )
        return [Waypoint.from_dict(w) for w in payload.get("data", [])]

    def get(self, waypoint_symbol: str) -> Waypoint:
        """
        Fetch waypoint details for a single waypoint; the system is derived from the symbol.
        GET /v2/systems/{systemSymbol}/waypoints/{waypointSymbol}
        """
        system_symbol = system_symbol_for(waypoint_symbol)
        payload = self.client.http.get_json(
            f"systems/{system_symbol}/waypoints/{waypoint_symbol}",
            self.client.require_token(),
        )
        return Waypoint.from_dict(response_data(payload))

    def get_market(self, waypoint_symbol: str) -> Dict[str, Any]:
        """GET /v2/systems/{systemSymbol}/waypoints/{waypointSymbol}/market"""
        system_symbol = system_symbol_for(waypoint_symbol)
        payload = self.client.http.get_json(
            f"systems/{system_symbol}/waypoints/{waypoint_symbol}/market",
            self.client.require_token(),
        )
        return response_data(payload)

    def get_shipyard(self, waypoint_symbol: str) -> Dict[str, Any]:
        """GET /v2/systems/{systemSymbol}/waypoints/{waypointSymbol}/shipyard"""
        system_symbol = system_symbol_for(waypoint_symbol)
        payload = self.client.http.get_json(
            f"systems/{system_symbol}/waypoints/{waypoint_symbol}/shipyard",
            self.client.require_token(),
        )
        return response_data(payload)
