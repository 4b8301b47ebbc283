"""
Fleet API module for ship control operations including navigation, extraction, and trading.
"""

from typing import TYPE_CHECKING

from api.handle_requests import response_data
from data.enums import ShipNavFlightMode
from data.models.ship import Ship, ShipCargo, ShipNav

if TYPE_CHECKING:
    from api.client import ApiClient


class FleetAPI:
    """Fleet endpoints."""

    def __init__(self, client: "ApiClient"):
        self.client = client

    def list(self, page: int | None = None, limit: int | None = None, all_pages: bool = False) -> list[Ship]:
        """Fetch fleet list (GET /my/ships) with optional pagination."""
        token = self.client.require_token()
        if all_pages:
            items = self.client.http.get_all_pages("my/ships", token, limit=limit or 20)
            return [Ship.from_dict(s) for s in items]
        params: dict = {}
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        payload = self.client.http.get_json("my/ships", token, params=(params or None))
        return [Ship.from_dict(s) for s in payload.get("data", [])]

    def get(self, ship_symbol: str) -> Ship:
        """Fetch a single ship (GET /my/ships/{shipSymbol})."""
        payload = self.client.http.get_json(f"my/ships/{ship_symbol}", self.client.require_token())
        return Ship.from_dict(response_data(payload))

    def orbit(self, ship_symbol: str) -> ShipNav:
        """Orbit a ship (POST /my/ships/{shipSymbol}/orbit)."""
        payload = self.client.http.post_json(f"my/ships/{ship_symbol}/orbit", self.client.require_token())
        return ShipNav.from_dict(response_data(payload, "nav"))

    def dock(self, ship_symbol: str) -> ShipNav:
        """Dock a ship (POST /my/ships/{shipSymbol}/dock)."""
        payload = self.client.http.post_json(f"my/ships/{ship_symbol}/dock", self.client.require_token())
        return ShipNav.from_dict(response_data(payload, "nav"))

    def navigate(self, ship_symbol: str, waypoint_symbol: str) -> dict:
        """Navigate a ship to a waypoint (POST /my/ships/{shipSymbol}/navigate)."""
        body = {"waypointSymbol": waypoint_symbol}
        payload = self.client.http.post_json(
            f"my/ships/{ship_symbol}/navigate", self.client.require_token(), json=body
        )
        return response_data(payload)

    def set_flight_mode(self, ship_symbol: str, mode: ShipNavFlightMode) -> ShipNav:
        """Set ship flight mode (PATCH /my/ships/{shipSymbol}/nav)."""
        body = {"flightMode": mode.value}
        payload = self.client.http.patch_json(f"my/ships/{ship_symbol}/nav", self.client.require_token(), json=body)
        data = response_data(payload)
        # The endpoint has answered both with a bare nav object and with {"nav": ...}
        return ShipNav.from_dict(data.get("nav", data))

    def refuel(self, ship_symbol: str, units: int | None = None, from_cargo: bool | None = None) -> dict:
        """Refuel a ship (POST /my/ships/{shipSymbol}/refuel)."""
        body: dict = {}
        if units is not None:
            body["units"] = units
        if from_cargo is not None:
            body["fromCargo"] = from_cargo
        payload = self.client.http.post_json(
            f"my/ships/{ship_symbol}/refuel", self.client.require_token(), json=(body or None)
        )
        return response_data(payload)

    def extract(self, ship_symbol: str) -> dict:
        """Extract resources (POST /my/ships/{shipSymbol}/extract)."""
        payload = self.client.http.post_json(f"my/ships/{ship_symbol}/extract", self.client.require_token())
        return response_data(payload)

    def get_cargo(self, ship_symbol: str) -> ShipCargo:
        """Get ship cargo (GET /my/ships/{shipSymbol}/cargo)."""
        payload = self.client.http.get_json(f"my/ships/{ship_symbol}/cargo", self.client.require_token())
        return ShipCargo.from_dict(response_data(payload))

    def sell(self, ship_symbol: str, symbol: str, units: int) -> dict:
        """Sell cargo (POST /my/ships/{shipSymbol}/sell)."""
        body = {"symbol": symbol, "units": units}
        payload = self.client.http.post_json(f"my/ships/{ship_symbol}/sell", self.client.require_token(), json=body)
        return response_data(payload)
