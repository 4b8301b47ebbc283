"""
Contracts API module: list, accept, deliver against and fulfill faction contracts.
"""
from typing import TYPE_CHECKING

from api.handle_requests import response_data
from data.models.contract import Contract

if TYPE_CHECKING:
    from api.client import ApiClient


class ContractsAPI:
    """Contract endpoints."""

    def __init__(self, client: "ApiClient"):
        self.client = client

    def list(self, page: int = 1, limit: int = 20) -> list[Contract]:
        """Fetch contracts (GET /my/contracts)."""
        payload = self.client.http.get_json(
            "my/contracts", self.client.require_token(), params={"page": page, "limit": limit}
        )
        return [Contract.from_dict(c) for c in payload.get("data", [])]

    def get(self, contract_id: str) -> Contract:
        """Fetch one contract (GET /my/contracts/{contractId})."""
        payload = self.client.http.get_json(f"my/contracts/{contract_id}", self.client.require_token())
        return Contract.from_dict(response_data(payload))

    def accept(self, contract_id: str) -> Contract:
        """Accept a contract (POST /my/contracts/{contractId}/accept)."""
        payload = self.client.http.post_json(f"my/contracts/{contract_id}/accept", self.client.require_token())
        return Contract.from_dict(response_data(payload, "contract"))

    def deliver(self, contract_id: str, ship_symbol: str, trade_symbol: str, units: int) -> Contract:
        """Deliver cargo towards a contract (POST /my/contracts/{contractId}/deliver)."""
        body = {"shipSymbol": ship_symbol, "tradeSymbol": trade_symbol, "units": units}
        payload = self.client.http.post_json(
            f"my/contracts/{contract_id}/deliver", self.client.require_token(), json=body
        )
        return Contract.from_dict(response_data(payload, "contract"))

    def fulfill(self, contract_id: str) -> Contract:
        """Fulfill a contract (POST /my/contracts/{contractId}/fulfill)."""
        payload = self.client.http.post_json(f"my/contracts/{contract_id}/fulfill", self.client.require_token())
        return Contract.from_dict(response_data(payload, "contract"))
