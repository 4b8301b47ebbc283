"""
Agent API module for accessing player account information and registering new agents.
"""
import logging
from typing import TYPE_CHECKING

from api.errors import InvalidResponseError
from api.handle_requests import response_data
from data.enums import Faction
from data.models.agent import Agent, Registration

if TYPE_CHECKING:
    from api.client import ApiClient

class AgentAPI:
    """Agent endpoints."""

    def __init__(self, client: 'ApiClient'):
        self.client = client

    def get(self) -> Agent:
        """Fetch current agent details (GET /my/agent)."""
        payload = self.client.http.get_json("my/agent", self.client.require_token())
        return Agent.from_dict(response_data(payload))

    def register(self, symbol: str, faction: Faction) -> Registration:
        """
        Register a new agent (POST /register).
        Authenticates with the account token when one is configured; the new
        agent token replaces the client's current one.
        """
        body = {"symbol": symbol, "faction": faction.value}
        payload = self.client.http.post_json("register", self.client.account_key, json=body)
        registration = Registration.from_dict(response_data(payload))
        if not registration.token:
            raise InvalidResponseError(None, "registration response carries no token")
        self.client.agent_key = registration.token
        logging.info(f"Registered agent {registration.agent.symbol} ({faction.value})")
        return registration
