"""
API Client module providing centralized access to SpaceTraders API endpoints.
Orchestrates sub-API modules for agent, systems, waypoints, fleet and contract operations.
"""

from api.agent import AgentAPI
from api.contracts import ContractsAPI
from api.errors import MissingTokenError
from api.fleet import FleetAPI
from api.handle_requests import RequestHandler
from api.systems import SystemsAPI
from api.waypoints import WaypointsAPI, system_symbol_for  # noqa: F401

DEFAULT_API_URL = "https://api.spacetraders.io/v2"


class ApiClient:
    """Root client that centralizes sub-APIs and holds shared HTTP/session state."""

    def __init__(
        self,
        agent_key: str | None = None,
        api_url: str = DEFAULT_API_URL,
        account_key: str | None = None,
        timeout: float = 30.0,
    ):
        self.agent_key = agent_key
        self.account_key = account_key
        self.http = RequestHandler(api_url, timeout=timeout)
        self.agent = AgentAPI(self)
        self.systems = SystemsAPI(self)
        self.waypoints = WaypointsAPI(self)
        self.fleet = FleetAPI(self)
        self.contracts = ContractsAPI(self)

    def require_token(self) -> str:
        if not self.agent_key:
            raise MissingTokenError()
        return self.agent_key
