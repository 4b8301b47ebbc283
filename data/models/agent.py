from dataclasses import dataclass, field
from typing import Any

from data.enums import Faction
from data.models.contract import Contract
from data.models.ship import Ship
from data.models.waypoints import WaypointTrait


@dataclass
class Agent:
    """A player account: callsign, home waypoint and wallet."""

    accountId: str | None
    symbol: str
    headquarters: str
    credits: int = 0
    startingFaction: str | None = None
    shipCount: int = 0

    @property
    def headquarters_system(self) -> str:
        return "-".join(self.headquarters.split("-")[:2])

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Agent":
        return Agent(
            accountId=d.get("accountId"),
            symbol=d.get("symbol", ""),
            headquarters=d.get("headquarters", ""),
            credits=d.get("credits", 0),
            startingFaction=d.get("startingFaction"),
            shipCount=d.get("shipCount", 0),
        )


@dataclass
class FactionInfo:
    symbol: Faction | str
    name: str | None = None
    description: str | None = None
    headquarters: str | None = None
    traits: list[WaypointTrait] = field(default_factory=list)
    isRecruiting: bool | None = None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "FactionInfo":
        symbol_value = d.get("symbol", "")
        symbol = Faction(symbol_value) if symbol_value in Faction.__members__ else symbol_value
        return FactionInfo(
            symbol=symbol,
            name=d.get("name"),
            description=d.get("description"),
            headquarters=d.get("headquarters"),
            traits=[WaypointTrait.from_dict(t) for t in d.get("traits", []) or [] if isinstance(t, dict)],
            isRecruiting=d.get("isRecruiting"),
        )


@dataclass
class Registration:
    """Everything the server hands back when a new agent is created."""

    token: str
    agent: Agent
    contract: Contract | None = None
    faction: FactionInfo | None = None
    ships: list[Ship] = field(default_factory=list)

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Registration":
        # Older API revisions returned a single starting ship.
        ships_payload = d.get("ships")
        if ships_payload is None:
            ships_payload = [d["ship"]] if isinstance(d.get("ship"), dict) else []
        return Registration(
            token=d.get("token") or "",
            agent=Agent.from_dict(d.get("agent", {}) or {}),
            contract=Contract.from_dict(d["contract"]) if isinstance(d.get("contract"), dict) else None,
            faction=FactionInfo.from_dict(d["faction"]) if isinstance(d.get("faction"), dict) else None,
            ships=[Ship.from_dict(s) for s in ships_payload if isinstance(s, dict)],
        )


@dataclass
class ErrorResponse:
    message: str
    code: int
    data: dict[str, Any] | None = None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "ErrorResponse":
        return ErrorResponse(
            message=d.get("message", ""),
            code=d.get("code", 0),
            data=d.get("data") if isinstance(d.get("data"), dict) else None,
        )
