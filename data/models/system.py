from dataclasses import dataclass, field
from typing import Any


def orbital_symbols(d: dict[str, Any]) -> list[str]:
    return [o["symbol"] for o in d.get("orbitals", []) or [] if isinstance(o, dict) and "symbol" in o]


@dataclass
class SystemFaction:
    symbol: str


@dataclass
class SystemWaypointRef:
    """Waypoint entry as listed inside a system; no traits or chart."""

    symbol: str
    type: str
    x: int
    y: int
    orbitals: list[str] = field(default_factory=list)
    orbits: str | None = None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "SystemWaypointRef":
        return SystemWaypointRef(
            symbol=d.get("symbol") or "",
            type=d.get("type") or "",
            x=d.get("x", 0),
            y=d.get("y", 0),
            orbitals=orbital_symbols(d),
            orbits=d.get("orbits"),
        )


@dataclass
class System:
    symbol: str
    sectorSymbol: str
    type: str
    x: int
    y: int
    waypoints: list[SystemWaypointRef] = field(default_factory=list)
    factions: list[SystemFaction] = field(default_factory=list)
    name: str | None = None
    constellation: str | None = None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "System":
        # Entries missing a coordinate or type are dropped rather than half-filled
        refs = [
            SystemWaypointRef.from_dict(w)
            for w in d.get("waypoints", []) or []
            if isinstance(w, dict) and all(k in w for k in ("symbol", "type", "x", "y"))
        ]
        return System(
            symbol=d.get("symbol") or "",
            sectorSymbol=d.get("sectorSymbol") or "",
            type=d.get("type", ""),
            x=d.get("x", 0),
            y=d.get("y", 0),
            waypoints=refs,
            factions=[SystemFaction(f["symbol"]) for f in d.get("factions", []) or [] if isinstance(f, dict) and "symbol" in f],
            name=d.get("name"),
            constellation=d.get("constellation"),
        )
