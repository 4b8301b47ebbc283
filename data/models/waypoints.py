from dataclasses import dataclass, field

from data.enums import WaypointTraitType
from data.models.system import orbital_symbols


@dataclass
class WaypointTrait:
    symbol: str
    name: str | None = None
    description: str | None = None

    @staticmethod
    def from_dict(d: dict) -> "WaypointTrait":
        return WaypointTrait(symbol=d.get("symbol") or "", name=d.get("name"), description=d.get("description"))


@dataclass
class WaypointFactionRef:
    symbol: str


@dataclass
class WaypointChart:
    waypointSymbol: str | None = None
    submittedBy: str | None = None
    submittedOn: str | None = None


@dataclass
class Waypoint:
    """A location inside a system: planet, moon, asteroid, station, gate."""

    symbol: str
    systemSymbol: str
    type: str
    x: int
    y: int
    orbitals: list[str] = field(default_factory=list)
    orbits: str | None = None
    faction: WaypointFactionRef | None = None
    traits: list[WaypointTrait] = field(default_factory=list)
    chart: WaypointChart | None = None
    isUnderConstruction: bool | None = None

    def has_trait(self, trait: WaypointTraitType | str) -> bool:
        value = trait.value if isinstance(trait, WaypointTraitType) else trait
        return any(t.symbol == value for t in self.traits)

    @staticmethod
    def from_dict(d: dict) -> "Waypoint":
        return Waypoint(
            symbol=d.get("symbol") or "",
            systemSymbol=d.get("systemSymbol") or "",
            type=d.get("type") or "",
            x=d.get("x", 0),
            y=d.get("y", 0),
            orbitals=orbital_symbols(d),
            orbits=d.get("orbits"),
            faction=(
                WaypointFactionRef(symbol=d["faction"]["symbol"])
                if isinstance(d.get("faction"), dict) and "symbol" in d["faction"]
                else None
            ),
            traits=[
                WaypointTrait.from_dict(t) for t in d.get("traits", []) or [] if isinstance(t, dict) and "symbol" in t
            ],
            chart=(
                WaypointChart(
                    waypointSymbol=d["chart"].get("waypointSymbol"),
                    submittedBy=d["chart"].get("submittedBy"),
                    submittedOn=d["chart"].get("submittedOn"),
                )
                if isinstance(d.get("chart"), dict)
                else None
            ),
            isUnderConstruction=d.get("isUnderConstruction"),
        )
