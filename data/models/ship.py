from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, TypeVar

from data.enums import ShipNavFlightMode, ShipNavStatus, ShipRole

E = TypeVar("E", bound=Enum)


def _enum_or(enum_cls: type[E], value: Any, default: E | None = None) -> E | None:
    if not isinstance(value, str):
        return default
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _known_fields(cls, d: dict[str, Any] | None) -> dict[str, Any]:
    """Keep only the keys of ``d`` that are fields of ``cls``; the API adds keys over time."""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in (d or {}).items() if k in names}


@dataclass
class ShipRegistration:
    name: str | None
    factionSymbol: str | None
    role: ShipRole | None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "ShipRegistration":
        return ShipRegistration(name=d.get("name"), factionSymbol=d.get("factionSymbol"), role=_enum_or(ShipRole, d.get("role")))


@dataclass
class ShipNavRouteWaypoint:
    symbol: str | None = None
    type: str | None = None
    systemSymbol: str | None = None
    x: int | None = None
    y: int | None = None


@dataclass
class ShipNavRoute:
    departure: ShipNavRouteWaypoint | None
    destination: ShipNavRouteWaypoint | None
    departureTime: str | None
    arrival: str | None


@dataclass
class ShipNav:
    systemSymbol: str | None
    waypointSymbol: str | None
    route: ShipNavRoute | None
    status: ShipNavStatus | None
    flightMode: ShipNavFlightMode = ShipNavFlightMode.CRUISE

    @staticmethod
    def from_dict(nav_dict: dict[str, Any]) -> "ShipNav":
        route_dict = nav_dict.get("route") or {}
        route = None
        if route_dict:
            # "departure" was renamed to "origin" by the API
            origin = route_dict.get("origin") or route_dict.get("departure")
            route = ShipNavRoute(
                departure=ShipNavRouteWaypoint(**_known_fields(ShipNavRouteWaypoint, origin)),
                destination=ShipNavRouteWaypoint(**_known_fields(ShipNavRouteWaypoint, route_dict.get("destination"))),
                departureTime=route_dict.get("departureTime"),
                arrival=route_dict.get("arrival"),
            )

        return ShipNav(
            systemSymbol=nav_dict.get("systemSymbol"),
            waypointSymbol=nav_dict.get("waypointSymbol"),
            route=route,
            status=_enum_or(ShipNavStatus, nav_dict.get("status")),
            flightMode=_enum_or(ShipNavFlightMode, nav_dict.get("flightMode"), ShipNavFlightMode.CRUISE),
        )


@dataclass
class ShipCrew:
    current: int = 0
    capacity: int = 0
    required: int = 0
    rotation: str | None = None
    morale: int = 0
    wages: int = 0


@dataclass
class ShipComponent:
    """Frame, reactor, module or mount; the type-specific numbers live in ``extra``."""

    symbol: str | None
    name: str | None = None
    description: str | None = None
    condition: float | None = None
    requirements: dict[str, int] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    _BASE_KEYS = ("symbol", "name", "description", "condition", "requirements")

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "ShipComponent":
        return ShipComponent(
            symbol=d.get("symbol"),
            name=d.get("name"),
            description=d.get("description"),
            condition=d.get("condition"),
            requirements=dict(d.get("requirements", {}) or {}),
            extra={k: v for k, v in d.items() if k not in ShipComponent._BASE_KEYS},
        )


@dataclass
class ShipEngine:
    symbol: str | None = None
    name: str | None = None
    description: str | None = None
    speed: int | None = None


@dataclass
class ShipFuel:
    current: int = 0
    capacity: int = 0


@dataclass
class ShipCooldown:
    totalSeconds: int = 0
    remainingSeconds: int = 0
    expiration: str | None = None


@dataclass
class ShipCargoItem:
    symbol: str
    name: str | None = None
    description: str | None = None
    units: int = 0


@dataclass
class ShipCargo:
    capacity: int = 0
    units: int = 0
    inventory: list[ShipCargoItem] = field(default_factory=list)

    @property
    def free(self) -> int:
        return max(0, self.capacity - self.units)

    @staticmethod
    def from_dict(cargo_dict: dict[str, Any]) -> "ShipCargo":
        inventory = [
            ShipCargoItem(**_known_fields(ShipCargoItem, item))
            for item in cargo_dict.get("inventory", []) or []
            if isinstance(item, dict) and "symbol" in item
        ]
        return ShipCargo(capacity=cargo_dict.get("capacity", 0), units=cargo_dict.get("units", 0), inventory=inventory)


@dataclass
class Ship:
    symbol: str
    registration: ShipRegistration
    nav: ShipNav
    engine: ShipEngine | None = None
    frame: ShipComponent | None = None
    reactor: ShipComponent | None = None
    crew: ShipCrew = field(default_factory=ShipCrew)
    fuel: ShipFuel = field(default_factory=ShipFuel)
    cargo: ShipCargo = field(default_factory=ShipCargo)
    cooldown: ShipCooldown = field(default_factory=ShipCooldown)
    modules: list[ShipComponent] = field(default_factory=list)
    mounts: list[ShipComponent] = field(default_factory=list)

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Ship":
        engine_dict = d.get("engine") or {}
        frame_dict = d.get("frame") or {}
        reactor_dict = d.get("reactor") or {}
        return Ship(
            symbol=d.get("symbol") or "",
            registration=ShipRegistration.from_dict(d.get("registration") or {}),
            nav=ShipNav.from_dict(d.get("nav") or {}),
            engine=ShipEngine(**_known_fields(ShipEngine, engine_dict)) if engine_dict else None,
            frame=ShipComponent.from_dict(frame_dict) if frame_dict else None,
            reactor=ShipComponent.from_dict(reactor_dict) if reactor_dict else None,
            crew=ShipCrew(**_known_fields(ShipCrew, d.get("crew"))),
            fuel=ShipFuel(**_known_fields(ShipFuel, d.get("fuel"))),
            cargo=ShipCargo.from_dict(d.get("cargo") or {}),
            cooldown=ShipCooldown(**_known_fields(ShipCooldown, d.get("cooldown"))),
            modules=[ShipComponent.from_dict(m) for m in d.get("modules", []) or [] if isinstance(m, dict)],
            mounts=[ShipComponent.from_dict(m) for m in d.get("mounts", []) or [] if isinstance(m, dict)],
        )
