"""
Terminal renderings of API models. Every function returns a string; main.py prints it.
"""
from datetime import datetime
from typing import Any

from data.models.agent import Agent, Registration
from data.models.contract import Contract
from data.models.ship import Ship, ShipNav
from data.models.system import System
from data.models.waypoints import Waypoint
from utils.time import format_duration, seconds_until


def _value(v: Any) -> str:
    # Enums print as their API value
    return str(getattr(v, "value", v)) if v is not None else "?"


def format_agent(agent: Agent) -> str:
    lines = [
        f"Agent: {agent.symbol}",
        f"    Headquarters: {agent.headquarters}",
        f"    Credits: {agent.credits:,}",
    ]
    if agent.startingFaction:
        lines.append(f"    Faction: {agent.startingFaction}")
    lines.append(f"    Ships: {agent.shipCount}")
    if agent.accountId:
        lines.append(f"    Account: {agent.accountId}")
    return "\n".join(lines)


def format_registration(registration: Registration) -> str:
    lines = [format_agent(registration.agent)]
    if registration.faction:
        lines.append(f"Faction: {_value(registration.faction.symbol)} - {registration.faction.name}")
    for ship in registration.ships:
        lines.append(format_ship_summary(ship))
    if registration.contract:
        lines.append(format_contract(registration.contract))
    return "\n".join(lines)


def format_waypoint(waypoint: Waypoint) -> str:
    lines = [
        f"Waypoint: {waypoint.symbol} ({waypoint.type}) ({waypoint.x}, {waypoint.y})",
        f"    System: {waypoint.systemSymbol}",
    ]
    if waypoint.orbits:
        lines.append(f"    Orbits: {waypoint.orbits}")
    if waypoint.orbitals:
        lines.append(f"    Orbitals: {', '.join(waypoint.orbitals)}")
    if waypoint.faction:
        lines.append(f"    Faction: {waypoint.faction.symbol}")
    for trait in waypoint.traits:
        lines.append(f"    Trait: {trait.symbol}" + (f" - {trait.name}" if trait.name else ""))
    if waypoint.chart and waypoint.chart.submittedBy:
        lines.append(f"    Charted by {waypoint.chart.submittedBy} on {waypoint.chart.submittedOn}")
    if waypoint.isUnderConstruction:
        lines.append("    Under construction")
    return "\n".join(lines)


def format_waypoint_line(waypoint: Waypoint) -> str:
    traits = ",".join(t.symbol for t in waypoint.traits)
    return f"{waypoint.symbol:<16} {waypoint.type:<22} ({waypoint.x}, {waypoint.y}) {traits}".rstrip()


def format_system(system: System) -> str:
    lines = [f"System: {system.symbol} ({system.type}) ({system.x}, {system.y})", f"    Sector: {system.sectorSymbol}"]
    if system.factions:
        lines.append(f"    Factions: {', '.join(f.symbol for f in system.factions)}")
    lines.append(f"    Waypoints: {len(system.waypoints)}")
    for wp in system.waypoints:
        lines.append(f"        {wp.symbol} ({wp.type}) ({wp.x}, {wp.y})")
    return "\n".join(lines)


def format_nav(nav: ShipNav, now: datetime | None = None) -> str:
    line = f"Nav: {_value(nav.status)} @ {nav.systemSymbol}/{nav.waypointSymbol} [{_value(nav.flightMode)}]"
    route = nav.route
    if route and route.destination and route.destination.symbol:
        origin = route.departure.symbol if route.departure and route.departure.symbol else "?"
        line += f"\n    Route: {origin} -> {route.destination.symbol}"
        if route.arrival:
            remaining = seconds_until(route.arrival, now)
            line += f"\n    Arrival: {route.arrival}"
            if remaining > 0:
                line += f" (in {format_duration(remaining)})"
    return line


def format_ship_summary(ship: Ship) -> str:
    role = _value(ship.registration.role) if ship.registration else "?"
    return (
        f"{ship.symbol or '?':<16} {role:<12} {_value(ship.nav.status):<10} {ship.nav.waypointSymbol or '?':<16} "
        f"fuel {ship.fuel.current}/{ship.fuel.capacity} cargo {ship.cargo.units}/{ship.cargo.capacity}"
    )


def format_ship(ship: Ship, now: datetime | None = None) -> str:
    lines = [f"Ship: {ship.symbol}"]
    if ship.registration:
        lines.append(f"    Type: {_value(ship.registration.role)}")
    for nav_line in format_nav(ship.nav, now).splitlines():
        lines.append(f"    {nav_line}")
    if ship.fuel.capacity > 0:
        lines.append(f"    Fuel: {ship.fuel.current} / {ship.fuel.capacity}")
    if ship.crew.capacity > 0:
        lines.append(f"    Crew: {ship.crew.current} / {ship.crew.capacity} (morale {ship.crew.morale})")
    if ship.frame:
        lines.append(f"    Frame: {ship.frame.symbol}")
    if ship.engine:
        speed = ship.engine.speed if ship.engine.speed is not None else "?"
        lines.append(f"    Engine: {ship.engine.symbol or '?'} (speed {speed})")
    if ship.cargo.capacity > 0:
        lines.append(f"    Cargo: {ship.cargo.units} / {ship.cargo.capacity}")
        for item in ship.cargo.inventory:
            lines.append(f"        {item.symbol}: {item.units}")
    if ship.cooldown.remainingSeconds > 0:
        lines.append(f"    Cooldown: {ship.cooldown.remainingSeconds} / {ship.cooldown.totalSeconds}")
    if ship.modules:
        lines.append(f"    Modules: {', '.join(m.symbol for m in ship.modules if m.symbol)}")
    if ship.mounts:
        lines.append(f"    Mounts: {', '.join(m.symbol for m in ship.mounts if m.symbol)}")
    return "\n".join(lines)


def format_contract(contract: Contract) -> str:
    if contract.fulfilled:
        status = "FULFILLED"
    elif contract.accepted:
        status = "ACCEPTED"
    else:
        status = "OPEN"
    terms = contract.terms
    lines = [
        f"Contract: {contract.id} ({_value(contract.type)}) [{status}]",
        f"    Faction: {contract.factionSymbol}",
        f"    Payment: {terms.payment.onAccepted:,} on accept, {terms.payment.onFulfilled:,} on fulfill",
    ]
    if terms.deadline:
        lines.append(f"    Deadline: {terms.deadline}")
    if not contract.accepted and contract.deadlineToAccept:
        lines.append(f"    Accept by: {contract.deadlineToAccept}")
    for item in terms.deliver:
        lines.append(
            f"    Deliver {item.tradeSymbol} to {item.destinationSymbol}: "
            f"{item.unitsFulfilled}/{item.unitsRequired}"
        )
    return "\n".join(lines)


def format_market(market: dict) -> str:
    lines = [f"Market: {market.get('symbol', '?')}"]
    for label, key in (("Exports", "exports"), ("Imports", "imports"), ("Exchange", "exchange")):
        symbols = [g.get("symbol") for g in market.get(key, []) or [] if isinstance(g, dict)]
        if symbols:
            lines.append(f"    {label}: {', '.join(symbols)}")
    goods = market.get("tradeGoods", []) or []
    if goods:
        lines.append("    Trade goods:")
        for good in goods:
            lines.append(
                f"        {good.get('symbol', '?'):<24} buy {good.get('purchasePrice', '?')} "
                f"sell {good.get('sellPrice', '?')} vol {good.get('tradeVolume', '?')} {good.get('supply', '')}".rstrip()
            )
    return "\n".join(lines)


def format_shipyard(shipyard: dict) -> str:
    lines = [f"Shipyard: {shipyard.get('symbol', '?')}"]
    ships = shipyard.get("ships", []) or []
    if ships:
        for offer in ships:
            lines.append(f"    {offer.get('type', '?'):<28} {offer.get('purchasePrice', '?')}")
    else:
        # Prices are only visible with a ship present
        for ship_type in shipyard.get("shipTypes", []) or []:
            lines.append(f"    {ship_type.get('type', '?')}")
    return "\n".join(lines)
