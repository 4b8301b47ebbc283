"""
SpaceTraders command line client.

Usage examples:
  python main.py agent
  python main.py register MY_CALLSIGN --faction COSMIC
  python main.py waypoint X1-DF55-20250Z
  python main.py fleet --all
  python main.py navigate MY_CALLSIGN-1 X1-DF55-A1 --mode DRIFT
"""

from __future__ import annotations

import argparse
import logging

from api.errors import (
    ApiRequestError,
    ConfigError,
    InvalidResponseError,
    InvalidSymbolError,
    MissingTokenError,
    NetworkError,
    TokenResetError,
)
from app.bootstrap import AppContext, build_app, configure_logging, register_agent
from app.settings import load_settings
from data.enums import Faction, ShipNavFlightMode, WaypointTraitType
from data.models.ship import ShipNav
from utils import display
from utils.config import ConfigData, read_config_file, write_config_file

EXIT_OK = 0
EXIT_API_ERROR = 1
EXIT_USAGE_ERROR = 2


def _enum_arg(enum_cls):
    def parse(value: str):
        try:
            return enum_cls(value.upper())
        except ValueError:
            choices = ", ".join(m.value for m in enum_cls)
            raise argparse.ArgumentTypeError(f"invalid choice {value!r} (choose from {choices})")

    return parse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="spacetraders", description="Command line client for the SpaceTraders API")
    parser.add_argument("--env-file", help="Path to a .env file (default: ./.env)")
    parser.add_argument("--log-level", help="Logging level (default: SPACETRADERS_LOG_LEVEL or INFO)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Shortcut for --log-level DEBUG")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_register = sub.add_parser("register", help="Register a new agent and save its token")
    p_register.add_argument("symbol", help="Agent callsign (3-14 characters)")
    p_register.add_argument(
        "--faction", type=_enum_arg(Faction), default=Faction.COSMIC, help="Starting faction (default: COSMIC)"
    )

    sub.add_parser("agent", help="Show agent details")

    p_waypoint = sub.add_parser("waypoint", help="Show a waypoint")
    p_waypoint.add_argument("symbol", help="Waypoint symbol, e.g. X1-DF55-20250Z")

    p_waypoints = sub.add_parser("waypoints", help="List waypoints in a system")
    p_waypoints.add_argument("system", help="System symbol, e.g. X1-DF55")
    p_waypoints.add_argument("--trait", type=_enum_arg(WaypointTraitType), help="Filter by trait, e.g. SHIPYARD")
    p_waypoints.add_argument("--type", help="Filter by waypoint type, e.g. ASTEROID")
    p_waypoints.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    p_waypoints.add_argument("--limit", type=int, default=20, help="Page size (default: 20)")

    p_system = sub.add_parser("system", help="Show a system")
    p_system.add_argument("symbol", help="System symbol, e.g. X1-DF55")

    p_market = sub.add_parser("market", help="Show market data at a waypoint")
    p_market.add_argument("waypoint")

    p_shipyard = sub.add_parser("shipyard", help="Show shipyard offerings at a waypoint")
    p_shipyard.add_argument("waypoint")

    p_fleet = sub.add_parser("fleet", help="List ships")
    p_fleet.add_argument("--all", action="store_true", help="Fetch every page")

    p_ship = sub.add_parser("ship", help="Show a ship")
    p_ship.add_argument("ship")

    p_orbit = sub.add_parser("orbit", help="Move a ship into orbit")
    p_orbit.add_argument("ship")

    p_dock = sub.add_parser("dock", help="Dock a ship")
    p_dock.add_argument("ship")

    p_navigate = sub.add_parser("navigate", help="Navigate a ship within its system")
    p_navigate.add_argument("ship")
    p_navigate.add_argument("waypoint")
    p_navigate.add_argument("--mode", type=_enum_arg(ShipNavFlightMode), help="Flight mode to set first")

    p_refuel = sub.add_parser("refuel", help="Refuel a docked ship")
    p_refuel.add_argument("ship")
    p_refuel.add_argument("--units", type=int, help="Units to buy (default: fill the tank)")
    p_refuel.add_argument("--from-cargo", action="store_true", help="Use fuel from the cargo hold")

    p_extract = sub.add_parser("extract", help="Extract resources at the current waypoint")
    p_extract.add_argument("ship")

    p_sell = sub.add_parser("sell", help="Sell cargo at the current market")
    p_sell.add_argument("ship")
    p_sell.add_argument("symbol", help="Trade good symbol, e.g. IRON_ORE")
    p_sell.add_argument("units", type=int)

    sub.add_parser("contracts", help="List contracts")

    p_contract = sub.add_parser("contract", help="Accept or fulfill a contract")
    p_contract.add_argument("action", choices=["show", "accept", "fulfill"])
    p_contract.add_argument("contract_id")

    p_deliver = sub.add_parser("deliver", help="Deliver cargo for a contract")
    p_deliver.add_argument("contract_id")
    p_deliver.add_argument("ship")
    p_deliver.add_argument("symbol", help="Trade good symbol")
    p_deliver.add_argument("units", type=int)

    p_config = sub.add_parser("config", help="Inspect or update the stored token")
    p_config.add_argument("action", choices=["show", "set-token"])
    p_config.add_argument("token", nargs="?", help="Token to store (set-token)")

    return parser


def _mask(token: str | None) -> str:
    if not token:
        return "(none)"
    return token[:6] + "..." + token[-4:] if len(token) > 12 else "***"


def run_config(ctx: AppContext, args: argparse.Namespace) -> int:
    path = ctx.settings.config_path
    if args.action == "show":
        stored = read_config_file(path)
        print(f"Config file: {path}")
        print(f"Stored token: {_mask(stored.token if stored else None)}")
        print(f"Active token: {_mask(ctx.settings.agent_token)}")
        print(f"API URL: {ctx.settings.api_url}")
        return EXIT_OK
    if not args.token:
        logging.error("config set-token requires a TOKEN argument")
        return EXIT_USAGE_ERROR
    write_config_file(ConfigData(token=args.token), path)
    print(f"Token written to {path}")
    return EXIT_OK


def run_command(ctx: AppContext, args: argparse.Namespace) -> int:
    client = ctx.client
    cmd = args.cmd

    if cmd == "config":
        return run_config(ctx, args)
    if cmd == "register":
        registration = register_agent(ctx, args.symbol, args.faction)
        print(display.format_registration(registration))
        return EXIT_OK
    if cmd == "agent":
        print(display.format_agent(client.agent.get()))
    elif cmd == "waypoint":
        print(display.format_waypoint(client.waypoints.get(args.symbol)))
    elif cmd == "waypoints":
        waypoints = client.waypoints.list(
            args.system, page=args.page, limit=args.limit, traits=args.trait, type=args.type
        )
        for waypoint in waypoints:
            print(display.format_waypoint_line(waypoint))
        if not waypoints:
            print("No waypoints found.")
    elif cmd == "system":
        print(display.format_system(client.systems.get(args.symbol)))
    elif cmd == "market":
        print(display.format_market(client.waypoints.get_market(args.waypoint)))
    elif cmd == "shipyard":
        print(display.format_shipyard(client.waypoints.get_shipyard(args.waypoint)))
    elif cmd == "fleet":
        ships = client.fleet.list(all_pages=args.all)
        for ship in ships:
            print(display.format_ship_summary(ship))
        logging.info(f"Fleet size: {len(ships)}")
    elif cmd == "ship":
        print(display.format_ship(client.fleet.get(args.ship)))
    elif cmd == "orbit":
        print(display.format_nav(client.fleet.orbit(args.ship)))
    elif cmd == "dock":
        print(display.format_nav(client.fleet.dock(args.ship)))
    elif cmd == "navigate":
        if args.mode is not None:
            client.fleet.set_flight_mode(args.ship, args.mode)
        result = client.fleet.navigate(args.ship, args.waypoint)
        print(display.format_nav(ShipNav.from_dict(result.get("nav", {}))))
        fuel = result.get("fuel") or {}
        if fuel:
            print(f"Fuel: {fuel.get('current', 0)} / {fuel.get('capacity', 0)}")
    elif cmd == "refuel":
        result = client.fleet.refuel(args.ship, units=args.units, from_cargo=(True if args.from_cargo else None))
        fuel = result.get("fuel") or {}
        tx = result.get("transaction") or {}
        print(f"Fuel: {fuel.get('current', 0)} / {fuel.get('capacity', 0)}")
        if tx:
            print(f"Paid {tx.get('totalPrice')} for {tx.get('units')} units")
    elif cmd == "extract":
        result = client.fleet.extract(args.ship)
        extraction = (result.get("extraction") or {}).get("yield") or {}
        cooldown = result.get("cooldown") or {}
        print(f"Extracted {extraction.get('units', 0)} {extraction.get('symbol', '?')}")
        print(f"Cooldown: {cooldown.get('remainingSeconds', 0)}s")
    elif cmd == "sell":
        result = client.fleet.sell(args.ship, args.symbol.upper(), args.units)
        tx = result.get("transaction") or {}
        agent = result.get("agent") or {}
        print(f"Sold {tx.get('units', args.units)} {tx.get('tradeSymbol', args.symbol.upper())} for {tx.get('totalPrice')}")
        if "credits" in agent:
            print(f"Credits: {agent['credits']}")
    elif cmd == "contracts":
        contracts = client.contracts.list()
        for contract in contracts:
            print(display.format_contract(contract))
        if not contracts:
            print("No contracts.")
    elif cmd == "contract":
        if args.action == "accept":
            contract = client.contracts.accept(args.contract_id)
        elif args.action == "fulfill":
            contract = client.contracts.fulfill(args.contract_id)
        else:
            contract = client.contracts.get(args.contract_id)
        print(display.format_contract(contract))
    elif cmd == "deliver":
        contract = client.contracts.deliver(args.contract_id, args.ship, args.symbol.upper(), args.units)
        print(display.format_contract(contract))
    else:
        return EXIT_USAGE_ERROR
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings(args.env_file)
    level = "DEBUG" if args.verbose else (args.log_level or settings.log_level)
    configure_logging(level)
    if settings.token_source:
        logging.debug(f"Using agent token from {settings.token_source}")
    else:
        logging.debug("No agent token configured")

    ctx = build_app(settings)
    try:
        return run_command(ctx, args)
    except MissingTokenError as e:
        logging.error(str(e))
        logging.error("Please set AGENT_TOKEN in your .env file or environment.")
        return EXIT_USAGE_ERROR
    except (InvalidSymbolError, ConfigError) as e:
        logging.error(str(e))
        return EXIT_USAGE_ERROR
    except TokenResetError as e:
        logging.error(f"{e.code}: {e.error.message}")
        logging.error("The server was reset; register a new agent to get a fresh token.")
        return EXIT_API_ERROR
    except ApiRequestError as e:
        logging.error(str(e))
        return EXIT_API_ERROR
    except (NetworkError, InvalidResponseError) as e:
        logging.error(str(e))
        return EXIT_API_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
