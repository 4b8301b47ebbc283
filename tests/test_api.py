"""Tests for the endpoint groups hanging off ApiClient."""

import pytest

from api.client import ApiClient, system_symbol_for
from api.errors import InvalidResponseError, InvalidSymbolError, MissingTokenError
from conftest import (
    AGENT_PAYLOAD,
    API_URL,
    CONTRACT_PAYLOAD,
    SHIP_PAYLOAD,
    WAYPOINT_PAYLOAD,
    make_response,
)
from data.enums import Faction, ShipNavFlightMode, ShipNavStatus, WaypointTraitType


def _last_call(session):
    method, url = session.request.call_args.args
    return method, url, session.request.call_args.kwargs


def test_system_symbol_for():
    assert system_symbol_for("X1-DF55-20250Z") == "X1-DF55"


@pytest.mark.parametrize("symbol", ["X1", "X1-DF55", "", "X1--A1"])
def test_system_symbol_for_rejects_malformed(symbol):
    with pytest.raises(InvalidSymbolError):
        system_symbol_for(symbol)


def test_get_agent(client, session):
    session.request.return_value = make_response(200, {"data": AGENT_PAYLOAD})

    agent = client.agent.get()

    assert agent.symbol == "BADGER"
    assert agent.credits == 175000
    assert agent.headquarters_system == "X1-DF55"
    method, url, _ = _last_call(session)
    assert (method, url) == ("GET", f"{API_URL}/my/agent")


def test_authenticated_call_without_token_never_hits_network(session):
    client = ApiClient(None, api_url=API_URL)
    client.http.session = session

    with pytest.raises(MissingTokenError):
        client.agent.get()
    session.request.assert_not_called()


def test_register_replaces_client_token(session):
    client = ApiClient(None, api_url=API_URL)
    client.http.session = session
    session.request.return_value = make_response(
        201,
        {
            "data": {
                "token": "NEW-TOKEN",
                "agent": AGENT_PAYLOAD,
                "contract": CONTRACT_PAYLOAD,
                "faction": {"symbol": "COSMIC", "name": "Cosmic Engineers", "traits": []},
                "ships": [SHIP_PAYLOAD],
            }
        },
    )

    registration = client.agent.register("BADGER", Faction.COSMIC)

    assert registration.token == "NEW-TOKEN"
    assert client.agent_key == "NEW-TOKEN"
    assert registration.ships[0].symbol == "BADGER-1"
    method, url, kwargs = _last_call(session)
    assert (method, url) == ("POST", f"{API_URL}/register")
    assert kwargs["json"] == {"symbol": "BADGER", "faction": "COSMIC"}
    assert "Authorization" not in kwargs["headers"]


def test_register_uses_account_token_when_set(session):
    client = ApiClient(None, api_url=API_URL, account_key="ACCOUNT")
    client.http.session = session
    session.request.return_value = make_response(201, {"data": {"token": "T", "agent": AGENT_PAYLOAD}})

    client.agent.register("BADGER", Faction.VOID)

    _, _, kwargs = _last_call(session)
    assert kwargs["headers"]["Authorization"] == "Bearer ACCOUNT"
    assert kwargs["json"]["faction"] == "VOID"



def test_register_without_token_keeps_client_token(session):
    client = ApiClient("OLD", api_url=API_URL)
    client.http.session = session
    session.request.return_value = make_response(201, {"data": {"agent": AGENT_PAYLOAD}})

    with pytest.raises(InvalidResponseError):
        client.agent.register("BADGER", Faction.COSMIC)
    assert client.agent_key == "OLD"


def test_get_waypoint_derives_system(client, session):
    session.request.return_value = make_response(200, {"data": WAYPOINT_PAYLOAD})

    waypoint = client.waypoints.get("X1-DF55-20250Z")

    assert waypoint.symbol == "X1-DF55-20250Z"
    assert waypoint.has_trait(WaypointTraitType.SHIPYARD)
    _, url, _ = _last_call(session)
    assert url == f"{API_URL}/systems/X1-DF55/waypoints/X1-DF55-20250Z"


def test_get_waypoint_with_bad_symbol_never_hits_network(client, session):
    with pytest.raises(InvalidSymbolError):
        client.waypoints.get("NOPE")
    session.request.assert_not_called()


def test_list_waypoints_passes_filters(client, session):
    session.request.return_value = make_response(200, {"data": [WAYPOINT_PAYLOAD], "meta": {"total": 1}})

    waypoints = client.waypoints.list("X1-DF55", traits=WaypointTraitType.MARKETPLACE, type="PLANET", limit=5)

    assert len(waypoints) == 1
    _, url, kwargs = _last_call(session)
    assert url == f"{API_URL}/systems/X1-DF55/waypoints"
    assert kwargs["params"] == {"page": 1, "limit": 5, "traits": "MARKETPLACE", "type": "PLANET"}


def test_get_market(client, session):
    session.request.return_value = make_response(200, {"data": {"symbol": "X1-DF55-20250Z", "exports": []}})

    market = client.waypoints.get_market("X1-DF55-20250Z")

    assert market["symbol"] == "X1-DF55-20250Z"
    _, url, _ = _last_call(session)
    assert url.endswith("/systems/X1-DF55/waypoints/X1-DF55-20250Z/market")


def test_get_system(client, session):
    session.request.return_value = make_response(
        200,
        {
            "data": {
                "symbol": "X1-DF55",
                "sectorSymbol": "X1",
                "type": "RED_STAR",
                "x": 10,
                "y": -3,
                "waypoints": [{"symbol": "X1-DF55-20250Z", "type": "PLANET", "x": -4, "y": 17, "orbitals": []}],
                "factions": [{"symbol": "COSMIC"}],
            }
        },
    )

    system = client.systems.get("X1-DF55")

    assert system.sectorSymbol == "X1"
    assert [w.symbol for w in system.waypoints] == ["X1-DF55-20250Z"]


def test_fleet_list_single_page(client, session):
    session.request.return_value = make_response(200, {"data": [SHIP_PAYLOAD], "meta": {"total": 1}})

    ships = client.fleet.list()

    assert [s.symbol for s in ships] == ["BADGER-1"]
    _, url, kwargs = _last_call(session)
    assert url == f"{API_URL}/my/ships"
    assert "params" not in kwargs


def test_fleet_list_all_pages(client, session):
    second = dict(SHIP_PAYLOAD, symbol="BADGER-2")
    session.request.side_effect = [
        make_response(200, {"data": [SHIP_PAYLOAD], "meta": {"total": 2}}),
        make_response(200, {"data": [second], "meta": {"total": 2}}),
    ]

    ships = client.fleet.list(limit=1, all_pages=True)

    assert [s.symbol for s in ships] == ["BADGER-1", "BADGER-2"]


def test_orbit_returns_nav(client, session):
    nav = dict(SHIP_PAYLOAD["nav"], status="IN_ORBIT")
    session.request.return_value = make_response(200, {"data": {"nav": nav}})

    result = client.fleet.orbit("BADGER-1")

    assert result.status == ShipNavStatus.IN_ORBIT
    method, url, _ = _last_call(session)
    assert (method, url) == ("POST", f"{API_URL}/my/ships/BADGER-1/orbit")


def test_set_flight_mode_sends_patch(client, session):
    nav = dict(SHIP_PAYLOAD["nav"], flightMode="DRIFT")
    session.request.return_value = make_response(200, {"data": nav})

    result = client.fleet.set_flight_mode("BADGER-1", ShipNavFlightMode.DRIFT)

    assert result.flightMode == ShipNavFlightMode.DRIFT
    method, _, kwargs = _last_call(session)
    assert method == "PATCH"
    assert kwargs["json"] == {"flightMode": "DRIFT"}


def test_refuel_without_options_sends_no_body(client, session):
    session.request.return_value = make_response(200, {"data": {"fuel": {"current": 400, "capacity": 400}}})

    client.fleet.refuel("BADGER-1")

    _, _, kwargs = _last_call(session)
    assert "json" not in kwargs


def test_refuel_with_units(client, session):
    session.request.return_value = make_response(200, {"data": {"fuel": {"current": 100, "capacity": 400}}})

    client.fleet.refuel("BADGER-1", units=100, from_cargo=True)

    _, _, kwargs = _last_call(session)
    assert kwargs["json"] == {"units": 100, "fromCargo": True}


def test_sell(client, session):
    session.request.return_value = make_response(201, {"data": {"transaction": {"units": 5, "totalPrice": 50}}})

    result = client.fleet.sell("BADGER-1", "IRON_ORE", 5)

    assert result["transaction"]["totalPrice"] == 50
    _, _, kwargs = _last_call(session)
    assert kwargs["json"] == {"symbol": "IRON_ORE", "units": 5}


def test_get_cargo(client, session):
    session.request.return_value = make_response(200, {"data": SHIP_PAYLOAD["cargo"]})

    cargo = client.fleet.get_cargo("BADGER-1")

    assert cargo.units == 5
    assert cargo.free == 35
    assert cargo.inventory[0].symbol == "IRON_ORE"


def test_accept_contract(client, session):
    accepted = dict(CONTRACT_PAYLOAD, accepted=True)
    session.request.return_value = make_response(200, {"data": {"contract": accepted, "agent": AGENT_PAYLOAD}})

    contract = client.contracts.accept("clabc123")

    assert contract.accepted
    assert contract.is_open
    method, url, _ = _last_call(session)
    assert (method, url) == ("POST", f"{API_URL}/my/contracts/clabc123/accept")



def test_accept_contract_without_contract_in_response(client, session):
    session.request.return_value = make_response(200, {"data": {"agent": AGENT_PAYLOAD}})

    with pytest.raises(InvalidResponseError):
        client.contracts.accept("clabc123")


def test_deliver_contract(client, session):
    session.request.return_value = make_response(200, {"data": {"contract": CONTRACT_PAYLOAD, "cargo": {}}})

    client.contracts.deliver("clabc123", "BADGER-1", "IRON_ORE", 10)

    _, _, kwargs = _last_call(session)
    assert kwargs["json"] == {"shipSymbol": "BADGER-1", "tradeSymbol": "IRON_ORE", "units": 10}


def test_list_contracts(client, session):
    session.request.return_value = make_response(200, {"data": [CONTRACT_PAYLOAD], "meta": {"total": 1}})

    contracts = client.contracts.list()

    assert contracts[0].id == "clabc123"
    _, _, kwargs = _last_call(session)
    assert kwargs["params"] == {"page": 1, "limit": 20}
