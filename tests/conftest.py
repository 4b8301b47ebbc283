import json
from unittest.mock import MagicMock

import pytest

from api.client import ApiClient

API_URL = "https://api.example.test/v2"


def make_response(status_code: int = 200, payload=None, headers: dict | None = None, text: str | None = None):
    """Build a stand-in for requests.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.headers = headers or {}
    if payload is None and text is None:
        resp.content = b""
        resp.text = ""
        resp.json.side_effect = ValueError("no body")
    elif text is not None:
        resp.content = text.encode()
        resp.text = text
        resp.json.side_effect = ValueError("not json")
    else:
        resp.text = json.dumps(payload)
        resp.content = resp.text.encode()
        resp.json.return_value = payload
    return resp


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    """Rate-limit backoff must never slow the suite down."""
    monkeypatch.setattr("api.handle_requests.time.sleep", lambda _s: None)


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    api = ApiClient("AGENT-TOKEN", api_url=API_URL)
    api.http.session = session
    return api


AGENT_PAYLOAD = {
    "accountId": "acc-123",
    "symbol": "BADGER",
    "headquarters": "X1-DF55-20250Z",
    "credits": 175000,
    "startingFaction": "COSMIC",
    "shipCount": 2,
}

SHIP_PAYLOAD = {
    "symbol": "BADGER-1",
    "registration": {"name": "BADGER-1", "factionSymbol": "COSMIC", "role": "COMMAND"},
    "nav": {
        "systemSymbol": "X1-DF55",
        "waypointSymbol": "X1-DF55-20250Z",
        "route": {
            "origin": {"symbol": "X1-DF55-20250Z", "type": "PLANET", "systemSymbol": "X1-DF55", "x": 1, "y": 2},
            "destination": {"symbol": "X1-DF55-A1", "type": "MOON", "systemSymbol": "X1-DF55", "x": 3, "y": 4},
            "departureTime": "2026-10-19T10:00:00.000Z",
            "arrival": "2026-10-19T10:05:00.000Z",
        },
        "status": "DOCKED",
        "flightMode": "CRUISE",
    },
    "crew": {"current": 57, "capacity": 80, "required": 57, "rotation": "STRICT", "morale": 100, "wages": 0},
    "frame": {
        "symbol": "FRAME_FRIGATE",
        "name": "Frigate",
        "description": "A medium-sized ship",
        "condition": 1,
        "moduleSlots": 8,
        "mountingPoints": 5,
        "fuelCapacity": 400,
        "requirements": {"power": 8, "crew": 25},
    },
    "engine": {"symbol": "ENGINE_ION_DRIVE_II", "name": "Ion Drive II", "description": "", "speed": 30},
    "fuel": {"current": 400, "capacity": 400, "consumed": {"amount": 0, "timestamp": "2026-10-19T10:00:00.000Z"}},
    "cargo": {
        "capacity": 40,
        "units": 5,
        "inventory": [{"symbol": "IRON_ORE", "name": "Iron Ore", "description": "", "units": 5}],
    },
    "cooldown": {"shipSymbol": "BADGER-1", "totalSeconds": 0, "remainingSeconds": 0},
    "modules": [{"symbol": "MODULE_CARGO_HOLD_I", "name": "Cargo Hold", "capacity": 30, "requirements": {}}],
    "mounts": [{"symbol": "MOUNT_MINING_LASER_I", "name": "Mining Laser", "strength": 10, "requirements": {}}],
}

CONTRACT_PAYLOAD = {
    "id": "clabc123",
    "factionSymbol": "COSMIC",
    "type": "PROCUREMENT",
    "terms": {
        "deadline": "2026-10-26T10:00:00.000Z",
        "payment": {"onAccepted": 2000, "onFulfilled": 10000},
        "deliver": [
            {
                "tradeSymbol": "IRON_ORE",
                "destinationSymbol": "X1-DF55-20250Z",
                "unitsRequired": 50,
                "unitsFulfilled": 10,
            }
        ],
    },
    "accepted": False,
    "fulfilled": False,
    "expiration": "2026-10-20T10:00:00.000Z",
}

WAYPOINT_PAYLOAD = {
    "symbol": "X1-DF55-20250Z",
    "systemSymbol": "X1-DF55",
    "type": "PLANET",
    "x": -4,
    "y": 17,
    "orbitals": [{"symbol": "X1-DF55-A1"}],
    "faction": {"symbol": "COSMIC"},
    "traits": [
        {"symbol": "MARKETPLACE", "name": "Marketplace", "description": "A market"},
        {"symbol": "SHIPYARD", "name": "Shipyard", "description": "A shipyard"},
    ],
    "chart": {"submittedBy": "COSMIC", "submittedOn": "2026-10-01T00:00:00.000Z"},
    "isUnderConstruction": False,
}


ENV_VARS = ["AGENT_TOKEN", "ACCOUNT_TOKEN", "SPACETRADERS_API_URL", "SPACETRADERS_CONFIG", "SPACETRADERS_LOG_LEVEL"]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate settings from the developer's environment; returns the config.json path."""
    for var in ENV_VARS:
        # setenv first so that values written by load_dotenv are rolled back too
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    config_path = tmp_path / "config.json"
    monkeypatch.setenv("SPACETRADERS_CONFIG", str(config_path))
    return config_path
