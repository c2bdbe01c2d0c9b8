"""Shared fixtures for neaparse tests."""

from __future__ import annotations

import copy
from typing import Any

import pytest

_HOME_INSTALL: dict[str, Any] = {
    "_id": "i1",
    "unique": "ABC",
    "name": "Home",
    "address": "Main Street 1",
    "version": "2.0.1",
    "connectionState": True,
    "timezone": "Europe/Berlin",
    "absenceLevel": 0,
    "geoInstallActive": True,
    "outsideTemp": 410,
    "outsideTempFiltered": 428,
    "coolingConditions": 0,
    "operationMode": {"mode": "heat"},
    "numberOfControllers": 1,
    "numberOfMixedCircuits": 1,
    "groups": [
        {
            "_id": "g1",
            "groupName": "Ground floor",
            "zones": [
                {
                    "_id": "z1",
                    "number": 1,
                    "name": "Living",
                    "controller": "CTRL-1",
                    "channels": [
                        {
                            "_id": "c1",
                            "channelZone": 1,
                            "controllerNumber": 0,
                            "currentTemperature": 705,
                            "setpointTemperature": 716,
                            "humidity": 45,
                            "mode": "heat",
                            "config": {
                                "heating": True,
                                "cooling": False,
                                "ringActivation": 1,
                                "lock": "off",
                            },
                            "setpoints": {
                                "heating": {
                                    "normal": 716,
                                    "reduced": 644,
                                    "standby": 464,
                                },
                                "cooling": {"normal": 770, "reduced": 806},
                            },
                        }
                    ],
                },
                {
                    "_id": "z2",
                    "number": 2,
                    "name": "Kitchen",
                    "controller": {"unique": "CTRL-1"},
                    "channels": [
                        {
                            "_id": "c2",
                            "channelZone": 2,
                            "controllerNumber": 0,
                            "currentTemperature": 680,
                            "setpointTemperature": 698,
                            "humidity": None,
                            "mode": 2,
                        }
                    ],
                },
            ],
        },
        {
            "_id": "g2",
            "groupName": "First floor",
            "zones": [
                {
                    "_id": "z3",
                    "number": 3,
                    "name": "Bedroom",
                    "channels": [
                        {
                            "_id": "c3",
                            "channelZone": 3,
                            "currentTemperature": None,
                            "mode": "turbo",
                        },
                        "garbage",
                    ],
                }
            ],
        },
    ],
    "controllers": [
        {
            "_id": "ctrl-id-1",
            "unique": "CTRL-1",
            "controllerNumber": 0,
            "version": "1.2.3",
            "online": True,
        }
    ],
    "mixedCircuits": [
        {
            "_id": "mc1",
            "number": 1,
            "pump": {"state": 1},
            "di": [{"number": 1, "state": "on"}, {"number": 2, "state": 0}],
            "do": [{"number": 1, "state": True}],
        }
    ],
    "userSettings": {
        "partyMode": {"active": True, "duration": 120},
        "degreef": False,
    },
    "installerSettings": {"softwareVersion": "04.30", "signalPower": -67},
}

_CABIN_INSTALL: dict[str, Any] = {
    "_id": "i2",
    "unique": "DEF",
    "name": "Cabin",
    "groups": [
        {
            "_id": "g3",
            "groupName": "Main",
            "zones": [
                {
                    "_id": "z4",
                    "number": 1,
                    "name": "Room",
                    "channels": [
                        {"_id": "c4", "currentTemperature": 650, "humidity": 50}
                    ],
                }
            ],
        }
    ],
}

_USER: dict[str, Any] = {
    "_id": "u1",
    "email": "e@x.com",
    "createdAt": "2023-01-05T10:00:00Z",
    "language": "en",
    "roles": ["user", "installer"],
    "geofencing": {
        "active": True,
        "radius": 150,
        "installs": [
            {"unique": "ABC", "active": True, "latitude": 48.1, "longitude": 11.5}
        ],
    },
}

_USER_DATA_INSTALL: dict[str, Any] = {
    "_id": "i1",
    "unique": "ABC",
    "name": "Home",
    "programs": {
        "days": [
            {
                "_id": "d1",
                "name": "Workday",
                "slots": [
                    {"start": "06:00", "mode": "comfort", "setpoint": 716},
                    {"start": 1320, "mode": "reduced", "setpoint": 644},
                ],
            }
        ],
        "weeks": [
            {
                "_id": "w1",
                "name": "Default",
                "monday": [{"start": 360, "mode": "comfort", "setpoint": 716}],
                "sunday": [{"start": "08:30", "mode": "comfort"}],
            }
        ],
    },
    "vacation": {"active": False, "start": "", "end": "", "zones": ["z1"]},
    "absenceMode": {"active": True, "level": 1, "end": "2024-01-01"},
    "partyMode": {"active": False, "duration": 0},
    "associations": {
        "users": [{"_id": "u2", "email": "f@x.com", "role": "guest"}]
    },
    "geofencing": {"active": True, "radius": 100},
}


def make_envelope(user: dict[str, Any]) -> dict[str, Any]:
    """Wrap a user object in the API response envelope."""
    return {"success": True, "data": {"user": user}}


@pytest.fixture
def home_install() -> dict[str, Any]:
    """Return the raw fully-populated installation."""
    return copy.deepcopy(_HOME_INSTALL)


@pytest.fixture
def installation_document() -> dict[str, Any]:
    """Return an envelope with two installations, "ABC" then "DEF"."""
    user = copy.deepcopy(_USER)
    user["installs"] = [copy.deepcopy(_HOME_INSTALL), copy.deepcopy(_CABIN_INSTALL)]
    return make_envelope(user)


@pytest.fixture
def single_install_document() -> dict[str, Any]:
    """Return an envelope holding only the "ABC" installation."""
    user = copy.deepcopy(_USER)
    user["installs"] = [copy.deepcopy(_HOME_INSTALL)]
    return make_envelope(user)


@pytest.fixture
def user_data_document() -> dict[str, Any]:
    """Return a user data envelope with one installation."""
    user = copy.deepcopy(_USER)
    user["installs"] = [copy.deepcopy(_USER_DATA_INSTALL)]
    return make_envelope(user)


def find_raw_keys(value: Any, path: str = "$") -> list[str]:
    """Return the paths of every ``raw`` key in a JSON-like value."""
    found: list[str] = []
    if isinstance(value, dict):
        for key, item in value.items():
            if key == "raw":
                found.append(f"{path}.{key}")
            found.extend(find_raw_keys(item, f"{path}.{key}"))
    elif isinstance(value, list):
        for position, item in enumerate(value):
            found.extend(find_raw_keys(item, f"{path}[{position}]"))
    return found


def deep_install_json(depth: int = 800) -> str:
    """Return an envelope whose "BAD" installation nests ``depth`` arrays.

    The "ABC" installation after it is well-formed.
    """
    nested = "[" * depth + "]" * depth
    return (
        '{"success":true,"data":{"user":{"_id":"u1","installs":['
        '{"unique":"BAD","extra":' + nested + "},"
        '{"unique":"ABC","name":"Home"}]}}}'
    )
