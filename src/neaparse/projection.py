"""Views derived from a parsed aggregate: typed data and text summary."""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, overload

from .models import (
    RAW_FIELD,
    Install,
    InstallationInfo,
    TypedInstall,
    TypedUser,
    TypedUserData,
    User,
    UserData,
)

_INDENT = "    "


@overload
def get_typed(aggregate: User) -> TypedUser: ...


@overload
def get_typed(aggregate: Install) -> TypedInstall: ...


@overload
def get_typed(aggregate: UserData) -> TypedUserData: ...


def get_typed(aggregate: Any) -> Any:
    """Return ``aggregate`` as plain JSON data with every raw field removed.

    The strip is deep: no ``raw`` key survives at any nesting level.
    Enum members become their lowercase names.
    """
    return _strip(aggregate)


def _strip(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return {
            item.name: _strip(getattr(value, item.name))
            for item in fields(value)
            if item.name != RAW_FIELD
        }
    if isinstance(value, Enum):
        return value.name.lower()
    if isinstance(value, (list, tuple)):
        return [_strip(item) for item in value]
    return value


def _available(value: object | None) -> str:
    return "Available" if value is not None else "Not available"


def _active(flag: bool) -> str:
    return "Active" if flag else "Inactive"


def _install_lines(install: Install) -> list[str]:
    lines = [
        f"Installation: {install.name} ({install.unique})",
        f"Groups: {len(install.groups)}",
        f"Controllers: {len(install.controllers)}",
        f"Mixed Circuits: {len(install.mixed_circuits)}",
        f"Zones: {install.zone_count}",
        f"Channels: {install.channel_count}",
        f"User Settings: {_available(install.user_settings)}",
        f"Installer Settings: {_available(install.installer_settings)}",
    ]
    if install.user_settings is not None:
        party = install.user_settings.party_mode
        lines.append(f"{_INDENT}Party Mode: {_active(party.active)}")
    if install.installer_settings is not None:
        settings = install.installer_settings
        lines.append(f"{_INDENT}Software Version: {settings.software_version}")
        lines.append(f"{_INDENT}Signal Power: {settings.signal_power:g}")
    return lines


def _info_lines(info: InstallationInfo) -> list[str]:
    return [
        f"Installation: {info.name} ({info.unique})",
        f"Daily Programs: {len(info.programs.days)}",
        f"Weekly Programs: {len(info.programs.weeks)}",
        f"Vacation: {_active(info.vacation.active)}",
        f"Absence Mode: {_active(info.absence_mode.active)}",
        f"Party Mode: {_active(info.party_mode.active)}",
        f"Associated Users: {len(info.associations)}",
    ]


def _user_lines(user: User | UserData) -> list[str]:
    roles = ", ".join(role for role in user.roles if role) or "none"
    lines = [
        f"User: {user.email} ({user.id})",
        f"Roles: {roles}",
        f"Installations: {len(user.installations)}",
    ]
    for position, entry in enumerate(user.installations, start=1):
        body = (
            _install_lines(entry)
            if isinstance(entry, Install)
            else _info_lines(entry)
        )
        lines.append("")
        lines.append(f"[{position}] {body[0]}")
        lines.extend(f"{_INDENT}{line}" for line in body[1:])
    return lines


def get_summary(aggregate: User | Install | UserData) -> str:
    """Render a fixed-format, human-readable summary of ``aggregate``."""
    if isinstance(aggregate, Install):
        lines = _install_lines(aggregate)
    else:
        lines = _user_lines(aggregate)
    return "\n".join(lines)
