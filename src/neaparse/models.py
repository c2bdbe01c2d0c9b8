"""Data models for parsed installation and user payloads."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, TypedDict

from .const import (
    TEMPERATURE_SCALE,
    TEMPERATURE_TOLERANCE,
    WEEKDAYS,
    AbsenceLevel,
    OperationMode,
)

RAW_FIELD = "raw"


def _raw() -> Any:
    """Declare the raw side channel of an entity.

    Excluded from equality so two parses of the same document compare
    equal on their typed content alone.
    """
    return field(default=None, compare=False, repr=False)


def _fahrenheit_to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Temperature:
    """A temperature reading in both units; either side may be missing."""

    celsius: float | None = None
    fahrenheit: float | None = None
    raw: Any = _raw()

    @classmethod
    def from_raw(cls, value: float, raw: Any = None) -> Temperature:
        """Build from tenths of a degree Fahrenheit."""
        fahrenheit = value / TEMPERATURE_SCALE
        return cls(
            celsius=round(_fahrenheit_to_celsius(fahrenheit), 1),
            fahrenheit=round(fahrenheit, 1),
            raw=raw,
        )

    @property
    def present(self) -> bool:
        """Return True when at least one unit carries a reading."""
        return self.celsius is not None or self.fahrenheit is not None

    def is_consistent(self) -> bool:
        """Check that both units describe the same physical value."""
        if self.celsius is None or self.fahrenheit is None:
            return True
        delta = abs(self.celsius - _fahrenheit_to_celsius(self.fahrenheit))
        return delta <= TEMPERATURE_TOLERANCE


@dataclass(frozen=True, slots=True)
class ChannelConfig:
    """Capability flags of a channel (extended payloads only)."""

    heating: bool = False
    cooling: bool = False
    ring_activation: bool = False
    lock: bool = False


@dataclass(frozen=True, slots=True)
class HeatingSetpoints:
    normal: Temperature = field(default_factory=Temperature)
    reduced: Temperature = field(default_factory=Temperature)
    standby: Temperature = field(default_factory=Temperature)


@dataclass(frozen=True, slots=True)
class CoolingSetpoints:
    normal: Temperature = field(default_factory=Temperature)
    reduced: Temperature = field(default_factory=Temperature)


@dataclass(frozen=True, slots=True)
class Setpoints:
    """Configured setpoints per operating regime."""

    heating: HeatingSetpoints = field(default_factory=HeatingSetpoints)
    cooling: CoolingSetpoints = field(default_factory=CoolingSetpoints)


@dataclass(frozen=True, slots=True)
class PartyMode:
    active: bool = False
    duration: int = 0


# ---------------------------------------------------------------------------
# Installation entities
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Channel:
    """A single climate-control channel (room thermostat)."""

    id: str = ""
    channel_zone: int = 0
    controller_number: int = 0
    current_temperature: Temperature = field(default_factory=Temperature)
    setpoint_temperature: Temperature = field(default_factory=Temperature)
    humidity: float | None = None
    mode: OperationMode = OperationMode.UNKNOWN
    config: ChannelConfig | None = None
    setpoints: Setpoints | None = None
    raw: Any = _raw()


@dataclass(frozen=True, slots=True)
class Zone:
    """An ordered set of channels.

    ``controller_ref`` holds the identifier of the managing controller,
    never the controller itself.
    """

    id: str = ""
    number: int = 0
    name: str = ""
    channels: tuple[Channel, ...] = ()
    controller_ref: str | None = None
    raw: Any = _raw()


@dataclass(frozen=True, slots=True)
class Group:
    id: str = ""
    name: str = ""
    zones: tuple[Zone, ...] = ()
    raw: Any = _raw()


@dataclass(frozen=True, slots=True)
class Controller:
    """A physical controller unit."""

    id: str = ""
    unique: str = ""
    number: int = 0
    version: str = ""
    online: bool = False
    raw: Any = _raw()


@dataclass(frozen=True, slots=True)
class Pump:
    state: bool = False
    raw: Any = _raw()


@dataclass(frozen=True, slots=True)
class DigitalIO:
    """A numbered digital input or output."""

    number: int = 0
    state: bool = False
    raw: Any = _raw()


@dataclass(frozen=True, slots=True)
class MixedCircuit:
    id: str = ""
    number: int = 0
    pump: Pump = field(default_factory=Pump)
    digital_inputs: tuple[DigitalIO, ...] = ()
    digital_outputs: tuple[DigitalIO, ...] = ()
    raw: Any = _raw()


@dataclass(frozen=True, slots=True)
class UserSettings:
    party_mode: PartyMode = field(default_factory=PartyMode)
    degree_f: bool = False
    raw: Any = _raw()


@dataclass(frozen=True, slots=True)
class InstallerSettings:
    software_version: str = ""
    signal_power: float = 0.0
    raw: Any = _raw()


@dataclass(frozen=True, slots=True)
class GeofencingInstall:
    unique: str = ""
    active: bool = False
    latitude: float | None = None
    longitude: float | None = None


@dataclass(frozen=True, slots=True)
class Geofencing:
    active: bool = False
    radius: float = 0.0
    installs: tuple[GeofencingInstall, ...] = ()
    raw: Any = _raw()


@dataclass(frozen=True, slots=True)
class Install:
    """A single installation and its device topology."""

    id: str = ""
    unique: str = ""
    name: str = ""
    address: str = ""
    version: str = ""
    connection_state: bool = False
    timezone: str = ""
    absence_level: AbsenceLevel = AbsenceLevel.UNKNOWN
    geo_install_active: bool = False
    outside_temperature: Temperature = field(default_factory=Temperature)
    outside_temperature_filtered: Temperature = field(default_factory=Temperature)
    cooling_conditions: int = 0
    operation_mode: OperationMode = OperationMode.UNKNOWN
    number_of_controllers: int = 0
    number_of_mixed_circuits: int = 0
    groups: tuple[Group, ...] = ()
    controllers: tuple[Controller, ...] = ()
    mixed_circuits: tuple[MixedCircuit, ...] = ()
    user_settings: UserSettings | None = None
    installer_settings: InstallerSettings | None = None
    raw: Any = _raw()

    def iter_zones(self) -> Iterator[Zone]:
        """Yield every zone in group order."""
        for group in self.groups:
            yield from group.zones

    def iter_channels(self) -> Iterator[Channel]:
        """Yield every channel in group and zone order."""
        for zone in self.iter_zones():
            yield from zone.channels

    @property
    def zone_count(self) -> int:
        return sum(len(group.zones) for group in self.groups)

    @property
    def channel_count(self) -> int:
        return sum(len(zone.channels) for zone in self.iter_zones())

    def controller_index(self) -> dict[str, Controller]:
        """Map controller identifiers (unique code and id) to controllers."""
        index: dict[str, Controller] = {}
        for controller in self.controllers:
            if controller.id:
                index.setdefault(controller.id, controller)
            if controller.unique:
                index.setdefault(controller.unique, controller)
        return index

    def controller_for(
        self, zone: Zone, index: dict[str, Controller] | None = None
    ) -> Controller | None:
        """Resolve the controller a zone refers to, if any."""
        if zone.controller_ref is None:
            return None
        if index is None:
            index = self.controller_index()
        return index.get(zone.controller_ref)

    def zones_for_controller(self, controller: Controller) -> list[Zone]:
        """Return the zones managed by ``controller``, in group order."""
        keys = {key for key in (controller.id, controller.unique) if key}
        return [zone for zone in self.iter_zones() if zone.controller_ref in keys]


@dataclass(frozen=True, slots=True)
class User:
    """A user account owning zero or more installations."""

    id: str = ""
    email: str = ""
    created_at: str = ""
    language: str = ""
    roles: tuple[str, ...] = ()
    geofencing: Geofencing = field(default_factory=Geofencing)
    installations: tuple[Install, ...] = ()
    raw: Any = _raw()


# ---------------------------------------------------------------------------
# User data entities
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ProgramTimeSlot:
    """A point in the day from which a mode and setpoint apply."""

    start: str = "00:00"
    mode: str = ""
    setpoint: Temperature = field(default_factory=Temperature)


@dataclass(frozen=True, slots=True)
class DailyProgram:
    id: str = ""
    name: str = ""
    slots: tuple[ProgramTimeSlot, ...] = ()
    raw: Any = _raw()


@dataclass(frozen=True, slots=True)
class WeeklyProgram:
    """Seven daily slot sequences, Monday first."""

    id: str = ""
    name: str = ""
    monday: tuple[ProgramTimeSlot, ...] = ()
    tuesday: tuple[ProgramTimeSlot, ...] = ()
    wednesday: tuple[ProgramTimeSlot, ...] = ()
    thursday: tuple[ProgramTimeSlot, ...] = ()
    friday: tuple[ProgramTimeSlot, ...] = ()
    saturday: tuple[ProgramTimeSlot, ...] = ()
    sunday: tuple[ProgramTimeSlot, ...] = ()
    raw: Any = _raw()

    def day(self, weekday: str) -> tuple[ProgramTimeSlot, ...]:
        """Return the slots of ``weekday`` (lowercase English name)."""
        if weekday not in WEEKDAYS:
            raise KeyError(weekday)
        return getattr(self, weekday)  # type: ignore[no-any-return]


@dataclass(frozen=True, slots=True)
class Programs:
    days: tuple[DailyProgram, ...] = ()
    weeks: tuple[WeeklyProgram, ...] = ()


@dataclass(frozen=True, slots=True)
class Vacation:
    active: bool = False
    start: str = ""
    end: str = ""
    zones: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class AbsenceMode:
    active: bool = False
    level: AbsenceLevel = AbsenceLevel.UNKNOWN
    end: str = ""


@dataclass(frozen=True, slots=True)
class AssociatedUser:
    id: str = ""
    email: str = ""
    role: str = ""
    raw: Any = _raw()


@dataclass(frozen=True, slots=True)
class InstallationInfo:
    """Per-installation user data: programs and occupancy modes."""

    id: str = ""
    unique: str = ""
    name: str = ""
    programs: Programs = field(default_factory=Programs)
    vacation: Vacation = field(default_factory=Vacation)
    absence_mode: AbsenceMode = field(default_factory=AbsenceMode)
    party_mode: PartyMode = field(default_factory=PartyMode)
    associations: tuple[AssociatedUser, ...] = ()
    geofencing: Geofencing = field(default_factory=Geofencing)
    raw: Any = _raw()


@dataclass(frozen=True, slots=True)
class UserData:
    """A user account as returned by the user data endpoint."""

    id: str = ""
    email: str = ""
    created_at: str = ""
    language: str = ""
    roles: tuple[str, ...] = ()
    geofencing: Geofencing = field(default_factory=Geofencing)
    installations: tuple[InstallationInfo, ...] = ()
    raw: Any = _raw()


# ---------------------------------------------------------------------------
# Typed projections: the same shapes without any raw side channel
# ---------------------------------------------------------------------------


class TypedTemperature(TypedDict):
    celsius: float | None
    fahrenheit: float | None


class TypedChannelConfig(TypedDict):
    heating: bool
    cooling: bool
    ring_activation: bool
    lock: bool


class TypedHeatingSetpoints(TypedDict):
    normal: TypedTemperature
    reduced: TypedTemperature
    standby: TypedTemperature


class TypedCoolingSetpoints(TypedDict):
    normal: TypedTemperature
    reduced: TypedTemperature


class TypedSetpoints(TypedDict):
    heating: TypedHeatingSetpoints
    cooling: TypedCoolingSetpoints


class TypedPartyMode(TypedDict):
    active: bool
    duration: int


class TypedChannel(TypedDict):
    id: str
    channel_zone: int
    controller_number: int
    current_temperature: TypedTemperature
    setpoint_temperature: TypedTemperature
    humidity: float | None
    mode: str
    config: TypedChannelConfig | None
    setpoints: TypedSetpoints | None


class TypedZone(TypedDict):
    id: str
    number: int
    name: str
    channels: list[TypedChannel]
    controller_ref: str | None


class TypedGroup(TypedDict):
    id: str
    name: str
    zones: list[TypedZone]


class TypedController(TypedDict):
    id: str
    unique: str
    number: int
    version: str
    online: bool


class TypedPump(TypedDict):
    state: bool


class TypedDigitalIO(TypedDict):
    number: int
    state: bool


class TypedMixedCircuit(TypedDict):
    id: str
    number: int
    pump: TypedPump
    digital_inputs: list[TypedDigitalIO]
    digital_outputs: list[TypedDigitalIO]


class TypedUserSettings(TypedDict):
    party_mode: TypedPartyMode
    degree_f: bool


class TypedInstallerSettings(TypedDict):
    software_version: str
    signal_power: float


class TypedGeofencingInstall(TypedDict):
    unique: str
    active: bool
    latitude: float | None
    longitude: float | None


class TypedGeofencing(TypedDict):
    active: bool
    radius: float
    installs: list[TypedGeofencingInstall]


class TypedInstall(TypedDict):
    id: str
    unique: str
    name: str
    address: str
    version: str
    connection_state: bool
    timezone: str
    absence_level: str
    geo_install_active: bool
    outside_temperature: TypedTemperature
    outside_temperature_filtered: TypedTemperature
    cooling_conditions: int
    operation_mode: str
    number_of_controllers: int
    number_of_mixed_circuits: int
    groups: list[TypedGroup]
    controllers: list[TypedController]
    mixed_circuits: list[TypedMixedCircuit]
    user_settings: TypedUserSettings | None
    installer_settings: TypedInstallerSettings | None


class TypedUser(TypedDict):
    id: str
    email: str
    created_at: str
    language: str
    roles: list[str]
    geofencing: TypedGeofencing
    installations: list[TypedInstall]


class TypedProgramTimeSlot(TypedDict):
    start: str
    mode: str
    setpoint: TypedTemperature


class TypedDailyProgram(TypedDict):
    id: str
    name: str
    slots: list[TypedProgramTimeSlot]


class TypedWeeklyProgram(TypedDict):
    id: str
    name: str
    monday: list[TypedProgramTimeSlot]
    tuesday: list[TypedProgramTimeSlot]
    wednesday: list[TypedProgramTimeSlot]
    thursday: list[TypedProgramTimeSlot]
    friday: list[TypedProgramTimeSlot]
    saturday: list[TypedProgramTimeSlot]
    sunday: list[TypedProgramTimeSlot]


class TypedPrograms(TypedDict):
    days: list[TypedDailyProgram]
    weeks: list[TypedWeeklyProgram]


class TypedVacation(TypedDict):
    active: bool
    start: str
    end: str
    zones: list[str]


class TypedAbsenceMode(TypedDict):
    active: bool
    level: str
    end: str


class TypedAssociatedUser(TypedDict):
    id: str
    email: str
    role: str


class TypedInstallationInfo(TypedDict):
    id: str
    unique: str
    name: str
    programs: TypedPrograms
    vacation: TypedVacation
    absence_mode: TypedAbsenceMode
    party_mode: TypedPartyMode
    associations: list[TypedAssociatedUser]
    geofencing: TypedGeofencing


class TypedUserData(TypedDict):
    id: str
    email: str
    created_at: str
    language: str
    roles: list[str]
    geofencing: TypedGeofencing
    installations: list[TypedInstallationInfo]
