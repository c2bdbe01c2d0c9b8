"""Builders turning raw JSON nodes into entities.

Builders compose bottom-up (channel, zone, group, install, user) and keep
the source order of every collection. A malformed entry becomes an entity
with default fields rather than being dropped, so positions and
identifiers stay stable for consumers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .coerce import (
    as_number,
    coerce_enum,
    get_bool,
    get_enum,
    get_humidity,
    get_int,
    get_list,
    get_node,
    get_number,
    get_optional_node,
    get_optional_number,
    get_str,
    get_str_list,
    get_temperature,
)
from .const import MINUTES_PER_DAY, WEEKDAYS, AbsenceLevel, OperationMode
from .models import (
    AbsenceMode,
    AssociatedUser,
    Channel,
    ChannelConfig,
    Controller,
    CoolingSetpoints,
    DailyProgram,
    DigitalIO,
    Geofencing,
    GeofencingInstall,
    Group,
    HeatingSetpoints,
    Install,
    InstallationInfo,
    InstallerSettings,
    MixedCircuit,
    PartyMode,
    Programs,
    ProgramTimeSlot,
    Pump,
    Setpoints,
    Temperature,
    User,
    UserData,
    UserSettings,
    Vacation,
    WeeklyProgram,
    Zone,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    ControllerResolver = Callable[[Any], str | None]


def format_slot_start(value: Any) -> str:
    """Normalise a slot start to ``HH:MM``.

    Accepts an ``HH:MM`` string as-is or minutes after midnight.
    """
    if isinstance(value, str) and value:
        return value
    minutes = as_number(value)
    if minutes is None:
        return "00:00"
    total = int(minutes) % MINUTES_PER_DAY
    return f"{total // 60:02d}:{total % 60:02d}"


class EntityBuilder:
    """Build entities from raw nodes.

    ``extended`` enables the fields only the newer payload layout carries
    (channel config and setpoints, digital I/O, settings blocks).
    ``resolve_controller`` maps a raw zone node to the identifier of its
    controller; without one, zones carry no controller reference.
    """

    def __init__(
        self,
        *,
        keep_raw: bool = True,
        extended: bool = False,
        resolve_controller: ControllerResolver | None = None,
    ) -> None:
        self._keep_raw = keep_raw
        self._extended = extended
        self._resolve_controller = resolve_controller

    @property
    def keep_raw(self) -> bool:
        return self._keep_raw

    @property
    def extended(self) -> bool:
        return self._extended

    def raw(self, node: Any) -> Any:
        """Return ``node`` for the raw side channel.

        The node is attached by reference. Parsers detach the document once
        before building, so entities never share state with caller input.
        """
        if not self._keep_raw:
            return None
        return node

    def temperature(self, node: Any, key: str) -> Temperature:
        return get_temperature(node, key, keep_raw=self._keep_raw)

    # -- installation topology ---------------------------------------------

    def channel_config(self, node: Any) -> ChannelConfig:
        return ChannelConfig(
            heating=get_bool(node, "heating"),
            cooling=get_bool(node, "cooling"),
            ring_activation=get_bool(node, "ringActivation"),
            lock=get_bool(node, "lock"),
        )

    def setpoints(self, node: Any) -> Setpoints:
        heating = get_node(node, "heating")
        cooling = get_node(node, "cooling")
        return Setpoints(
            heating=HeatingSetpoints(
                normal=self.temperature(heating, "normal"),
                reduced=self.temperature(heating, "reduced"),
                standby=self.temperature(heating, "standby"),
            ),
            cooling=CoolingSetpoints(
                normal=self.temperature(cooling, "normal"),
                reduced=self.temperature(cooling, "reduced"),
            ),
        )

    def channel(self, node: Any) -> Channel:
        config: ChannelConfig | None = None
        setpoints: Setpoints | None = None
        if self._extended:
            config = self.channel_config(get_node(node, "config"))
            setpoints = self.setpoints(get_node(node, "setpoints"))
        return Channel(
            id=get_str(node, "_id"),
            channel_zone=get_int(node, "channelZone"),
            controller_number=get_int(node, "controllerNumber"),
            current_temperature=self.temperature(node, "currentTemperature"),
            setpoint_temperature=self.temperature(node, "setpointTemperature"),
            humidity=get_humidity(node, "humidity"),
            mode=get_enum(node, "mode", OperationMode, OperationMode.UNKNOWN),
            config=config,
            setpoints=setpoints,
            raw=self.raw(node),
        )

    def zone(self, node: Any) -> Zone:
        controller_ref = None
        if self._resolve_controller is not None:
            controller_ref = self._resolve_controller(node)
        return Zone(
            id=get_str(node, "_id"),
            number=get_int(node, "number"),
            name=get_str(node, "name"),
            channels=tuple(self.channel(item) for item in get_list(node, "channels")),
            controller_ref=controller_ref,
            raw=self.raw(node),
        )

    def group(self, node: Any) -> Group:
        return Group(
            id=get_str(node, "_id"),
            name=get_str(node, "groupName"),
            zones=tuple(self.zone(item) for item in get_list(node, "zones")),
            raw=self.raw(node),
        )

    def controller(self, node: Any) -> Controller:
        return Controller(
            id=get_str(node, "_id"),
            unique=get_str(node, "unique"),
            number=get_int(node, "controllerNumber"),
            version=get_str(node, "version"),
            online=get_bool(node, "online"),
            raw=self.raw(node),
        )

    def pump(self, node: Any) -> Pump:
        return Pump(state=get_bool(node, "state"), raw=self.raw(node))

    def digital_io(self, node: Any) -> DigitalIO:
        return DigitalIO(
            number=get_int(node, "number"),
            state=get_bool(node, "state"),
            raw=self.raw(node),
        )

    def mixed_circuit(self, node: Any) -> MixedCircuit:
        inputs: tuple[DigitalIO, ...] = ()
        outputs: tuple[DigitalIO, ...] = ()
        if self._extended:
            inputs = tuple(self.digital_io(item) for item in get_list(node, "di"))
            outputs = tuple(self.digital_io(item) for item in get_list(node, "do"))
        return MixedCircuit(
            id=get_str(node, "_id"),
            number=get_int(node, "number"),
            pump=self.pump(get_node(node, "pump")),
            digital_inputs=inputs,
            digital_outputs=outputs,
            raw=self.raw(node),
        )

    def party_mode(self, node: Any) -> PartyMode:
        return PartyMode(
            active=get_bool(node, "active"),
            duration=get_int(node, "duration"),
        )

    def user_settings(self, node: dict[str, Any] | None) -> UserSettings | None:
        if node is None:
            return None
        return UserSettings(
            party_mode=self.party_mode(get_node(node, "partyMode")),
            degree_f=get_bool(node, "degreef"),
            raw=self.raw(node),
        )

    def installer_settings(
        self, node: dict[str, Any] | None
    ) -> InstallerSettings | None:
        if node is None:
            return None
        return InstallerSettings(
            software_version=get_str(node, "softwareVersion"),
            signal_power=get_number(node, "signalPower"),
            raw=self.raw(node),
        )

    def geofencing(self, node: Any) -> Geofencing:
        installs = tuple(
            GeofencingInstall(
                unique=get_str(item, "unique"),
                active=get_bool(item, "active"),
                latitude=get_optional_number(item, "latitude"),
                longitude=get_optional_number(item, "longitude"),
            )
            for item in get_list(node, "installs")
        )
        return Geofencing(
            active=get_bool(node, "active"),
            radius=get_number(node, "radius"),
            installs=installs,
            raw=self.raw(node),
        )

    def operation_mode(self, node: Any) -> OperationMode:
        """Read ``operationMode``, given as a scalar or an object with ``mode``."""
        value = node.get("operationMode") if isinstance(node, dict) else None
        if isinstance(value, dict):
            return get_enum(value, "mode", OperationMode, OperationMode.UNKNOWN)
        return coerce_enum(value, OperationMode, OperationMode.UNKNOWN)

    def install(self, node: Any) -> Install:
        user_settings: UserSettings | None = None
        installer_settings: InstallerSettings | None = None
        if self._extended:
            user_settings = self.user_settings(get_optional_node(node, "userSettings"))
            installer_settings = self.installer_settings(
                get_optional_node(node, "installerSettings")
            )
        return Install(
            id=get_str(node, "_id"),
            unique=get_str(node, "unique"),
            name=get_str(node, "name"),
            address=get_str(node, "address"),
            version=get_str(node, "version"),
            connection_state=get_bool(node, "connectionState"),
            timezone=get_str(node, "timezone"),
            absence_level=get_enum(
                node, "absenceLevel", AbsenceLevel, AbsenceLevel.UNKNOWN
            ),
            geo_install_active=get_bool(node, "geoInstallActive"),
            outside_temperature=self.temperature(node, "outsideTemp"),
            outside_temperature_filtered=self.temperature(node, "outsideTempFiltered"),
            cooling_conditions=get_int(node, "coolingConditions"),
            operation_mode=self.operation_mode(node),
            number_of_controllers=get_int(node, "numberOfControllers"),
            number_of_mixed_circuits=get_int(node, "numberOfMixedCircuits"),
            groups=tuple(self.group(item) for item in get_list(node, "groups")),
            controllers=tuple(
                self.controller(item) for item in get_list(node, "controllers")
            ),
            mixed_circuits=tuple(
                self.mixed_circuit(item) for item in get_list(node, "mixedCircuits")
            ),
            user_settings=user_settings,
            installer_settings=installer_settings,
            raw=self.raw(node),
        )

    def user(self, node: Any, installations: Iterable[Install]) -> User:
        """Build the user, wrapping installations built by the caller."""
        return User(
            id=get_str(node, "_id"),
            email=get_str(node, "email"),
            created_at=get_str(node, "createdAt"),
            language=get_str(node, "language"),
            roles=get_str_list(node, "roles"),
            geofencing=self.geofencing(get_node(node, "geofencing")),
            installations=tuple(installations),
            raw=self.raw(node),
        )

    # -- user data -----------------------------------------------------------

    def time_slot(self, node: Any) -> ProgramTimeSlot:
        start = node.get("start") if isinstance(node, dict) else None
        return ProgramTimeSlot(
            start=format_slot_start(start),
            mode=get_str(node, "mode"),
            setpoint=self.temperature(node, "setpoint"),
        )

    def daily_program(self, node: Any) -> DailyProgram:
        return DailyProgram(
            id=get_str(node, "_id"),
            name=get_str(node, "name"),
            slots=tuple(self.time_slot(item) for item in get_list(node, "slots")),
            raw=self.raw(node),
        )

    def weekly_program(self, node: Any) -> WeeklyProgram:
        days = {
            weekday: tuple(self.time_slot(item) for item in get_list(node, weekday))
            for weekday in WEEKDAYS
        }
        return WeeklyProgram(
            id=get_str(node, "_id"),
            name=get_str(node, "name"),
            raw=self.raw(node),
            **days,
        )

    def programs(self, node: Any) -> Programs:
        return Programs(
            days=tuple(self.daily_program(item) for item in get_list(node, "days")),
            weeks=tuple(self.weekly_program(item) for item in get_list(node, "weeks")),
        )

    def vacation(self, node: Any) -> Vacation:
        return Vacation(
            active=get_bool(node, "active"),
            start=get_str(node, "start"),
            end=get_str(node, "end"),
            zones=get_str_list(node, "zones"),
        )

    def absence_mode(self, node: Any) -> AbsenceMode:
        return AbsenceMode(
            active=get_bool(node, "active"),
            level=get_enum(node, "level", AbsenceLevel, AbsenceLevel.UNKNOWN),
            end=get_str(node, "end"),
        )

    def associated_user(self, node: Any) -> AssociatedUser:
        return AssociatedUser(
            id=get_str(node, "_id"),
            email=get_str(node, "email"),
            role=get_str(node, "role"),
            raw=self.raw(node),
        )

    def installation_info(self, node: Any) -> InstallationInfo:
        associations = get_list(get_node(node, "associations"), "users")
        return InstallationInfo(
            id=get_str(node, "_id"),
            unique=get_str(node, "unique"),
            name=get_str(node, "name"),
            programs=self.programs(get_node(node, "programs")),
            vacation=self.vacation(get_node(node, "vacation")),
            absence_mode=self.absence_mode(get_node(node, "absenceMode")),
            party_mode=self.party_mode(get_node(node, "partyMode")),
            associations=tuple(self.associated_user(item) for item in associations),
            geofencing=self.geofencing(get_node(node, "geofencing")),
            raw=self.raw(node),
        )

    def user_data(
        self, node: Any, installations: Iterable[InstallationInfo]
    ) -> UserData:
        return UserData(
            id=get_str(node, "_id"),
            email=get_str(node, "email"),
            created_at=get_str(node, "createdAt"),
            language=get_str(node, "language"),
            roles=get_str_list(node, "roles"),
            geofencing=self.geofencing(get_node(node, "geofencing")),
            installations=tuple(installations),
            raw=self.raw(node),
        )
