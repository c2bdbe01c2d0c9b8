"""Constants and enums for the heating cloud API payloads."""

from __future__ import annotations

from enum import IntEnum


class OperationMode(IntEnum):
    """Operation mode of a channel or installation."""

    UNKNOWN = -1
    OFF = 0
    HEAT = 1
    COOL = 2
    AUTO = 3


class AbsenceLevel(IntEnum):
    """
    Installation absence level.

    NONE: Occupants present, programs run normally.
    ABSENT: Short absence, reduced setpoints.
    VACATION: Long absence, standby setpoints.
    """

    UNKNOWN = -1
    NONE = 0
    ABSENT = 1
    VACATION = 2


WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

TEMPERATURE_SCALE = 10  # raw readings are tenths of a degree Fahrenheit
TEMPERATURE_TOLERANCE = 0.1  # degrees, for unit consistency and comparisons
HUMIDITY_MIN = 0
HUMIDITY_MAX = 100
MINUTES_PER_DAY = 24 * 60
