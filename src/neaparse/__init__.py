"""Parsers for heating cloud API installation and user data responses."""

__version__ = "1.0.0"

from .compare import CheckResult, ComparisonReport, compare_document, compare_installations
from .const import TEMPERATURE_TOLERANCE, AbsenceLevel, OperationMode
from .exceptions import NeaparseError, PayloadDecodeError, StructuralError
from .installation import InstallationDataParser, InstallationDataParserV2
from .models import (
    Channel,
    Controller,
    DigitalIO,
    Geofencing,
    Group,
    Install,
    InstallationInfo,
    InstallerSettings,
    MixedCircuit,
    Pump,
    Temperature,
    User,
    UserData,
    UserSettings,
    Zone,
)
from .projection import get_summary, get_typed
from .user_data import UserDataParser

__all__ = [
    "TEMPERATURE_TOLERANCE",
    "AbsenceLevel",
    "Channel",
    "CheckResult",
    "ComparisonReport",
    "Controller",
    "DigitalIO",
    "Geofencing",
    "Group",
    "Install",
    "InstallationDataParser",
    "InstallationDataParserV2",
    "InstallationInfo",
    "InstallerSettings",
    "MixedCircuit",
    "NeaparseError",
    "OperationMode",
    "PayloadDecodeError",
    "Pump",
    "StructuralError",
    "Temperature",
    "User",
    "UserData",
    "UserDataParser",
    "UserSettings",
    "Zone",
    "compare_document",
    "compare_installations",
    "get_summary",
    "get_typed",
]
