"""Cross-layout comparison of installation parses.

Checks that the multi-installation parser reproduces what the
single-installation parser reports for the fields both expose. Mismatches
are reported, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .const import TEMPERATURE_TOLERANCE
from .installation import InstallationDataParser, InstallationDataParserV2
from .models import Channel, Install, User


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Outcome of a single comparison check."""

    name: str
    passed: bool
    v1: Any = None
    v2: Any = None


@dataclass(frozen=True, slots=True)
class ComparisonReport:
    checks: tuple[CheckResult, ...] = ()

    @property
    def passed(self) -> bool:
        return all(check.passed for check in self.checks)

    def failures(self) -> list[CheckResult]:
        return [check for check in self.checks if not check.passed]


def values_close(
    first: float | None,
    second: float | None,
    tolerance: float = TEMPERATURE_TOLERANCE,
) -> bool:
    """Compare two optional readings; two missing readings are equal."""
    if first is None or second is None:
        return first is None and second is None
    return abs(first - second) <= tolerance + 1e-9


def _equal(name: str, v1: Any, v2: Any) -> CheckResult:
    return CheckResult(name=name, passed=v1 == v2, v1=v1, v2=v2)


def _close(name: str, v1: float | None, v2: float | None) -> CheckResult:
    return CheckResult(name=name, passed=values_close(v1, v2), v1=v1, v2=v2)


def _representative_channels(
    v1: Install, v2: Install
) -> tuple[Channel, Channel] | None:
    return next(zip(v1.iter_channels(), v2.iter_channels()), None)


def compare_installations(
    v1: Install | None, v2: User, index: int = 0
) -> ComparisonReport:
    """Compare ``v1`` with installation ``index`` of ``v2``.

    When either side has no installation, the report holds a single
    ``installation`` check that passes only if both sides are empty.
    """
    other = v2.installations[index] if 0 <= index < len(v2.installations) else None
    if v1 is None or other is None:
        return ComparisonReport(
            checks=(
                CheckResult(
                    name="installation",
                    passed=v1 is None and other is None,
                    v1=v1.unique if v1 is not None else None,
                    v2=other.unique if other is not None else None,
                ),
            )
        )
    checks = [
        _equal("name", v1.name, other.name),
        _equal("groups", len(v1.groups), len(other.groups)),
        _equal("controllers", len(v1.controllers), len(other.controllers)),
        _equal("mixed_circuits", len(v1.mixed_circuits), len(other.mixed_circuits)),
        _equal("zones", v1.zone_count, other.zone_count),
        _equal("channels", v1.channel_count, other.channel_count),
    ]
    pair = _representative_channels(v1, other)
    if pair is not None:
        first, second = pair
        checks.extend(
            [
                _close(
                    "current_temperature",
                    first.current_temperature.celsius,
                    second.current_temperature.celsius,
                ),
                _close(
                    "setpoint_temperature",
                    first.setpoint_temperature.celsius,
                    second.setpoint_temperature.celsius,
                ),
                _close("humidity", first.humidity, second.humidity),
            ]
        )
    return ComparisonReport(checks=tuple(checks))


def compare_document(document: Any, unique: str | None = None) -> ComparisonReport:
    """Parse ``document`` with both layouts and compare the results.

    A filter matching nothing on both sides yields a passing report.
    Raises StructuralError when either parser cannot find its anchor.
    """
    v1 = InstallationDataParser(keep_raw=False).parse(document, unique)
    v2 = InstallationDataParserV2(keep_raw=False).parse(document, unique)
    return compare_installations(v1, v2)
