"""Parsers for the installation data endpoint.

Two layouts are supported. ``InstallationDataParser`` reads the original
single-installation layout; ``InstallationDataParserV2`` reads a user owning
any number of installations with the extended fields (controller
references, digital I/O, settings blocks). Both drive the same entity
builders.
"""

from __future__ import annotations

import logging
from typing import Any

from .builders import EntityBuilder
from .coerce import get_list, get_str
from .envelope import decode_payload, detach, find_installs, find_user
from .exceptions import StructuralError
from .models import Install, TypedInstall, TypedUser, User
from .projection import get_summary, get_typed

_LOGGER = logging.getLogger(__name__)

# Builders are total over JSON input; these cover what still slips through
# on nodes they were never meant to see.
_ENTRY_ERRORS = (AttributeError, KeyError, TypeError, ValueError)


def resolve_controller_ref(zone: Any) -> str | None:
    """Return the identifier of the controller a raw zone refers to.

    The reference is either the identifier string itself or an object
    carrying ``unique`` (preferred) or ``_id``.
    """
    value = zone.get("controller") if isinstance(zone, dict) else None
    if isinstance(value, str):
        return value or None
    if isinstance(value, dict):
        return get_str(value, "unique") or get_str(value, "_id") or None
    return None


def _matches(entry: Any, unique: str | None) -> bool:
    return unique is None or get_str(entry, "unique") == unique


class InstallationDataParser:
    """Parse the single-installation layout into an ``Install``."""

    def __init__(self, *, keep_raw: bool = True) -> None:
        self._builder = EntityBuilder(keep_raw=keep_raw)

    def parse_installations(
        self, document: Any, unique: str | None = None
    ) -> tuple[Install, ...]:
        """Build every installation of ``document``, optionally filtered.

        An unknown ``unique`` yields an empty tuple.
        """
        if self._builder.keep_raw:
            document = detach(document)
        entries = [entry for entry in find_installs(document) if _matches(entry, unique)]
        return tuple(self._builder.install(entry) for entry in entries)

    def parse(self, document: Any, unique: str | None = None) -> Install | None:
        """Build the first (or the ``unique``-matching) installation.

        Returns None when ``unique`` matches no installation. Raises
        StructuralError when the document holds no installation at all.
        """
        if self._builder.keep_raw:
            document = detach(document)
        return self._first(document, unique)

    def parse_json(
        self, payload: str | bytes, unique: str | None = None
    ) -> Install | None:
        return self._first(decode_payload(payload), unique)

    def _first(self, document: Any, unique: str | None) -> Install | None:
        entries = find_installs(document)
        if not entries:
            raise StructuralError("Document contains no installation")
        for entry in entries:
            if _matches(entry, unique):
                return self._builder.install(entry)
        _LOGGER.debug(
            "Filter %r matched none of %d installations", unique, len(entries)
        )
        return None

    def get_typed(self, install: Install) -> TypedInstall:
        return get_typed(install)

    def get_summary(self, install: Install) -> str:
        return get_summary(install)


class InstallationDataParserV2:
    """Parse the multi-installation layout into a ``User``."""

    def __init__(self, *, keep_raw: bool = True) -> None:
        self._builder = EntityBuilder(
            keep_raw=keep_raw,
            extended=True,
            resolve_controller=resolve_controller_ref,
        )

    def parse(self, document: Any, unique: str | None = None) -> User:
        """Build the user and its installations.

        Raises StructuralError when the user object is missing. Each
        installation entry is built on its own; an entry that cannot be
        built becomes a defaulted ``Install`` holding the raw entry.
        """
        if self._builder.keep_raw:
            document = detach(document)
        return self._parse(document, unique)

    def parse_json(self, payload: str | bytes, unique: str | None = None) -> User:
        return self._parse(decode_payload(payload), unique)

    def _parse(self, document: Any, unique: str | None) -> User:
        user_node = find_user(document)
        entries = get_list(user_node, "installs")
        selected = [entry for entry in entries if _matches(entry, unique)]
        if unique is not None:
            _LOGGER.debug(
                "Filter %r kept %d of %d installations",
                unique,
                len(selected),
                len(entries),
            )
        installations = [
            self._build_install(position, entry)
            for position, entry in enumerate(selected)
        ]
        return self._builder.user(user_node, installations)

    def _build_install(self, position: int, entry: Any) -> Install:
        if not isinstance(entry, dict):
            _LOGGER.debug(
                "Installation entry %d is %s, not an object",
                position,
                type(entry).__name__,
            )
            return Install(raw=self._builder.raw(entry))
        try:
            return self._builder.install(entry)
        except _ENTRY_ERRORS as exc:
            _LOGGER.debug("Installation entry %d degraded to defaults: %s", position, exc)
            return Install(
                id=get_str(entry, "_id"),
                unique=get_str(entry, "unique"),
                name=get_str(entry, "name"),
                raw=self._builder.raw(entry),
            )

    def get_typed(self, user: User) -> TypedUser:
        return get_typed(user)

    def get_summary(self, user: User) -> str:
        return get_summary(user)
