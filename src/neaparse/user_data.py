"""Parser for the user data endpoint (programs and occupancy modes)."""

from __future__ import annotations

from typing import Any

from .builders import EntityBuilder
from .coerce import get_list
from .envelope import decode_payload, detach, find_user
from .models import TypedUserData, UserData
from .projection import get_summary, get_typed


class UserDataParser:
    """Parse a user data response into ``UserData``.

    The user anchor rules match ``InstallationDataParserV2``: a missing
    user raises StructuralError, an empty ``installs`` array is valid.
    """

    def __init__(self, *, keep_raw: bool = True) -> None:
        self._builder = EntityBuilder(keep_raw=keep_raw)

    def parse(self, document: Any) -> UserData:
        if self._builder.keep_raw:
            document = detach(document)
        return self._parse(document)

    def parse_json(self, payload: str | bytes) -> UserData:
        return self._parse(decode_payload(payload))

    def _parse(self, document: Any) -> UserData:
        user_node = find_user(document)
        installations = [
            self._builder.installation_info(entry)
            for entry in get_list(user_node, "installs")
        ]
        return self._builder.user_data(user_node, installations)

    def get_typed(self, user: UserData) -> TypedUserData:
        return get_typed(user)

    def get_summary(self, user: UserData) -> str:
        return get_summary(user)
