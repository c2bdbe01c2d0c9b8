"""Locate the structural anchors inside an API response document."""

from __future__ import annotations

from typing import Any

import orjson

from .exceptions import PayloadDecodeError, StructuralError

_USER_MARKERS = ("installs", "_id", "email")
_INSTALL_MARKERS = ("unique", "groups")


def decode_payload(payload: str | bytes) -> Any:
    """Decode JSON text, raising PayloadDecodeError when it is malformed."""
    try:
        return orjson.loads(payload)
    except orjson.JSONDecodeError as exc:
        raise PayloadDecodeError(f"Invalid JSON: {exc}") from exc


def _looks_like(node: Any, markers: tuple[str, ...]) -> bool:
    return isinstance(node, dict) and any(key in node for key in markers)


def _looks_like_user(node: Any) -> bool:
    if not isinstance(node, dict):
        return False
    if isinstance(node.get("installs"), list):
        return True
    return _looks_like(node, _USER_MARKERS) and not _looks_like(node, _INSTALL_MARKERS)


def detach(document: Any) -> Any:
    """Return a deep copy of a JSON tree.

    The walk is iterative, so any depth the decoder accepts can be copied.
    Shared or repeated containers are copied once.
    """
    if not isinstance(document, (dict, list)):
        return document
    root: Any = {} if isinstance(document, dict) else []
    copies: dict[int, Any] = {id(document): root}
    pending = [(document, root)]
    while pending:
        source, target = pending.pop()
        items = source.items() if isinstance(source, dict) else enumerate(source)
        for key, value in items:
            if isinstance(value, (dict, list)):
                copied = copies.get(id(value))
                if copied is None:
                    copied = {} if isinstance(value, dict) else []
                    copies[id(value)] = copied
                    pending.append((value, copied))
                value = copied
            if isinstance(target, dict):
                target[key] = value
            else:
                target.append(value)
    return root


def find_user(document: Any) -> dict[str, Any]:
    """Return the user object of a response envelope or offline dump.

    Accepts ``{"success": ..., "data": {"user": {...}}}``, ``{"user": {...}}``
    or the bare user object. A bare object carrying installation markers
    (``unique``, ``groups``) without an ``installs`` array is not a user.
    """
    if not isinstance(document, dict):
        raise StructuralError("Document is not a JSON object")
    if "data" in document:
        data = document["data"]
        user = data.get("user") if isinstance(data, dict) else None
        if not isinstance(user, dict):
            raise StructuralError("Response envelope has no data.user object")
        return user
    user = document.get("user")
    if isinstance(user, dict):
        return user
    if _looks_like_user(document):
        return document
    raise StructuralError("No user object found in document")


def find_installs(document: Any) -> list[Any]:
    """Return the installation entries of a document.

    Looks for a user's ``installs`` array first, then a single installation
    under ``data.install``, then a bare installation object. Raises
    StructuralError when none of these is present.
    """
    if not isinstance(document, dict):
        raise StructuralError("Document is not a JSON object")
    candidates: list[Any] = [document]
    data = document.get("data")
    if isinstance(data, dict):
        candidates.insert(0, data)
    for node in candidates:
        user = node.get("user")
        if isinstance(user, dict) and isinstance(user.get("installs"), list):
            return list(user["installs"])
        if isinstance(node.get("installs"), list):
            return list(node["installs"])
        install = node.get("install")
        if isinstance(install, dict):
            return [install]
        if _looks_like(node, _INSTALL_MARKERS):
            return [node]
    raise StructuralError("No installation object found in document")
