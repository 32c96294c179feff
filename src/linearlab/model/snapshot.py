"""
Shareable Snapshot Tokens
=========================
Encodes the editable scene into a short text token that fits in the fragment
of a link, and restores it again.

Token format:
    base64( utf-8( JSON {mode, matrix2D, vectors2D, matrix3D, vectors3D} ) )

Decoding is the only guarded parse in the application: anything that is not
a well-formed token yields None and is logged, the caller keeps its state.
"""
from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import replace
from typing import Any, Dict, Optional
from urllib.parse import unquote

from linearlab.config import SHARE_BASE_URL
from linearlab.model.presets import default_snapshot
from linearlab.model.types import DimensionMode, Snapshot, Vector, is_entry, is_valid_matrix, to_matrix

logger = logging.getLogger(__name__)


class SnapshotFormatError(ValueError):
    """Raised internally when a decoded payload does not describe a scene."""


def encode_snapshot(snapshot: Snapshot) -> str:
    """Serialize the scene to a base64 token."""
    payload = json.dumps(snapshot.to_dict(), separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")


def decode_snapshot(token: str, defaults: Optional[Snapshot] = None) -> Optional[Snapshot]:
    """
    Restore a scene from a token.

    Keys missing from the payload keep the values from `defaults`
    (the start-up scene when not given).

    Returns:
        The restored Snapshot, or None if the token is not well-formed.
    """
    base = defaults if defaults is not None else default_snapshot()
    try:
        raw = _b64decode(token)
        data = json.loads(raw.decode("utf-8"))
        return _snapshot_from_payload(data, base)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError, RecursionError, SnapshotFormatError) as e:
        logger.warning(f"Failed to restore state from shared link: {e}")
        return None


def share_url(token: str, base: str = SHARE_BASE_URL) -> str:
    """Build a shareable link carrying the token in its fragment."""
    return f"{base.split('#', 1)[0]}#{token}"


def token_from_text(text: str) -> str:
    """Extract the token from a pasted link, or return a bare token unchanged."""
    text = text.strip()
    if "#" in text:
        text = text.rsplit("#", 1)[1]
    return unquote(text).strip()


# ---- internals ----

def _b64decode(token: str) -> bytes:
    cleaned = "".join(token_from_text(token).split())
    if not cleaned:
        raise binascii.Error("empty token")
    # tolerate tokens whose trailing '=' padding was lost when copying
    cleaned += "=" * (-len(cleaned) % 4)
    return base64.b64decode(cleaned, validate=True)


def _snapshot_from_payload(data: Any, base: Snapshot) -> Snapshot:
    if not isinstance(data, dict):
        raise SnapshotFormatError(f"expected a JSON object, got {type(data).__name__}")

    updates: Dict[str, Any] = {}

    if data.get("mode"):
        try:
            updates["mode"] = DimensionMode(data["mode"])
        except ValueError:
            raise SnapshotFormatError(f"unknown mode {data['mode']!r}") from None

    for key, attr, size in (("matrix2D", "matrix2d", 2), ("matrix3D", "matrix3d", 3)):
        if data.get(key):
            if not is_valid_matrix(data[key], size):
                raise SnapshotFormatError(f"'{key}' is not a {size}x{size} matrix of finite numbers in range")
            updates[attr] = to_matrix(data[key])

    for key, attr, dim in (("vectors2D", "vectors2d", 2), ("vectors3D", "vectors3d", 3)):
        if data.get(key):
            items = data[key]
            if not isinstance(items, list):
                raise SnapshotFormatError(f"'{key}' must be a list")
            updates[attr] = tuple(_vector_from_payload(item, dim) for item in items)

    return replace(base, **updates)


def _vector_from_payload(item: Any, dim: int) -> Vector:
    if not isinstance(item, dict):
        raise SnapshotFormatError("vector entries must be objects")

    axes = ("x", "y") if dim == 2 else ("x", "y", "z")
    coords: Dict[str, float] = {}
    for axis in axes:
        value = item.get(axis)
        if not is_entry(value):
            raise SnapshotFormatError(f"vector component '{axis}' is not a finite number in range")
        coords[axis] = float(value)

    label = item.get("label")
    color = item.get("color")
    if not isinstance(label, str) or not isinstance(color, str):
        raise SnapshotFormatError("vector 'label' and 'color' must be strings")

    return Vector(label=label, color=color, **coords)
