"""JSON/YAML snapshot utilities for ground overlays."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import yaml

from ground_overlay.constants import (
    DEFAULT_BEARING_DEG,
    DEFAULT_HEIGHT_M,
    DEFAULT_TRANSPARENCY,
    DEFAULT_WIDTH_M,
    DEFAULT_Z_INDEX,
    KEY_ANCHOR,
    KEY_BEARING,
    KEY_BITMAP,
    KEY_BOUNDS,
    KEY_CONSUME_TAP_EVENTS,
    KEY_HEIGHT,
    KEY_ID,
    KEY_LOCATION,
    KEY_TRANSPARENCY,
    KEY_VISIBLE,
    KEY_WIDTH,
    KEY_Z_INDEX,
    OVERLAY_JSON_KEYS,
)
from ground_overlay.models.geometry import BitmapDescriptor, LatLng, LatLngBounds, Offset
from ground_overlay.models.ground_overlay import DEFAULT_LOCATION, GroundOverlay, GroundOverlayId
from ground_overlay.models.positioning import (
    BoundsBased,
    Positioning,
    PointAndSize,
    PointAndWidth,
    Unset,
)


class OverlayDocumentError(Exception):
    """Raised when a ground overlay snapshot fails validation."""


@dataclass(frozen=True)
class OverlayLoadResult:
    """Outcome of rebuilding an overlay from a snapshot."""

    overlay: GroundOverlay
    warnings: tuple[str, ...] = ()


def dump_overlay_json(overlay: GroundOverlay, indent: Optional[int] = None) -> str:
    """Serialize the overlay's JSON projection to text."""
    try:
        return json.dumps(overlay.to_json(), indent=indent)
    except TypeError as exc:
        raise OverlayDocumentError(
            f"Ground overlay {overlay.ground_overlay_id.value!r} cannot be written as JSON: {exc}"
        ) from exc


def dump_overlay_yaml(overlay: GroundOverlay, destination: Optional[Path] = None) -> str:
    """Serialize the overlay to YAML, optionally writing to disk."""
    yaml_text = yaml.safe_dump(overlay.to_json(), sort_keys=False)

    if destination is not None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(yaml_text, encoding="utf-8")

    return yaml_text


def load_overlay_yaml(yaml_path: Path) -> OverlayLoadResult:
    """Load an overlay snapshot previously written by :func:`dump_overlay_yaml`."""
    if not yaml_path.exists():
        raise OverlayDocumentError(f"YAML file does not exist: {yaml_path}")

    with yaml_path.open("r", encoding="utf-8") as handle:
        parsed = yaml.safe_load(handle)

    return overlay_from_json(parsed)


def overlay_from_json(data: Any) -> OverlayLoadResult:
    """Rebuild a :class:`GroundOverlay` from a ``to_json()`` mapping.

    The tap callback is not part of the snapshot, so the result never has one.
    """
    if not isinstance(data, Mapping):
        raise OverlayDocumentError("Ground overlay snapshot must be a mapping at the top level")

    try:
        overlay_id = _expect_str(data, KEY_ID)
    except KeyError as exc:
        raise OverlayDocumentError(f"Missing required field: {exc.args[0]}") from exc

    positioning, placement_warnings = _parse_positioning(data)
    overlay = GroundOverlay.with_positioning(
        GroundOverlayId(overlay_id),
        positioning,
        consume_tap_events=_expect_bool(data, KEY_CONSUME_TAP_EVENTS, default=False),
        transparency=_expect_float(data, KEY_TRANSPARENCY, default=DEFAULT_TRANSPARENCY),
        bearing=_expect_float(data, KEY_BEARING, default=DEFAULT_BEARING_DEG),
        visible=_expect_bool(data, KEY_VISIBLE, default=True),
        z_index=_expect_int(data, KEY_Z_INDEX, default=DEFAULT_Z_INDEX),
        anchor=_parse_anchor(data.get(KEY_ANCHOR)),
        bitmap_descriptor=_parse_bitmap(data.get(KEY_BITMAP)),
    )
    return OverlayLoadResult(overlay=overlay, warnings=_collect_warnings(data) + placement_warnings)


def key_by_overlay_id(overlays: Iterable[GroundOverlay]) -> Dict[GroundOverlayId, GroundOverlay]:
    """Index overlays by id; later overlays win on duplicate ids."""
    return {overlay.ground_overlay_id: overlay for overlay in overlays}


def serialize_overlay_set(overlays: Iterable[GroundOverlay]) -> List[Dict[str, Any]]:
    return [overlay.to_json() for overlay in overlays]


def _parse_positioning(data: Mapping[str, Any]) -> Tuple[Positioning, Tuple[str, ...]]:
    location = DEFAULT_LOCATION
    if KEY_LOCATION in data:
        location = _parse_lat_lng(data[KEY_LOCATION], KEY_LOCATION)
    width = _expect_float(data, KEY_WIDTH, default=DEFAULT_WIDTH_M)
    height = _expect_float(data, KEY_HEIGHT, default=DEFAULT_HEIGHT_M)
    # to_json writes these defaults for bounds-based and unset overlays
    point_fields_are_defaults = (
        location == DEFAULT_LOCATION and width == DEFAULT_WIDTH_M and height == DEFAULT_HEIGHT_M
    )

    if data.get(KEY_BOUNDS) is not None:
        bounds = _parse_bounds(data[KEY_BOUNDS])
        if point_fields_are_defaults:
            return BoundsBased(bounds=bounds), ()
        return BoundsBased(bounds=bounds), (
            "Snapshot has bounds together with location/width/height; "
            "the bounds were used and the point placement was dropped",
        )

    if point_fields_are_defaults:
        return Unset(), ()
    if height == DEFAULT_HEIGHT_M:
        return PointAndWidth(location=location, width=width), ()
    return PointAndSize(location=location, width=width, height=height), ()


def _parse_lat_lng(raw: Any, field_name: str) -> LatLng:
    if not isinstance(raw, Mapping):
        raise OverlayDocumentError(f"{field_name} must be a mapping with latitude and longitude")
    try:
        latitude = _expect_float(raw, "latitude")
        longitude = _expect_float(raw, "longitude")
    except KeyError as exc:
        raise OverlayDocumentError(f"{field_name} missing {exc.args[0]}") from exc
    return LatLng(latitude, longitude)


def _parse_bounds(raw: Any) -> LatLngBounds:
    if not isinstance(raw, Mapping):
        raise OverlayDocumentError("bounds must be a mapping with southwest and northeast")
    southwest = _parse_lat_lng(raw.get("southwest"), "bounds.southwest")
    northeast = _parse_lat_lng(raw.get("northeast"), "bounds.northeast")
    try:
        return LatLngBounds(southwest=southwest, northeast=northeast)
    except ValueError as exc:
        raise OverlayDocumentError(f"Invalid bounds: {exc}") from exc


def _parse_anchor(raw: Any) -> Offset:
    if raw is None:
        return Offset.zero()
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise OverlayDocumentError("anchor must be a 2-long array [dx, dy]")
    dx, dy = raw
    if not _is_number(dx) or not _is_number(dy):
        raise OverlayDocumentError("anchor values must be numeric")
    return Offset(float(dx), float(dy))


def _parse_bitmap(raw: Any) -> BitmapDescriptor:
    if raw is None:
        return BitmapDescriptor.default_marker()
    if not isinstance(raw, (list, tuple)) or not raw or not isinstance(raw[0], str):
        raise OverlayDocumentError("bitmap must be a non-empty array starting with its source name")
    return BitmapDescriptor(tuple(raw))


def _expect_str(mapping: Mapping[str, Any], key: str) -> str:
    value = mapping[key]
    if not isinstance(value, str):
        raise OverlayDocumentError(f"Field '{key}' must be a string")
    return value


def _expect_bool(mapping: Mapping[str, Any], key: str, default: bool) -> bool:
    value = mapping.get(key, default)
    if not isinstance(value, bool):
        raise OverlayDocumentError(f"Field '{key}' must be a boolean")
    return value


def _expect_int(mapping: Mapping[str, Any], key: str, default: int) -> int:
    value = mapping.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise OverlayDocumentError(f"Field '{key}' must be an integer")
    return value


def _expect_float(mapping: Mapping[str, Any], key: str, default: Optional[float] = None) -> float:
    if key not in mapping:
        if default is None:
            raise KeyError(key)
        return float(default)
    value = mapping[key]
    if not _is_number(value):
        raise OverlayDocumentError(f"Field '{key}' must be a number")
    return float(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _collect_warnings(data: Mapping[str, Any]) -> tuple[str, ...]:
    warnings = []
    unknown = sorted(str(key) for key in data.keys() if key not in OVERLAY_JSON_KEYS)
    if unknown:
        warnings.append("Snapshot contains keys that are ignored: " + ", ".join(unknown))
    if KEY_LOCATION not in data:
        warnings.append("Snapshot has no location; the default location was used")
    return tuple(warnings)


__all__ = [
    "OverlayDocumentError",
    "OverlayLoadResult",
    "dump_overlay_json",
    "dump_overlay_yaml",
    "load_overlay_yaml",
    "overlay_from_json",
    "key_by_overlay_id",
    "serialize_overlay_set",
]
