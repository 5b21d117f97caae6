"""Placement modes for ground overlays.

A ground overlay is placed in exactly one of four ways:

1. ``PointAndSize``  - location plus width and height (meters)
2. ``PointAndWidth`` - location plus width; height follows the image aspect ratio
3. ``BoundsBased``   - a latitude/longitude rectangle
4. ``Unset``         - nothing given; the host decides

See https://developers.google.com/maps/documentation/android-sdk/groundoverlay#add_an_overlay
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from ground_overlay.models.geometry import LatLng, LatLngBounds

POSITIONING_FIELDS = ("location", "width", "height", "bounds")


class InvalidPositioningConfiguration(ValueError):
    """Raised when location, width, height and bounds do not form a valid placement mode."""

    def __init__(self, present_fields: Tuple[str, ...]) -> None:
        self.present_fields = present_fields
        given = ", ".join(present_fields) if present_fields else "none"
        super().__init__(
            "Only one of the ground overlay positioning modes is allowed: "
            "location+width+height, location+width, bounds, or none "
            f"(got: {given})"
        )


@dataclass(frozen=True)
class PointAndSize:
    location: LatLng
    width: float
    height: float

    def explicit_fields(self) -> Dict[str, Any]:
        return {"location": self.location, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class PointAndWidth:
    location: LatLng
    width: float

    def explicit_fields(self) -> Dict[str, Any]:
        return {"location": self.location, "width": self.width}


@dataclass(frozen=True)
class BoundsBased:
    bounds: LatLngBounds

    def explicit_fields(self) -> Dict[str, Any]:
        return {"bounds": self.bounds}


@dataclass(frozen=True)
class Unset:
    def explicit_fields(self) -> Dict[str, Any]:
        return {}


Positioning = Union[PointAndSize, PointAndWidth, BoundsBased, Unset]


def resolve_positioning(
    location: Optional[LatLng] = None,
    width: Optional[float] = None,
    height: Optional[float] = None,
    bounds: Optional[LatLngBounds] = None,
) -> Positioning:
    """Map the flat positioning fields onto a placement mode.

    ``None`` marks a field as absent. Any combination other than the four
    modes raises :class:`InvalidPositioningConfiguration`.
    """
    values = {"location": location, "width": width, "height": height, "bounds": bounds}
    present = tuple(name for name in POSITIONING_FIELDS if values[name] is not None)

    if present == ("location", "width", "height"):
        return PointAndSize(location=location, width=float(width), height=float(height))
    if present == ("location", "width"):
        return PointAndWidth(location=location, width=float(width))
    if present == ("bounds",):
        return BoundsBased(bounds=bounds)
    if not present:
        return Unset()
    raise InvalidPositioningConfiguration(present)


__all__ = [
    "POSITIONING_FIELDS",
    "InvalidPositioningConfiguration",
    "PointAndSize",
    "PointAndWidth",
    "BoundsBased",
    "Unset",
    "Positioning",
    "resolve_positioning",
]
