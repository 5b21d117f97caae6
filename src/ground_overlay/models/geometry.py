"""Geographic and image value types composed by ground overlays."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from ground_overlay.constants import MAX_MARKER_HUE, MIN_MARKER_HUE


@dataclass(frozen=True)
class LatLng:
    """Geographic point in degrees.

    Latitude is clamped to [-90, 90]; longitude is wrapped into [-180, 180).
    """

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        latitude = max(-90.0, min(90.0, float(self.latitude)))
        longitude = float(self.longitude)
        if not -180.0 <= longitude < 180.0:
            longitude = (longitude + 180.0) % 360.0 - 180.0
        object.__setattr__(self, "latitude", latitude)
        object.__setattr__(self, "longitude", longitude)

    def to_json(self) -> Dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class LatLngBounds:
    """Latitude/longitude aligned rectangle."""

    southwest: LatLng
    northeast: LatLng

    def __post_init__(self) -> None:
        if self.southwest.latitude > self.northeast.latitude:
            raise ValueError(
                "southwest latitude must not exceed northeast latitude "
                f"({self.southwest.latitude} > {self.northeast.latitude})"
            )

    def contains(self, point: LatLng) -> bool:
        """Return True if the point lies inside the bounds (edges included)."""
        if not self.southwest.latitude <= point.latitude <= self.northeast.latitude:
            return False
        west = self.southwest.longitude
        east = self.northeast.longitude
        if west <= east:
            return west <= point.longitude <= east
        # Bounds crossing the antimeridian
        return point.longitude >= west or point.longitude <= east

    def to_json(self) -> Dict[str, Dict[str, float]]:
        return {
            "southwest": self.southwest.to_json(),
            "northeast": self.northeast.to_json(),
        }


@dataclass(frozen=True)
class Offset:
    """Fractional offset within an image, (0, 0) being the top-left corner."""

    dx: float
    dy: float

    @classmethod
    def zero(cls) -> "Offset":
        return cls(0.0, 0.0)

    def to_json(self) -> List[float]:
        return [self.dx, self.dy]


@dataclass(frozen=True)
class BitmapDescriptor:
    """Reference to the image drawn for an overlay.

    The descriptor is an opaque payload understood by the rendering host; it
    serializes as a list whose first element names the image source.
    """

    payload: Tuple[Any, ...]

    @classmethod
    def default_marker(cls) -> "BitmapDescriptor":
        return cls(("defaultMarker",))

    @classmethod
    def default_marker_with_hue(cls, hue: float) -> "BitmapDescriptor":
        if not MIN_MARKER_HUE <= hue < MAX_MARKER_HUE:
            raise ValueError(f"Marker hue must be within [0, 360), got {hue}")
        return cls(("defaultMarker", float(hue)))

    @classmethod
    def from_asset(cls, asset_name: str, scale: float = 1.0) -> "BitmapDescriptor":
        return cls(("fromAssetImage", asset_name, float(scale)))

    @classmethod
    def from_bytes(cls, data: bytes) -> "BitmapDescriptor":
        return cls(("fromBytes", bytes(data)))

    def to_json(self) -> List[Any]:
        return list(self.payload)


__all__ = [
    "LatLng",
    "LatLngBounds",
    "Offset",
    "BitmapDescriptor",
]
