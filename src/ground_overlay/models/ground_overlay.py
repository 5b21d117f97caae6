"""Ground overlay value object: a geo-referenced image drawn over the map."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

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
)
from ground_overlay.models.geometry import BitmapDescriptor, LatLng, LatLngBounds, Offset
from ground_overlay.models.positioning import (
    InvalidPositioningConfiguration,
    Positioning,
    resolve_positioning,
)

TapCallback = Callable[[], None]

DEFAULT_LOCATION = LatLng(0.0, 0.0)

# Marks a copy_with argument that was not passed; None is a real override.
_UNSET: Any = object()


@dataclass(frozen=True)
class GroundOverlayId:
    """Identifies a ground overlay among the overlays of one map.

    The value only has to be unique within that collection, and keeping it
    unique is up to whoever owns the collection.
    """

    value: str


@dataclass(frozen=True, eq=False)
class GroundOverlay:
    """Immutable description of a ground overlay.

    ``location``, ``width``, ``height`` and ``bounds`` must form exactly one
    placement mode (see :mod:`ground_overlay.models.positioning`); passing
    ``None`` leaves a field out. Omitted ``location``/``width``/``height``
    are stored as their defaults, and the resolved mode is kept in
    :attr:`positioning`.

    Equality compares every field, including ``on_tap``. The hash only
    covers ``ground_overlay_id``, so overlays that share an id but differ
    elsewhere are unequal yet hash identically. An overlay keeps its hash
    when its style changes.
    """

    ground_overlay_id: GroundOverlayId
    consume_tap_events: bool = False
    # location/width/height accept None to mean "not given"; instances always hold values
    location: Optional[LatLng] = None
    z_index: int = DEFAULT_Z_INDEX
    on_tap: Optional[TapCallback] = None
    visible: bool = True
    bitmap_descriptor: BitmapDescriptor = field(default_factory=BitmapDescriptor.default_marker)
    bounds: Optional[LatLngBounds] = None
    width: Optional[float] = None
    height: Optional[float] = None
    bearing: float = DEFAULT_BEARING_DEG
    anchor: Offset = field(default_factory=Offset.zero)
    transparency: float = DEFAULT_TRANSPARENCY
    positioning: Positioning = field(init=False, repr=False)

    def __post_init__(self) -> None:
        positioning = resolve_positioning(self.location, self.width, self.height, self.bounds)
        object.__setattr__(self, "positioning", positioning)
        if self.location is None:
            object.__setattr__(self, "location", DEFAULT_LOCATION)
        object.__setattr__(self, "width", DEFAULT_WIDTH_M if self.width is None else float(self.width))
        object.__setattr__(self, "height", DEFAULT_HEIGHT_M if self.height is None else float(self.height))

    @classmethod
    def with_positioning(
        cls, ground_overlay_id: GroundOverlayId, positioning: Positioning, **style: Any
    ) -> "GroundOverlay":
        """Build an overlay from an explicit placement mode plus styling fields."""
        return cls(ground_overlay_id=ground_overlay_id, **positioning.explicit_fields(), **style)

    @classmethod
    def from_point_and_size(
        cls,
        ground_overlay_id: GroundOverlayId,
        location: LatLng,
        width: float,
        height: float,
        **style: Any,
    ) -> "GroundOverlay":
        """Place the overlay at a location with an explicit width and height in meters."""
        return cls(
            ground_overlay_id=ground_overlay_id,
            location=location,
            width=width,
            height=height,
            **style,
        )

    @classmethod
    def from_point_and_width(
        cls, ground_overlay_id: GroundOverlayId, location: LatLng, width: float, **style: Any
    ) -> "GroundOverlay":
        """Place the overlay at a location with a width; height follows the image."""
        return cls(ground_overlay_id=ground_overlay_id, location=location, width=width, **style)

    @classmethod
    def from_bounds(
        cls, ground_overlay_id: GroundOverlayId, bounds: LatLngBounds, **style: Any
    ) -> "GroundOverlay":
        """Stretch the overlay over a latitude/longitude rectangle."""
        return cls(ground_overlay_id=ground_overlay_id, bounds=bounds, **style)

    @classmethod
    def unpositioned(cls, ground_overlay_id: GroundOverlayId, **style: Any) -> "GroundOverlay":
        """Build an overlay without placement; the host decides where it goes."""
        return cls(ground_overlay_id=ground_overlay_id, **style)

    def copy_with(
        self,
        *,
        bitmap_descriptor: BitmapDescriptor = _UNSET,
        anchor: Offset = _UNSET,
        z_index: int = _UNSET,
        visible: bool = _UNSET,
        consume_tap_events: bool = _UNSET,
        width: Optional[float] = _UNSET,
        height: Optional[float] = _UNSET,
        bearing: float = _UNSET,
        location: Optional[LatLng] = _UNSET,
        bounds: Optional[LatLngBounds] = _UNSET,
        on_tap: Optional[TapCallback] = _UNSET,
        transparency: float = _UNSET,
        positioning: Positioning = _UNSET,
    ) -> "GroundOverlay":
        """Return a new overlay with the given fields replaced.

        Positioning fields start from what the current mode set (or from
        ``positioning`` when given) and then take the individual overrides,
        so the result is validated like any other construction.
        """
        base = self.positioning if positioning is _UNSET else positioning
        placement = base.explicit_fields()
        for name, value in (
            ("location", location),
            ("width", width),
            ("height", height),
            ("bounds", bounds),
        ):
            if value is not _UNSET:
                placement[name] = value

        return GroundOverlay(
            ground_overlay_id=self.ground_overlay_id,
            consume_tap_events=_pick(consume_tap_events, self.consume_tap_events),
            bitmap_descriptor=_pick(bitmap_descriptor, self.bitmap_descriptor),
            transparency=_pick(transparency, self.transparency),
            visible=_pick(visible, self.visible),
            bearing=_pick(bearing, self.bearing),
            anchor=_pick(anchor, self.anchor),
            z_index=_pick(z_index, self.z_index),
            on_tap=_pick(on_tap, self.on_tap),
            **placement,
        )

    def clone(self) -> "GroundOverlay":
        """Return an equal but distinct overlay."""
        return self.copy_with()

    def to_json(self) -> Dict[str, Any]:
        """Convert the overlay into a JSON-compatible mapping.

        ``on_tap`` is never written. ``location`` is always written, even for
        bounds-based overlays where it holds the default.
        """
        json: Dict[str, Any] = {}

        def add_if_present(field_name: str, value: Any) -> None:
            if value is not None:
                json[field_name] = value

        add_if_present(KEY_ID, self.ground_overlay_id.value)
        add_if_present(KEY_CONSUME_TAP_EVENTS, self.consume_tap_events)
        add_if_present(KEY_TRANSPARENCY, self.transparency)
        add_if_present(KEY_BEARING, self.bearing)
        add_if_present(KEY_VISIBLE, self.visible)
        add_if_present(KEY_Z_INDEX, self.z_index)
        add_if_present(KEY_HEIGHT, self.height)
        add_if_present(KEY_ANCHOR, self.anchor.to_json())
        add_if_present(KEY_BOUNDS, self.bounds.to_json() if self.bounds is not None else None)
        add_if_present(KEY_BITMAP, self.bitmap_descriptor.to_json())
        add_if_present(KEY_WIDTH, self.width)
        json[KEY_LOCATION] = self.location.to_json()
        return json

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return (
            self.ground_overlay_id == other.ground_overlay_id
            and self.bitmap_descriptor == other.bitmap_descriptor
            and self.consume_tap_events == other.consume_tap_events
            and self.transparency == other.transparency
            and self.location == other.location
            and self.bearing == other.bearing
            and self.visible == other.visible
            and self.height == other.height
            and self.z_index == other.z_index
            and self.bounds == other.bounds
            and self.anchor == other.anchor
            and self.width == other.width
            # Callables compare by identity (bound methods by receiver + function)
            and self.on_tap == other.on_tap
        )

    def __hash__(self) -> int:
        return hash(self.ground_overlay_id)


def _pick(override: Any, current: Any) -> Any:
    return current if override is _UNSET else override


__all__ = [
    "DEFAULT_LOCATION",
    "GroundOverlayId",
    "GroundOverlay",
    "InvalidPositioningConfiguration",
    "TapCallback",
]
