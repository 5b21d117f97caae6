"""Unit tests for the GroundOverlay value object."""

from __future__ import annotations

import dataclasses

import pytest

from ground_overlay.models.geometry import BitmapDescriptor, LatLng, LatLngBounds, Offset
from ground_overlay.models.ground_overlay import (
    GroundOverlay,
    GroundOverlayId,
    InvalidPositioningConfiguration,
)
from ground_overlay.models.positioning import BoundsBased, PointAndSize, PointAndWidth, Unset

BOUNDS = LatLngBounds(southwest=LatLng(10.0, 20.0), northeast=LatLng(11.0, 21.0))


def _tap() -> None:
    pass


def _full_overlay(**overrides) -> GroundOverlay:
    fields = dict(
        ground_overlay_id=GroundOverlayId("go1"),
        consume_tap_events=True,
        location=LatLng(10.0, 20.0),
        z_index=3,
        on_tap=_tap,
        visible=False,
        bitmap_descriptor=BitmapDescriptor.from_asset("images/floor.png"),
        width=100.0,
        height=50.0,
        bearing=45.0,
        anchor=Offset(0.5, 0.5),
        transparency=0.25,
    )
    fields.update(overrides)
    return GroundOverlay(**fields)


def test_defaults_are_applied():
    overlay = GroundOverlay(ground_overlay_id=GroundOverlayId("go1"))

    assert overlay.consume_tap_events is False
    assert overlay.location == LatLng(0.0, 0.0)
    assert overlay.z_index == 0
    assert overlay.visible is True
    assert overlay.bitmap_descriptor == BitmapDescriptor.default_marker()
    assert overlay.width == 0.0
    assert overlay.height == 0.0
    assert overlay.bearing == 0.0
    assert overlay.anchor == Offset(0.0, 0.0)
    assert overlay.transparency == 0.0
    assert overlay.bounds is None
    assert overlay.on_tap is None
    assert overlay.positioning == Unset()


def test_positioning_mode_is_resolved_from_fields():
    overlay_id = GroundOverlayId("go1")
    location = LatLng(1.0, 2.0)

    assert isinstance(
        GroundOverlay(ground_overlay_id=overlay_id, location=location, width=5.0, height=4.0).positioning,
        PointAndSize,
    )
    point_and_width = GroundOverlay(ground_overlay_id=overlay_id, location=location, width=5.0)
    assert point_and_width.positioning == PointAndWidth(location=location, width=5.0)
    assert point_and_width.height == 0.0

    bounds_overlay = GroundOverlay(ground_overlay_id=overlay_id, bounds=BOUNDS)
    assert bounds_overlay.positioning == BoundsBased(bounds=BOUNDS)
    assert bounds_overlay.location == LatLng(0.0, 0.0)


@pytest.mark.parametrize(
    "fields",
    [
        {"bounds": BOUNDS, "location": LatLng(1.0, 2.0)},
        {"bounds": BOUNDS, "width": 1.0},
        {"location": LatLng(1.0, 2.0)},
        {"width": 1.0, "height": 2.0},
        {"height": 2.0},
    ],
)
def test_invalid_positioning_is_rejected(fields):
    with pytest.raises(InvalidPositioningConfiguration):
        GroundOverlay(ground_overlay_id=GroundOverlayId("go1"), **fields)


def test_other_fields_are_not_validated():
    overlay = GroundOverlay(
        ground_overlay_id=GroundOverlayId("go1"),
        transparency=7.5,
        z_index=-1000,
        bearing=720.0,
    )

    assert overlay.transparency == 7.5
    assert overlay.z_index == -1000
    assert overlay.bearing == 720.0


def test_overlay_is_immutable():
    overlay = _full_overlay()

    with pytest.raises(dataclasses.FrozenInstanceError):
        overlay.z_index = 4  # type: ignore[misc]


def test_named_factories_match_keyword_construction():
    overlay_id = GroundOverlayId("go1")
    location = LatLng(1.0, 2.0)

    assert GroundOverlay.from_point_and_size(overlay_id, location, 5.0, 4.0, z_index=2) == GroundOverlay(
        ground_overlay_id=overlay_id, location=location, width=5.0, height=4.0, z_index=2
    )
    assert GroundOverlay.from_point_and_width(overlay_id, location, 5.0).positioning == PointAndWidth(
        location=location, width=5.0
    )
    assert GroundOverlay.from_bounds(overlay_id, BOUNDS, visible=False).bounds == BOUNDS
    assert GroundOverlay.unpositioned(overlay_id).positioning == Unset()
    assert GroundOverlay.with_positioning(
        overlay_id, PointAndSize(location=location, width=5.0, height=4.0)
    ) == GroundOverlay.from_point_and_size(overlay_id, location, 5.0, 4.0)


def test_copy_with_overrides_and_inherits_fields():
    original = _full_overlay()

    copy = original.copy_with(z_index=9, visible=True)

    assert copy.ground_overlay_id == original.ground_overlay_id
    assert copy.z_index == 9
    assert copy.visible is True
    assert copy.consume_tap_events == original.consume_tap_events
    assert copy.location == original.location
    assert copy.bitmap_descriptor == original.bitmap_descriptor
    assert copy.width == original.width
    assert copy.height == original.height
    assert copy.bearing == original.bearing
    assert copy.anchor == original.anchor
    assert copy.transparency == original.transparency
    assert copy.on_tap is original.on_tap
    assert original.z_index == 3


def test_copy_with_keeps_point_and_width_mode():
    original = GroundOverlay(ground_overlay_id=GroundOverlayId("go1"), location=LatLng(1.0, 2.0), width=5.0)

    copy = original.copy_with(bearing=10.0)

    assert copy.positioning == original.positioning
    assert copy.bearing == 10.0


def test_copy_with_bounds_on_bounds_overlay():
    original = GroundOverlay(ground_overlay_id=GroundOverlayId("go1"), bounds=BOUNDS)
    new_bounds = LatLngBounds(southwest=LatLng(0.0, 0.0), northeast=LatLng(1.0, 1.0))

    copy = original.copy_with(bounds=new_bounds, transparency=0.5)

    assert copy.bounds == new_bounds
    assert copy.location == LatLng(0.0, 0.0)
    assert copy.transparency == 0.5


def test_copy_with_invalid_combination_fails_like_construction():
    original = _full_overlay()

    with pytest.raises(InvalidPositioningConfiguration):
        original.copy_with(bounds=BOUNDS)


def test_copy_with_positioning_switches_mode():
    original = _full_overlay()

    copy = original.copy_with(positioning=BoundsBased(bounds=BOUNDS))

    assert copy.bounds == BOUNDS
    assert copy.location == LatLng(0.0, 0.0)
    assert copy.width == 0.0
    assert copy.z_index == original.z_index


def test_copy_with_none_clears_optional_fields():
    original = _full_overlay()

    copy = original.copy_with(on_tap=None, height=None)

    assert copy.on_tap is None
    assert copy.positioning == PointAndWidth(location=original.location, width=original.width)


def test_clone_is_equal_but_distinct():
    original = _full_overlay()

    clone = original.clone()

    assert clone == original
    assert clone is not original


def test_same_id_hashes_identically_but_compares_unequal():
    first = _full_overlay()
    second = _full_overlay(z_index=99, visible=True)

    assert first != second
    assert hash(first) == hash(second)
    assert hash(first) == hash(GroundOverlayId("go1"))


def test_equality_covers_every_field():
    assert _full_overlay() == _full_overlay()

    assert _full_overlay() != _full_overlay(z_index=4)
    assert _full_overlay() != _full_overlay(ground_overlay_id=GroundOverlayId("go2"))
    assert _full_overlay() != _full_overlay(bitmap_descriptor=BitmapDescriptor.default_marker())
    assert _full_overlay() != _full_overlay(anchor=Offset(0.0, 0.0))
    assert _full_overlay() != _full_overlay(height=51.0)
    assert _full_overlay() != _full_overlay(on_tap=None)
    assert _full_overlay() != _full_overlay(on_tap=lambda: None)


def test_equality_with_absent_callbacks():
    first = GroundOverlay(ground_overlay_id=GroundOverlayId("go1"), bounds=BOUNDS)
    second = GroundOverlay(ground_overlay_id=GroundOverlayId("go1"), bounds=BOUNDS)

    assert first == second
    assert first != "go1"


def test_bound_method_callbacks_compare_by_receiver():
    class Handler:
        def on_tap(self) -> None:
            pass

    handler = Handler()
    first = _full_overlay(on_tap=handler.on_tap)
    second = _full_overlay(on_tap=handler.on_tap)

    assert first == second
    assert first != _full_overlay(on_tap=Handler().on_tap)


def test_overlays_work_as_set_members_keyed_by_id():
    first = _full_overlay()
    changed = first.copy_with(z_index=10)

    overlays = {first, changed, first.clone()}

    assert len(overlays) == 2


def test_to_json_point_and_size():
    overlay = GroundOverlay(
        ground_overlay_id=GroundOverlayId("go1"),
        location=LatLng(10.0, 20.0),
        width=5.0,
        height=5.0,
    )

    json = overlay.to_json()

    assert json == {
        "groundOverlayId": "go1",
        "consumeTapEvents": False,
        "transparency": 0.0,
        "bearing": 0.0,
        "visible": True,
        "zIndex": 0,
        "height": 5.0,
        "anchor": [0.0, 0.0],
        "bitmap": ["defaultMarker"],
        "width": 5.0,
        "location": {"latitude": 10.0, "longitude": 20.0},
    }
    assert "bounds" not in json


def test_to_json_bounds_mode_still_writes_default_location():
    overlay = GroundOverlay(ground_overlay_id=GroundOverlayId("go1"), bounds=BOUNDS)

    json = overlay.to_json()

    assert json["bounds"] == {
        "southwest": {"latitude": 10.0, "longitude": 20.0},
        "northeast": {"latitude": 11.0, "longitude": 21.0},
    }
    assert json["location"] == {"latitude": 0.0, "longitude": 0.0}
    assert json["width"] == 0.0
    assert json["height"] == 0.0


def test_to_json_anchor_and_callback():
    overlay = _full_overlay(anchor=Offset(0.25, 0.75))

    json = overlay.to_json()

    assert json["anchor"] == [0.25, 0.75]
    assert "onTap" not in json
    assert "on_tap" not in json
    assert json["bitmap"] == ["fromAssetImage", "images/floor.png", 1.0]
    assert json["consumeTapEvents"] is True
    assert json["zIndex"] == 3


def test_integer_sizes_are_stored_as_floats():
    overlay = GroundOverlay(ground_overlay_id=GroundOverlayId("go1"), location=LatLng(1.0, 2.0), width=5, height=3)

    assert isinstance(overlay.width, float)
    assert isinstance(overlay.height, float)
    assert overlay.width == overlay.positioning.width
    assert overlay.to_json()["width"] == 5.0
    assert repr(overlay.to_json()["height"]) == "3.0"
