"""Differences between two generations of a map's ground overlays."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable

from ground_overlay.models.ground_overlay import GroundOverlay, GroundOverlayId


@dataclass(frozen=True)
class GroundOverlayUpdates:
    """Overlays to add, change and remove when moving from one set to another."""

    overlays_to_add: FrozenSet[GroundOverlay] = field(default_factory=frozenset)
    overlays_to_change: FrozenSet[GroundOverlay] = field(default_factory=frozenset)
    overlay_ids_to_remove: FrozenSet[GroundOverlayId] = field(default_factory=frozenset)

    @classmethod
    def from_overlays(
        cls, previous: Iterable[GroundOverlay], current: Iterable[GroundOverlay]
    ) -> "GroundOverlayUpdates":
        previous_by_id = _index_unique(previous, "previous")
        current_by_id = _index_unique(current, "current")

        to_add = frozenset(
            overlay for overlay_id, overlay in current_by_id.items() if overlay_id not in previous_by_id
        )
        to_remove = frozenset(
            overlay_id for overlay_id in previous_by_id if overlay_id not in current_by_id
        )
        # Same id, any field different (including the tap callback)
        to_change = frozenset(
            overlay
            for overlay_id, overlay in current_by_id.items()
            if overlay_id in previous_by_id and previous_by_id[overlay_id] != overlay
        )
        return cls(overlays_to_add=to_add, overlays_to_change=to_change, overlay_ids_to_remove=to_remove)

    @property
    def is_empty(self) -> bool:
        return not (self.overlays_to_add or self.overlays_to_change or self.overlay_ids_to_remove)

    def to_json(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.overlays_to_add:
            payload["groundOverlaysToAdd"] = _sorted_json(self.overlays_to_add)
        if self.overlays_to_change:
            payload["groundOverlaysToChange"] = _sorted_json(self.overlays_to_change)
        if self.overlay_ids_to_remove:
            payload["groundOverlayIdsToRemove"] = sorted(
                overlay_id.value for overlay_id in self.overlay_ids_to_remove
            )
        return payload


def _index_unique(overlays: Iterable[GroundOverlay], label: str) -> Dict[GroundOverlayId, GroundOverlay]:
    indexed: Dict[GroundOverlayId, GroundOverlay] = {}
    for overlay in overlays:
        if overlay.ground_overlay_id in indexed:
            raise ValueError(
                f"Duplicate ground overlay id in {label} overlays: {overlay.ground_overlay_id.value}"
            )
        indexed[overlay.ground_overlay_id] = overlay
    return indexed


def _sorted_json(overlays: Iterable[GroundOverlay]) -> list:
    ordered = sorted(overlays, key=lambda overlay: overlay.ground_overlay_id.value)
    return [overlay.to_json() for overlay in ordered]


__all__ = ["GroundOverlayUpdates"]
