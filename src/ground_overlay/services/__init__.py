"""Service layer for overlay snapshots and collection updates."""

__all__ = [
    "overlay_serializer",
    "overlay_updates",
]
