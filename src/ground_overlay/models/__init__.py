"""Ground overlay domain models."""
