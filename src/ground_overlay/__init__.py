"""Ground overlay value objects and services."""
