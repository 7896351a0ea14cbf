"""Domain layer: entities, value objects, interfaces and services."""
