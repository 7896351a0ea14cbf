"""Infrastructure layer: persistence adapters, security services and wiring."""
