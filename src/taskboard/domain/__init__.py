"""Domain layer: entities, exceptions and store contracts."""
