"""Domain layer: errors, entities, enums, protocols and validators."""
