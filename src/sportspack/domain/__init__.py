"""Domain layer: hierarchy model, inheritance resolution and provider sync."""
