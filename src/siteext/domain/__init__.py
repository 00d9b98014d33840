"""Domain layer: lifecycle stages, extension bindings, and menu models."""
