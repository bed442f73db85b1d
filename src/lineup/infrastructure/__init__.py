"""Infrastructure layer: registry storage and catalog file loading."""
