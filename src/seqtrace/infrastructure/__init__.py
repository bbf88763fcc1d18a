"""Infrastructure layer: snapshot index, filters and config loading."""
