"""Domain layer: snapshot model, trace tree, configuration and ports."""
