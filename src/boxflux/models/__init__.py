"""Model configuration, volume variables and spatial parameters."""
