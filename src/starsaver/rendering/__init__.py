"""Chart writers that consume computed sky frames."""
