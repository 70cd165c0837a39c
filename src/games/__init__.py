"""Per-game GameConfig factories."""
