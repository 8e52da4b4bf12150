"""Domain layer - playback logic independent of the CLI."""
