"""Request projection, pattern matching and report assembly."""
