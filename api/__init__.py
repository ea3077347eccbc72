"""Native Pay Demo - HTTP API layer."""
