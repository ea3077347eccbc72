"""Native Pay Demo - core layers (domain, application, infrastructure, settings)."""
