"""API layer: orchestration, validation, formatting and the CLI."""
