"""CLI command groups, one Typer app per domain."""
