"""Shared helpers (logging, HTTP) used by the CLI and the project core."""
