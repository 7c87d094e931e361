"""Command line interface for streamjson."""
