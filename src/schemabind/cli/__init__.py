"""Command line interface for schemabind."""
