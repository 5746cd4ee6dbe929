"""Sample schema modules used by the loader, CLI and execution tests."""
