"""Settings, session addressing, errors and command parsing."""
