"""agent-browser: command-line client for a long-lived browser automation daemon."""

__version__ = "0.3.0"
