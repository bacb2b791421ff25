#!/usr/bin/env python3
"""
Main entry point for the agent-browser CLI.

This delegates to the UI layer in agent_browser.ui.cli to keep the
console script mapping stable.
"""

from agent_browser.ui.cli import run as agent_browser


if __name__ == "__main__":
    agent_browser()
