"""Error kinds raised by the agent-browser client.

Every client-side failure derives from AgentBrowserError so the CLI can
catch it once and hand it to the renderer. The message of each error names
the phase that failed.
"""

from typing import Optional, Sequence


class AgentBrowserError(Exception):
    """Base class for all client-side failures."""


class CommandParseError(AgentBrowserError):
    """Malformed arguments for a known command."""

    def __init__(self, message: str, usage: Optional[str] = None):
        super().__init__(message)
        self.usage = usage


class UnknownCommandError(CommandParseError):
    """The first token does not name any known command."""

    def __init__(self, command: str):
        super().__init__(f"Unknown command: {command}")
        self.command = command


class DaemonLocateError(AgentBrowserError):
    """No daemon entry point found among the candidate locations."""

    def __init__(self, candidates: Sequence[str]):
        super().__init__(
            "Daemon not found. Run from project directory or ensure daemon.js "
            "is alongside the executable (looked in: "
            + ", ".join(str(c) for c in candidates)
            + ")"
        )
        self.candidates = list(candidates)


class DaemonLaunchError(AgentBrowserError):
    """The daemon process could not be spawned."""


class DaemonStartTimeout(AgentBrowserError):
    """The daemon was launched but its socket never appeared."""


class ExchangeError(AgentBrowserError):
    """Transport or protocol failure during a request/response exchange."""


class DaemonConnectError(ExchangeError):
    pass


class DaemonWriteError(ExchangeError):
    pass


class DaemonReadError(ExchangeError):
    pass


class ProtocolDecodeError(ExchangeError):
    """A reply arrived but does not have the response shape."""
