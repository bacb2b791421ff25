"""Client side of the agent-browser daemon.

The daemon is a long-running process that owns the browser. This package
starts it when needed and talks to it over a per-session Unix socket.

- DaemonSupervisor: detects a live daemon, or launches one and waits for its socket
- DaemonClient: one request/response exchange per connection
- protocol: request variants, Response, and the line-delimited JSON codec
"""

from agent_browser.daemon.client import DaemonClient
from agent_browser.daemon.supervisor import DaemonSupervisor, ProcessProbe
from agent_browser.daemon.protocol import (
    Request,
    Response,
    serialize_request,
    deserialize_request,
    serialize_response,
    deserialize_response,
)

__all__ = [
    "DaemonClient",
    "DaemonSupervisor",
    "ProcessProbe",
    "Request",
    "Response",
    "serialize_request",
    "deserialize_request",
    "serialize_response",
    "deserialize_response",
]
