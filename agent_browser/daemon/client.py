"""Lightweight client for daemon communication.

One exchange per connection: connect to the session socket, send one
request line, read one response line, close.

Usage:
    client = DaemonClient(resolve_session(settings))
    response = client.exchange(GetUrl())
"""

import logging
import socket
import time

from agent_browser.core.errors import (
    DaemonConnectError,
    DaemonReadError,
    DaemonWriteError,
)
from agent_browser.core.session import SessionPaths
from agent_browser.daemon.protocol import (
    Request,
    Response,
    deserialize_response,
    serialize_request,
)

logger = logging.getLogger(__name__)


class DaemonClient:
    """
    Client for a single session's daemon.

    Connections are never reused; every exchange() opens a new one.
    """

    def __init__(
        self,
        paths: SessionPaths,
        read_timeout: float = 30.0,
        write_timeout: float = 5.0,
    ):
        """
        Initialize client.

        Args:
            paths: Resolved session paths (only socket_path is used)
            read_timeout: Seconds to wait for the response
            write_timeout: Seconds allowed for connect and send
        """
        self.socket_path = paths.socket_path
        self.read_timeout = read_timeout
        self.write_timeout = write_timeout

    def exchange(self, request: Request) -> Response:
        """
        Send one request and return the daemon's response.

        Raises:
            DaemonConnectError: Socket missing or refusing connections
            DaemonWriteError: Send failed or timed out
            DaemonReadError: Receive failed, timed out, or the connection
                closed before a full line arrived
            ProtocolDecodeError: The line is not a valid response
        """
        started = time.monotonic()
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.settimeout(self.write_timeout)
            try:
                sock.connect(str(self.socket_path))
            except OSError as e:
                raise DaemonConnectError(f"Failed to connect: {e}") from e

            logger.debug("Sending %s request %s", request.action, request.id)
            try:
                sock.sendall(serialize_request(request))
            except socket.timeout as e:
                raise DaemonWriteError(
                    f"Failed to send: timed out after {self.write_timeout:g}s"
                ) from e
            except OSError as e:
                raise DaemonWriteError(f"Failed to send: {e}") from e

            sock.settimeout(self.read_timeout)
            line = self._read_line(sock)
        finally:
            sock.close()

        logger.debug(
            "Request %s answered in %.1fms", request.id, (time.monotonic() - started) * 1000
        )
        return deserialize_response(line)

    def _read_line(self, sock: socket.socket) -> bytes:
        try:
            with sock.makefile("rb") as reader:
                line = reader.readline()
        except socket.timeout as e:
            raise DaemonReadError(
                f"Failed to read: no response within {self.read_timeout:g}s"
            ) from e
        except OSError as e:
            raise DaemonReadError(f"Failed to read: {e}") from e

        if not line.endswith(b"\n"):
            # Partial content is never trusted.
            raise DaemonReadError(
                "Failed to read: connection closed before a complete response"
            )
        return line
