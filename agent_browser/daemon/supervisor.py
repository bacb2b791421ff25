"""Daemon lifecycle supervision: detect, start, and wait for readiness.

The daemon owns its socket and pid file. This module only reads them; it
never deletes either, even when they look stale.
"""

import logging
import os
import subprocess
import sys
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol

from agent_browser.core.configs import (
    DAEMON_MODE_VAR,
    SESSION_VAR,
    SOCKET_DIR_VAR,
    Settings,
)
from agent_browser.core.errors import (
    DaemonLaunchError,
    DaemonLocateError,
    DaemonStartTimeout,
)
from agent_browser.core.session import SessionPaths

logger = logging.getLogger(__name__)


class ProcessProbe(Protocol):
    """Answers whether a process id currently exists."""

    def __call__(self, pid: int) -> bool:
        ...


def os_process_probe(pid: int) -> bool:
    """Null-signal liveness probe; delivers nothing to the target."""
    if pid <= 0:
        return False
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        # Exists, owned by someone else.
        return True
    except OSError:
        return False
    return True


Launcher = Callable[[List[str], Dict[str, str]], None]


def spawn_detached(cmd: List[str], env: Dict[str, str]) -> None:
    """Start cmd in its own session with no inherited stdio."""
    subprocess.Popen(
        cmd,
        env=env,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )


class DaemonSupervisor:
    """
    Makes sure a daemon for one session is running and listening.

    Collaborators are injectable so tests can run without real processes:
    - probe: pid liveness check
    - launcher: spawns the daemon command
    - sleep: used between readiness polls
    """

    def __init__(
        self,
        settings: Settings,
        paths: SessionPaths,
        probe: ProcessProbe = os_process_probe,
        launcher: Launcher = spawn_detached,
        sleep: Callable[[float], None] = time.sleep,
        exe_path: Optional[Path] = None,
        cwd: Optional[Path] = None,
    ):
        self.settings = settings
        self.paths = paths
        self.probe = probe
        self.launcher = launcher
        self.sleep = sleep
        self.exe_path = exe_path or Path(sys.argv[0]).resolve()
        self.cwd = cwd or Path.cwd()

    def read_pid(self) -> Optional[int]:
        try:
            text = self.paths.pid_path.read_text().strip()
        except OSError:
            return None
        try:
            return int(text)
        except ValueError:
            logger.debug("Unparseable pid file %s: %r", self.paths.pid_path, text)
            return None

    def is_running(self) -> bool:
        """True if the pid file names a live process. No probe without a pid."""
        pid = self.read_pid()
        if pid is None:
            return False
        alive = self.probe(pid)
        logger.debug("Daemon pid %d alive=%s", pid, alive)
        return alive

    def is_reachable(self) -> bool:
        return self.is_running() and self.paths.socket_path.exists()

    def candidates(self) -> List[Path]:
        """Daemon entry points to try, in order."""
        exe_dir = self.exe_path.parent
        found: List[Path] = []
        if self.settings.daemon_path is not None:
            found.append(self.settings.daemon_path)
        found.extend([
            exe_dir / "daemon.js",
            exe_dir / ".." / "dist" / "daemon.js",
            self.cwd / "dist" / "daemon.js",
        ])
        return found

    def locate_daemon(self) -> Path:
        """
        Return the first existing daemon entry point.

        Raises:
            DaemonLocateError: If no candidate exists
        """
        candidates = self.candidates()
        for candidate in candidates:
            if candidate.exists():
                logger.debug("Using daemon at %s", candidate)
                return candidate
        raise DaemonLocateError([str(c) for c in candidates])

    def start_daemon(self, daemon_path: Path) -> None:
        env = dict(self.settings.daemon_env)
        env[DAEMON_MODE_VAR] = "1"
        env[SESSION_VAR] = self.paths.session
        env[SOCKET_DIR_VAR] = str(self.settings.socket_dir)
        cmd = [self.settings.node_binary, str(daemon_path)]
        logger.info("Starting daemon for session %s: %s", self.paths.session, " ".join(cmd))
        try:
            self.launcher(cmd, env)
        except OSError as e:
            raise DaemonLaunchError(f"Failed to start daemon: {e}") from e

    def wait_for_socket(self) -> None:
        """
        Poll for the session socket.

        Raises:
            DaemonStartTimeout: If the socket is still missing after
                poll_attempts checks
        """
        for attempt in range(self.settings.poll_attempts):
            if self.paths.socket_path.exists():
                logger.debug("Socket ready after %d polls", attempt)
                return
            self.sleep(self.settings.poll_interval)
        raise DaemonStartTimeout("Daemon failed to start")

    def ensure_reachable(self) -> bool:
        """
        Ensure a daemon for the session is running and listening.

        Returns:
            True if a daemon was started, False if one was already running

        Raises:
            DaemonLocateError, DaemonLaunchError, DaemonStartTimeout
        """
        if self.is_reachable():
            return False

        daemon_path = self.locate_daemon()
        self.start_daemon(daemon_path)
        self.wait_for_socket()
        return True
