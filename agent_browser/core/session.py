"""Session addressing: maps a session tag to its socket and pid files."""

from dataclasses import dataclass
from pathlib import Path

from agent_browser.core.configs import Settings


@dataclass(frozen=True)
class SessionPaths:
    """Filesystem locations owned by the daemon of one session."""
    session: str
    socket_path: Path
    pid_path: Path


def resolve_session(settings: Settings) -> SessionPaths:
    """
    Resolve the socket and pid paths for the configured session.

    Both paths live in settings.socket_dir and embed the session tag, so
    different tags never share a daemon.
    """
    stem = f"agent-browser-{settings.session}"
    return SessionPaths(
        session=settings.session,
        socket_path=settings.socket_dir / f"{stem}.sock",
        pid_path=settings.socket_dir / f"{stem}.pid",
    )
