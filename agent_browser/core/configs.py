"""Configuration management for agent-browser.

Settings are read once at startup from the process environment, with an
optional .env file in the working directory underneath it. The resulting
Settings value is passed explicitly to the session resolver, the daemon
supervisor and the RPC client; none of them read the environment.
"""

from dataclasses import dataclass, field
import logging
import os
from pathlib import Path
import tempfile
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values

DEFAULT_SESSION = "default"
DEFAULT_ENV_FILE = Path(".env")

SESSION_VAR = "AGENT_BROWSER_SESSION"
DAEMON_MODE_VAR = "AGENT_BROWSER_DAEMON"
SOCKET_DIR_VAR = "AGENT_BROWSER_SOCKET_DIR"
DAEMON_PATH_VAR = "AGENT_BROWSER_DAEMON_PATH"
NODE_VAR = "AGENT_BROWSER_NODE"
LOG_LEVEL_VAR = "AGENT_BROWSER_LOG_LEVEL"
NO_COLOR_VAR = "NO_COLOR"


@dataclass(frozen=True)
class Settings:
    session: str = DEFAULT_SESSION
    socket_dir: Path = Path(tempfile.gettempdir())
    daemon_path: Optional[Path] = None
    node_binary: str = "node"
    log_level: int = logging.WARNING
    no_color: bool = False
    read_timeout: float = 30.0
    write_timeout: float = 5.0
    poll_interval: float = 0.1
    poll_attempts: int = 50
    # Base environment handed to a launched daemon.
    daemon_env: Mapping[str, str] = field(
        default_factory=dict, repr=False, compare=False
    )


def _load_env_file(path: Path) -> Dict[str, str]:
    if not path.is_file():
        return {}
    return {k: v for k, v in dotenv_values(path).items() if v is not None}


def _get(values: Mapping[str, str], key: str) -> Optional[str]:
    value = values.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_log_level(value: Optional[str]) -> int:
    if not value:
        return logging.WARNING
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else logging.WARNING


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[Path] = None,
) -> Settings:
    """
    Build Settings from the environment.

    Args:
        environ: Environment mapping (defaults to os.environ)
        env_file: Optional .env file; values there are overridden by
            non-blank environ values

    Returns:
        Settings with every unset value at its default
    """
    if environ is None:
        environ = os.environ
    values: Dict[str, str] = _load_env_file(env_file or DEFAULT_ENV_FILE)
    values.update({k: v for k, v in environ.items() if v.strip()})

    socket_dir = _get(values, SOCKET_DIR_VAR)
    daemon_path = _get(values, DAEMON_PATH_VAR)

    return Settings(
        session=_get(values, SESSION_VAR) or DEFAULT_SESSION,
        socket_dir=Path(socket_dir) if socket_dir else Path(tempfile.gettempdir()),
        daemon_path=Path(daemon_path) if daemon_path else None,
        node_binary=_get(values, NODE_VAR) or "node",
        log_level=_parse_log_level(_get(values, LOG_LEVEL_VAR)),
        no_color=_get(values, NO_COLOR_VAR) is not None,
        daemon_env=dict(environ),
    )
