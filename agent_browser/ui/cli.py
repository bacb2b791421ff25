"""Main CLI entry point: parse, ensure the daemon, exchange, render."""

import logging
import sys
from typing import List, Optional

import typer

from agent_browser.core.configs import Settings, load_settings
from agent_browser.core.errors import AgentBrowserError
from agent_browser.core.parser import parse_command
from agent_browser.core.session import resolve_session
from agent_browser.daemon.client import DaemonClient
from agent_browser.daemon.protocol import Request
from agent_browser.daemon.supervisor import DaemonSupervisor
from agent_browser.ui.output import UIManager, render_failure, render_response

logger = logging.getLogger(__name__)

USAGE = """
agent-browser - fast browser automation CLI

Usage: agent-browser <command> [args] [--json]

Commands:
  open <url>              Navigate to URL (aliases: goto, navigate)
  click <sel>             Click element (@ref from snapshot)
  fill <sel> <text>       Fill input
  type <sel> <text>       Type text
  hover <sel>             Hover element
  snapshot [opts]         Get accessibility tree with refs
  screenshot [path]       Take screenshot
  get text <sel>          Get text content
  get url                 Get current URL
  get title               Get page title
  press <key>             Press keyboard key
  wait <ms|sel>           Wait for time or element
  back | forward | reload Page history and reload
  eval <js>               Evaluate JavaScript
  close                   Close browser (aliases: quit, exit)

Snapshot Options:
  -i                      Only interactive elements
  -c                      Remove empty structural elements
  -d <n>                  Limit tree depth
  -s <sel>                Scope to CSS selector

Options:
  --json                  Output JSON
  -h, --help              Show this message

Environment:
  AGENT_BROWSER_SESSION     Session name (default: default)
  AGENT_BROWSER_SOCKET_DIR  Directory for socket and pid files
  AGENT_BROWSER_DAEMON_PATH Path to daemon.js
  AGENT_BROWSER_NODE        Interpreter used to start the daemon
  AGENT_BROWSER_LOG_LEVEL   Client log level (default: WARNING)

Examples:
  agent-browser open example.com
  agent-browser snapshot -i
  agent-browser click @e2
"""

app = typer.Typer(add_completion=False)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def execute(request: Request, settings: Settings, json_mode: bool, ui: UIManager) -> int:
    """
    Deliver one request to the session daemon and render the reply.

    Returns: exit status

    Client-side failures (daemon missing, transport, bad reply) are
    rendered in the same shape as a failed response.
    """
    paths = resolve_session(settings)
    logger.debug("Session %s: socket=%s pid=%s", paths.session, paths.socket_path, paths.pid_path)

    try:
        DaemonSupervisor(settings, paths).ensure_reachable()
        client = DaemonClient(
            paths,
            read_timeout=settings.read_timeout,
            write_timeout=settings.write_timeout,
        )
        response = client.exchange(request)
    except AgentBrowserError as e:
        logger.debug("%s: %s", type(e).__name__, e)
        return render_failure(str(e), json_mode, ui)

    return render_response(response, json_mode, ui)


@app.command(
    context_settings={
        "ignore_unknown_options": True,
        "help_option_names": [],
    }
)
def main(
    tokens: Optional[List[str]] = typer.Argument(None, metavar="COMMAND [ARGS]..."),
    json_mode: bool = typer.Option(False, "--json", help="Output JSON"),
    show_help: bool = typer.Option(False, "--help", "-h", help="Show usage"),
) -> None:
    """Fast browser automation CLI."""
    # Other --flags are reserved and dropped before parsing.
    args = [t for t in (tokens or []) if not t.startswith("--")]
    if show_help or not args:
        typer.echo(USAGE)
        raise typer.Exit(0)

    settings = load_settings()
    configure_logging(settings)
    ui = UIManager(color=not settings.no_color)

    try:
        request = parse_command(args)
    except AgentBrowserError as e:
        raise typer.Exit(render_failure(str(e), json_mode, ui))

    try:
        code = execute(request, settings, json_mode, ui)
    except KeyboardInterrupt:
        ui.err("Interrupted")
        raise typer.Exit(130)
    raise typer.Exit(code)


def run() -> None:
    """Entry point for console script mapping."""
    app()


if __name__ == "__main__":
    run()
