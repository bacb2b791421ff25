"""
Response rendering for the terminal.

Human mode picks the most specific field present in the response data,
walking RENDER_RULES in order. Machine mode prints the whole response as a
single JSON line.
"""

import json
import sys
from typing import Any, Callable, List, Optional, TextIO, Tuple

from agent_browser.daemon.protocol import Response


TEXT_COLOR_MAPPING = {
    "red": "31",
    "green": "32",
    "bold": "1",
    "dim": "2",
}

UNKNOWN_ERROR = "Unknown error"


def get_colored_text(text: str, color: str) -> str:
    """
    Get colored text.

    Raises:
        ValueError: If the specified color is not supported
    """
    if color not in TEXT_COLOR_MAPPING:
        raise ValueError(
            f"Unsupported color: {color}. Available colors: {', '.join(TEXT_COLOR_MAPPING.keys())}"
        )
    return f"\x1b[{TEXT_COLOR_MAPPING[color]}m{text}\x1b[0m"


class UIManager:
    """Writes plain or ANSI-colored lines to stdout/stderr."""

    def __init__(self, color: bool = True):
        self.color = color

    def paint(self, text: str, color: str) -> str:
        return get_colored_text(text, color) if self.color else text

    def check(self) -> str:
        return self.paint("✓", "green")

    def out(self, text: str, file: Optional[TextIO] = None) -> None:
        file = file or sys.stdout
        print(text, file=file)
        file.flush()

    def err(self, text: str) -> None:
        self.out(text, file=sys.stderr)

    def error(self, message: str) -> None:
        self.err(f"{self.paint('✗ Error:', 'red')} {message}")


def _has_str(data: Any, key: str) -> bool:
    return isinstance(data, dict) and isinstance(data.get(key), str)


def _has_key(data: Any, key: str) -> bool:
    return isinstance(data, dict) and key in data


def _page(data: Any, ui: UIManager) -> None:
    ui.out(f"{ui.check()} {ui.paint(data['title'], 'bold')}")
    ui.out(ui.paint(f"  {data['url']}", "dim"))


def _field(key: str) -> Callable[[Any, UIManager], None]:
    return lambda data, ui: ui.out(data[key])


def _result(data: Any, ui: UIManager) -> None:
    ui.out(json.dumps(data["result"], indent=2, ensure_ascii=False))


RenderRule = Tuple[Callable[[Any], bool], Callable[[Any, UIManager], None]]

# First matching rule wins; add new result shapes by inserting a rule.
RENDER_RULES: List[RenderRule] = [
    (lambda d: _has_str(d, "url") and _has_str(d, "title"), _page),
    (lambda d: _has_str(d, "url"), _field("url")),
    (lambda d: _has_str(d, "snapshot"), _field("snapshot")),
    (lambda d: _has_str(d, "title"), _field("title")),
    (lambda d: _has_str(d, "text"), _field("text")),
    (lambda d: _has_key(d, "result"), _result),
    (lambda d: _has_key(d, "closed"), lambda d, ui: ui.out(f"{ui.check()} Browser closed")),
    (lambda d: True, lambda d, ui: ui.out(f"{ui.check()} Done")),
]


def render_data(data: Any, ui: UIManager) -> None:
    for matches, formatter in RENDER_RULES:
        if matches(data):
            formatter(data, ui)
            return


def render_response(
    response: Response, json_mode: bool = False, ui: Optional[UIManager] = None
) -> int:
    """
    Print a daemon response.

    Returns:
        Exit status: 0 on success, 1 when the response reports failure
    """
    ui = ui or UIManager()
    if json_mode:
        ui.out(json.dumps(response.to_dict(), ensure_ascii=False))
        return 0 if response.success else 1

    if not response.success:
        ui.error(response.error or UNKNOWN_ERROR)
        return 1

    if response.data is not None:
        render_data(response.data, ui)
    return 0


def render_failure(
    message: str, json_mode: bool = False, ui: Optional[UIManager] = None
) -> int:
    """Print a client-side failure in the same shape as a failed response."""
    return render_response(Response(success=False, error=message), json_mode, ui)
