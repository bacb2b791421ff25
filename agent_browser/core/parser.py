"""Command parser: turns CLI tokens into a typed daemon request.

Parsing is pure. It raises CommandParseError for anything it cannot turn
into a request, so a bad command never reaches the daemon.
"""

from typing import Callable, Dict, List, Optional, Sequence

from agent_browser.core.errors import CommandParseError, UnknownCommandError
from agent_browser.daemon import protocol as p

DEFAULT_SCHEME = "https://"
KNOWN_SCHEMES = ("http://", "https://", "file://", "about:", "data:")

ALIASES: Dict[str, str] = {
    "goto": "open",
    "navigate": "open",
    "quit": "close",
    "exit": "close",
}


def _require(args: Sequence[str], index: int, usage: str) -> str:
    if len(args) <= index:
        raise CommandParseError(f"Missing argument. Usage: {usage}", usage=usage)
    return args[index]


def normalize_url(url: str) -> str:
    """Prefix a scheme-less URL with https://."""
    if url.startswith(KNOWN_SCHEMES):
        return url
    return DEFAULT_SCHEME + url


def _open(args: List[str]) -> p.Request:
    return p.Navigate(url=normalize_url(_require(args, 0, "open <url>")))


def _click(args: List[str]) -> p.Request:
    return p.Click(selector=_require(args, 0, "click <selector>"))


def _hover(args: List[str]) -> p.Request:
    return p.Hover(selector=_require(args, 0, "hover <selector>"))


def _fill(args: List[str]) -> p.Request:
    selector = _require(args, 0, "fill <selector> <value>")
    return p.Fill(selector=selector, value=" ".join(args[1:]))


def _type(args: List[str]) -> p.Request:
    selector = _require(args, 0, "type <selector> <text>")
    return p.TypeText(selector=selector, text=" ".join(args[1:]))


SNAPSHOT_FLAGS = (
    "-i", "--interactive",
    "-c", "--compact",
    "-d", "--depth",
    "-s", "--selector",
)


def _takes_value(args: List[str], i: int) -> bool:
    return i + 1 < len(args) and args[i + 1] not in SNAPSHOT_FLAGS


def _snapshot(args: List[str]) -> p.Request:
    interactive = False
    compact = False
    max_depth: Optional[int] = None
    selector: Optional[str] = None

    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("-i", "--interactive"):
            interactive = True
        elif arg in ("-c", "--compact"):
            compact = True
        elif arg in ("-d", "--depth") and _takes_value(args, i):
            i += 1
            try:
                max_depth = int(args[i])
            except ValueError:
                pass
        elif arg in ("-s", "--selector") and _takes_value(args, i):
            i += 1
            selector = args[i]
        # anything else is ignored
        i += 1

    return p.Snapshot(
        interactive=interactive,
        compact=compact,
        max_depth=max_depth,
        selector=selector,
    )


def _screenshot(args: List[str]) -> p.Request:
    return p.Screenshot(path=args[0] if args else None)


def _get(args: List[str]) -> p.Request:
    usage = "get text <selector> | get url | get title"
    what = _require(args, 0, usage)
    if what == "text":
        return p.GetText(selector=_require(args, 1, "get text <selector>"))
    if what == "url":
        return p.GetUrl()
    if what == "title":
        return p.GetTitle()
    raise CommandParseError(f"Unknown get target: {what}. Usage: {usage}", usage=usage)


def _press(args: List[str]) -> p.Request:
    return p.Press(key=_require(args, 0, "press <key>"))


def _wait(args: List[str]) -> p.Request:
    arg = _require(args, 0, "wait <ms|selector>")
    if arg.isascii() and arg.isdigit():
        return p.Wait(timeout=int(arg))
    return p.Wait(selector=arg)


def _eval(args: List[str]) -> p.Request:
    return p.Evaluate(script=" ".join(args))


COMMANDS: Dict[str, Callable[[List[str]], p.Request]] = {
    "open": _open,
    "click": _click,
    "hover": _hover,
    "fill": _fill,
    "type": _type,
    "snapshot": _snapshot,
    "screenshot": _screenshot,
    "get": _get,
    "press": _press,
    "wait": _wait,
    "back": lambda args: p.Back(),
    "forward": lambda args: p.Forward(),
    "reload": lambda args: p.Reload(),
    "close": lambda args: p.Close(),
    "eval": _eval,
}


def parse_command(tokens: Sequence[str]) -> p.Request:
    """
    Parse a token list into a request.

    Args:
        tokens: Command name followed by its arguments

    Returns:
        The request variant for the command

    Raises:
        UnknownCommandError: First token is not a known command
        CommandParseError: Arguments don't fit the command
    """
    if not tokens:
        raise CommandParseError("No command given")

    name = ALIASES.get(tokens[0], tokens[0])
    handler = COMMANDS.get(name)
    if handler is None:
        raise UnknownCommandError(tokens[0])
    return handler(list(tokens[1:]))
