"""JSON-based protocol for daemon IPC.

One UTF-8 JSON object per line, one request and one response per connection.

Request format (flat, no params wrapper):
    {
        "id": "r123456",         # Correlation token, debugging only
        "action": "navigate",    # One of the actions below
        ...                      # Action-specific fields
    }

Response format:
    {
        "success": bool,
        "data": any | null,      # Action-specific payload
        "error": str | null,     # Present when success is false
    }

Each action is its own frozen dataclass; encode_request() is the single
place where a variant becomes the wire object.
"""

from dataclasses import dataclass, field, fields
import json
import time
from typing import Any, ClassVar, Dict, Optional, Type

from agent_browser.core.errors import ProtocolDecodeError


def new_request_id() -> str:
    """Short correlation id from a sub-second clock sample (not unique)."""
    return f"r{(time.time_ns() // 1000) % 1_000_000}"


@dataclass(frozen=True)
class Request:
    """Base of all request variants."""

    action: ClassVar[str] = ""
    # Python field name -> wire name, where they differ.
    wire_names: ClassVar[Dict[str, str]] = {}
    # Drop fields that are None/False instead of sending them.
    omit_unset: ClassVar[bool] = False

    id: str = field(default_factory=new_request_id, kw_only=True)

    def wire_fields(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            if f.name == "id":
                continue
            value = getattr(self, f.name)
            if self.omit_unset and (value is None or value is False):
                continue
            out[self.wire_names.get(f.name, f.name)] = value
        return out


@dataclass(frozen=True)
class Navigate(Request):
    action: ClassVar[str] = "navigate"
    url: str


@dataclass(frozen=True)
class Click(Request):
    action: ClassVar[str] = "click"
    selector: str


@dataclass(frozen=True)
class Hover(Request):
    action: ClassVar[str] = "hover"
    selector: str


@dataclass(frozen=True)
class Fill(Request):
    action: ClassVar[str] = "fill"
    selector: str
    value: str


@dataclass(frozen=True)
class TypeText(Request):
    action: ClassVar[str] = "type"
    selector: str
    text: str


@dataclass(frozen=True)
class Snapshot(Request):
    action: ClassVar[str] = "snapshot"
    wire_names: ClassVar[Dict[str, str]] = {"max_depth": "maxDepth"}
    omit_unset: ClassVar[bool] = True
    interactive: bool = False
    compact: bool = False
    max_depth: Optional[int] = None
    selector: Optional[str] = None


@dataclass(frozen=True)
class Screenshot(Request):
    # path is always sent, as null when not given
    action: ClassVar[str] = "screenshot"
    path: Optional[str] = None


@dataclass(frozen=True)
class GetText(Request):
    action: ClassVar[str] = "gettext"
    selector: str


@dataclass(frozen=True)
class GetUrl(Request):
    action: ClassVar[str] = "url"


@dataclass(frozen=True)
class GetTitle(Request):
    action: ClassVar[str] = "title"


@dataclass(frozen=True)
class Press(Request):
    action: ClassVar[str] = "press"
    key: str


@dataclass(frozen=True)
class Wait(Request):
    """Wait for a number of milliseconds or for a selector to appear."""

    action: ClassVar[str] = "wait"
    omit_unset: ClassVar[bool] = True
    timeout: Optional[int] = None
    selector: Optional[str] = None


@dataclass(frozen=True)
class Back(Request):
    action: ClassVar[str] = "back"


@dataclass(frozen=True)
class Forward(Request):
    action: ClassVar[str] = "forward"


@dataclass(frozen=True)
class Reload(Request):
    action: ClassVar[str] = "reload"


@dataclass(frozen=True)
class Close(Request):
    action: ClassVar[str] = "close"


@dataclass(frozen=True)
class Evaluate(Request):
    action: ClassVar[str] = "evaluate"
    script: str


REQUEST_TYPES: Dict[str, Type[Request]] = {
    cls.action: cls
    for cls in (
        Navigate, Click, Hover, Fill, TypeText, Snapshot, Screenshot,
        GetText, GetUrl, GetTitle, Press, Wait, Back, Forward, Reload,
        Close, Evaluate,
    )
}


@dataclass(frozen=True)
class Response:
    success: bool
    data: Any = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "data": self.data, "error": self.error}


def encode_request(request: Request) -> Dict[str, Any]:
    """Map a request variant to its flat wire object."""
    return {"id": request.id, "action": request.action, **request.wire_fields()}


def decode_request(obj: Dict[str, Any]) -> Request:
    """
    Rebuild a request variant from its wire object.

    Raises:
        ProtocolDecodeError: Unknown action or fields that don't fit it
    """
    action = obj.get("action")
    cls = REQUEST_TYPES.get(action) if isinstance(action, str) else None
    if cls is None:
        raise ProtocolDecodeError(f"Invalid request: unknown action {action!r}")

    python_names = {wire: name for name, wire in cls.wire_names.items()}
    kwargs = {
        python_names.get(key, key): value
        for key, value in obj.items()
        if key != "action"
    }
    try:
        return cls(**kwargs)
    except TypeError as e:
        raise ProtocolDecodeError(f"Invalid request for {action}: {e}") from e


def _decode_line(data: bytes, kind: str) -> Dict[str, Any]:
    try:
        obj = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ProtocolDecodeError(f"Invalid {kind}: {e}") from e
    if not isinstance(obj, dict):
        raise ProtocolDecodeError(f"Invalid {kind}: expected a JSON object")
    return obj


def serialize_request(request: Request) -> bytes:
    """Encode a request as one newline-terminated UTF-8 JSON line."""
    return (json.dumps(encode_request(request)) + "\n").encode("utf-8")


def deserialize_request(data: bytes) -> Request:
    return decode_request(_decode_line(data, "request"))


def serialize_response(response: Response) -> bytes:
    return (json.dumps(response.to_dict()) + "\n").encode("utf-8")


def deserialize_response(data: bytes) -> Response:
    """
    Decode one response line.

    Raises:
        ProtocolDecodeError: If the line isn't a JSON object with a
            boolean "success" and an optional string "error"
    """
    obj = _decode_line(data, "response")
    success = obj.get("success")
    if not isinstance(success, bool):
        raise ProtocolDecodeError("Invalid response: missing boolean 'success'")
    error = obj.get("error")
    if error is not None and not isinstance(error, str):
        error = str(error)
    return Response(success=success, data=obj.get("data"), error=error)
