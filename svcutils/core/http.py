import json
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..helpers.numbers import parse_int
from .errors import RequestRejected


ServiceCallback = Callable[..., None]


def _is_json(content_type: str) -> bool:
    media_type = content_type.split(";")[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


@dataclass
class RequestContext:
    """Request as seen by middleware: mutable ``body`` and ``query``."""

    body: Any = field(default_factory=dict)
    query: Dict[str, Any] = field(default_factory=dict)
    method: str = "GET"
    path: str = "/"
    headers: Dict[str, str] = field(default_factory=dict)
    locals: Dict[str, Any] = field(default_factory=dict)
    request: Optional[Request] = None

    @classmethod
    async def from_request(cls, request: Request) -> "RequestContext":
        """Only JSON bodies are parsed; other content types leave ``body`` as ``{}``."""
        raw = await request.body()
        body: Any = {}
        if raw.strip() and _is_json(request.headers.get("content-type", "")):
            try:
                body = json.loads(raw)
            except ValueError:
                raise RequestRejected(400, "Request body is not valid JSON")
        return cls(
            body=body,
            query=dict(request.query_params),
            method=request.method,
            path=request.url.path,
            headers=dict(request.headers),
            request=request,
        )


class ResponseWriter:
    """Response with a settable ``status_code`` and a single-use :meth:`send`."""

    def __init__(self) -> None:
        self.status_code = 200
        self.headers: Dict[str, str] = {}
        self.body: Any = None
        self.sent = False

    def send(self, body: Any = None) -> None:
        if self.sent:
            raise RuntimeError("Cannot send a response twice")
        self.body = body
        self.sent = True

    def to_response(self) -> JSONResponse:
        if not self.sent:
            raise RuntimeError("No response has been sent")
        return JSONResponse(status_code=self.status_code, content=to_json_safe(self.body), headers=self.headers)


def to_json_safe(value: Any) -> Any:
    """Encode ``value`` to plain JSON types.

    Callables are dropped from mappings and become ``None`` inside sequences;
    objects exposing ``to_json`` are encoded through it.
    """
    to_json = getattr(value, "to_json", None)
    if callable(to_json):
        return to_json_safe(to_json())
    if isinstance(value, Mapping):
        return {str(k): to_json_safe(v) for k, v in value.items() if not callable(v)}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [None if callable(v) else to_json_safe(v) for v in value]
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return jsonable_encoder(value)


def _read(err: Any, *names: str) -> Any:
    for name in names:
        if isinstance(err, Mapping):
            value = err.get(name)
        else:
            value = getattr(err, name, None)
        if value is not None:
            return value
    return None


def error_payload(err: Any) -> Dict[str, Any]:
    """Build the ``err`` field of the envelope from any error value."""
    if callable(getattr(err, "to_json", None)) or isinstance(err, Mapping):
        payload = to_json_safe(err)
    elif hasattr(err, "__dict__"):
        payload = to_json_safe({k: v for k, v in vars(err).items() if not k.startswith("_")})
    else:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}

    if payload.get("message") is None:
        message = _read(err, "message")
        if message is None and not isinstance(err, Mapping):
            message = str(err)
        payload["message"] = message

    if payload.get("code") is None:
        payload["code"] = parse_int(_read(err, "code"))

    return payload


def error_status(err: Any) -> int:
    code = _read(err, "httpCode", "http_code")
    if isinstance(code, (int, float)) and not isinstance(code, bool) and math.isfinite(code):
        return int(code)
    return 500


def create_service_callback(response: ResponseWriter) -> ServiceCallback:
    """Return a callback ``(err=None, data=None)`` that writes ``response`` once."""
    def callback(err: Any = None, data: Any = None) -> None:
        res_data: Any = {}
        # Falsy data (0, "", [], False) is sent as an empty object
        if data:
            res_data = to_json_safe(data)

        response.status_code = 200

        if err is not None:
            if not isinstance(res_data, dict):
                res_data = {}
            response.status_code = error_status(err)
            res_data["err"] = error_payload(err)

        response.send(res_data)

    return callback
