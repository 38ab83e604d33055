from typing import Any, Dict, Tuple, Union


Primitive = Union[str, int, float, bool]


class LogicError(Exception):
    """Business-rule violation that is safe to return to an HTTP caller.

    Carries the HTTP status to answer with and an application error code.
    Serialized with :meth:`to_json` into the wire shape
    ``{httpCode, code, title, message, pars}``.
    """

    def __init__(self, title: str, message: str, http_code: int, logic_err_code: int, *pars: Primitive):
        super().__init__(message)
        self.title = title
        self.message = message
        self.http_code = http_code
        self.logic_err_code = logic_err_code
        self.pars: Tuple[Primitive, ...] = pars

    def to_json(self) -> Dict[str, Any]:
        return {
            "httpCode": self.http_code,
            "code": self.logic_err_code,
            "title": self.title,
            "message": self.message,
            "pars": list(self.pars),
        }

    def __repr__(self) -> str:
        return f"LogicError({self.title!r}, {self.message!r}, http_code={self.http_code}, code={self.logic_err_code})"


class RequestRejected(Exception):
    """Raised by framework-level guards; rendered as ``{"err": payload}``."""

    def __init__(self, status_code: int, payload: Any):
        super().__init__(f"Request rejected with status {status_code}")
        self.status_code = status_code
        self.payload = payload


def logic_error(title: str, message: str, http_code: int, logic_err_code: int, *pars: Primitive) -> LogicError:
    return LogicError(title, message, http_code, logic_err_code, *pars)
