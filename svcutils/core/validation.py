import json
import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from .errors import logic_error


logger = logging.getLogger(__name__)

EMAIL_REGEX_STR = (
    r'^(([^<>()\[\]\\.,;:\s@"]+(\.[^<>()\[\]\\.,;:\s@"]+)*)|(".+"))@'
    r'((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}])|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))$'
)
_EMAIL_RE = re.compile(EMAIL_REGEX_STR)


class SchemaValidator:
    """Validator callable backed by a pydantic model or type.

    Returns a bool; after a failed call ``errors`` holds the JSON-safe
    pydantic error list, otherwise ``None``.
    """

    def __init__(self, schema: Any):
        self.adapter = TypeAdapter(schema)
        self.errors: Optional[List[Dict[str, Any]]] = None

    def __call__(self, data: Any) -> bool:
        try:
            self.adapter.validate_python(data)
        except ValidationError as e:
            self.errors = json.loads(e.json(include_url=False))
            logger.debug(f"Validation failed with {e.error_count()} error(s)")
            return False
        self.errors = None
        return True


def is_valid_email_address(email: str) -> bool:
    return bool(email) and _EMAIL_RE.fullmatch(email) is not None


def validate_date(value: str, fmt: str, err_code: int) -> None:
    """Raise a 400 :class:`LogicError` unless ``value`` parses with strptime ``fmt``.

    Parsing is strict: the whole string must match ``fmt``, so trailing text
    such as ``"2024-01-05 extra"`` against ``"%Y-%m-%d"`` is rejected.
    """
    try:
        datetime.strptime(value, fmt)
    except (TypeError, ValueError):
        raise logic_error('Invalid date format', f'Date string {value} is not valid', 400, err_code, value)
