import hashlib
import re
import secrets
import string
from typing import Any, Iterable


_FOLDS = {
    "a": "àáạảãâầấậẩẫăằắặẳẵ",
    "e": "èéẹẻẽêềếệểễ",
    "i": "ìíịỉĩ",
    "o": "òóọỏõôồốộổỗơờớợởỡ",
    "u": "ùúụủũưừứựửữ",
    "y": "ỳýỵỷỹ",
    "d": "đ",
}
_FOLD_TABLE = str.maketrans({ch: ascii_ch for ascii_ch, chars in _FOLDS.items() for ch in chars})
_PUNCTUATION_RE = re.compile(r"[!@%^*()+=<>?/,.:;' \"&#\[\]~_]")
_WHITESPACE_RUN_RE = re.compile(r"\s+\s")

ALPHANUMERIC = string.ascii_letters + string.digits


def standarlize(alias: str) -> str:
    """Fold a Vietnamese phrase into a lowercase ASCII search key.

    >>> standarlize("Đà Nẵng!")
    'da nang'
    """
    s = alias.lower().translate(_FOLD_TABLE)
    s = _PUNCTUATION_RE.sub(" ", s)
    s = _WHITESPACE_RUN_RE.sub(" ", s)
    return s.strip()


def generate_upsert_sql(table: str, keys: Iterable[str]) -> str:
    """MySQL bulk upsert template with ``??`` and ``?`` placeholders for the driver."""
    update_stms = [f"{table}.{k} = VALUES(`{k}`)" for k in keys]
    return f"INSERT INTO `{table}` (??) VALUES ? ON DUPLICATE KEY UPDATE {', '.join(update_stms)}"


def random_string(length: int = 32, charset: str = ALPHANUMERIC) -> str:
    return "".join(secrets.choice(charset) for _ in range(length))


def sha1(s: str) -> str:
    return hashlib.sha1(s.encode("utf-8")).hexdigest()


def format_string(fmt: str, *args: Any) -> str:
    """printf-style formatting, e.g. ``format_string("%05.1f", 3.14159)``."""
    return fmt % args
