"""Collection helpers shared by services.

Only the handful of generic operations call sites actually need are exposed
here (:func:`key_by`, :func:`find`, :func:`group_by`, :func:`map_values`,
dotted-path access) rather than a whole third-party collection library.
"""

import json
import math
import re
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from dataclasses import dataclass
from itertools import zip_longest
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Tuple, Type, TypeVar, Union


T = TypeVar("T")
T1 = TypeVar("T1")
T2 = TypeVar("T2")
V = TypeVar("V")

KeySpec = Union[str, Callable[[Any], Any]]

_PATH_TOKEN_RE = re.compile(r"[^.\[\]]+")


# ---------------------------------------------------------------------------
# Pairs
# ---------------------------------------------------------------------------

def _render(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return json.dumps(value)


@dataclass(frozen=True)
class Pair(Generic[T1, T2]):
    """Ordered two-element value rendered as ``"first|second"``."""

    first: T1
    second: T2

    def join(self, sep: str = "|") -> str:
        return sep.join((_render(self.first), _render(self.second)))

    def __str__(self) -> str:
        return self.join()


def pair(first: T1, second: T2) -> Pair[T1, T2]:
    return Pair(first, second)


def pair_first(s: str, sep: str = "|", f: Callable[[str], Any] = lambda s: s) -> Any:
    return f(s.split(sep)[0])


def pair_second(s: str, sep: str = "|", f: Callable[[Optional[str]], Any] = lambda s: s) -> Any:
    parts = s.split(sep)
    return f(parts[1] if len(parts) > 1 else None)


def pack(*arrays: Sequence[Any]) -> List[Tuple[Any, ...]]:
    """Zip sequences to the length of the longest one.

    Positions past the end of a shorter sequence hold ``None``.
    """
    return list(zip_longest(*arrays))


# ---------------------------------------------------------------------------
# Emptiness
# ---------------------------------------------------------------------------

def is_empty(obj: Any = None) -> bool:
    """True for ``None``, NaN, ``False``, empty strings, containers and attribute-less objects.

    ``0`` and ``True`` are not empty, nor is any container holding an item.
    """
    if obj is None or obj is False:
        return True
    if isinstance(obj, float) and math.isnan(obj):
        return True
    if isinstance(obj, (str, bytes, Sequence, Mapping, set, frozenset)):
        return len(obj) == 0
    if isinstance(obj, (int, float)):
        return False
    return hasattr(obj, "__dict__") and not vars(obj)


# ---------------------------------------------------------------------------
# Dotted paths
# ---------------------------------------------------------------------------

def _path_tokens(path: str) -> List[str]:
    return _PATH_TOKEN_RE.findall(path)


def _child(obj: Any, token: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(token)
    if isinstance(obj, Sequence) and not isinstance(obj, str):
        if token.isdigit() and int(token) < len(obj):
            return obj[int(token)]
        return None
    return getattr(obj, token, None)


def get_path(obj: Any, path: str, default: Any = None) -> Any:
    """Read ``a.b[0].c`` style paths through mappings, sequences and attributes."""
    current = obj
    for token in _path_tokens(path):
        if current is None:
            return default
        current = _child(current, token)
    return default if current is None else current


def _assign(obj: Any, token: str, value: Any) -> None:
    if isinstance(obj, MutableMapping):
        obj[token] = value
    elif isinstance(obj, MutableSequence) and token.isdigit():
        index = int(token)
        if index >= len(obj):
            obj.extend([None] * (index + 1 - len(obj)))
        obj[index] = value
    else:
        setattr(obj, token, value)


def set_path(obj: Any, path: str, value: Any) -> Any:
    """Write ``value`` at ``path``, creating intermediate dicts and lists."""
    tokens = _path_tokens(path)
    if not tokens:
        return obj
    current = obj
    for token, next_token in zip(tokens, tokens[1:]):
        child = _child(current, token)
        if child is None:
            child = [] if next_token.isdigit() else {}
            _assign(current, token, child)
        current = child
    _assign(current, tokens[-1], value)
    return obj


def transform_by_schema(src: Any, schema: Mapping[str, Callable[[Any], Any]]) -> None:
    """Apply each callable in ``schema`` to the value at its path, in place.

    A key whose transform raises, or whose path cannot be written, is
    skipped and the remaining keys are still processed.
    """
    for path, transform in schema.items():
        if not callable(transform):
            continue
        current = get_path(src, path)
        try:
            transformed = transform(current)
            if transformed is not current:
                set_path(src, path, transformed)
        except Exception:
            continue


# ---------------------------------------------------------------------------
# Building dicts
# ---------------------------------------------------------------------------

def arr_to_obj(items: Iterable[T], key_map: Callable[[T], str], val_map: Callable[[T], V]) -> Dict[str, V]:
    return {key_map(item): val_map(item) for item in items}


def zip_to_obj(keys: Iterable[str], f: Callable[[str], V]) -> Dict[str, V]:
    return {k: f(k) for k in keys}


def redis_hmget_parse(
    keys: Sequence[str],
    data: Sequence[Optional[str]],
    iterator: Optional[Callable[[Optional[str]], V]] = None,
    empty: bool = True,
) -> Dict[str, Any]:
    """Pair an HMGET key list with its reply.

    Falsy values are dropped unless ``empty`` is set; ``iterator`` maps the kept values.
    """
    result: Dict[str, Any] = {}
    for i, key in enumerate(keys):
        value = data[i] if i < len(data) else None
        if value or empty:
            result[key] = value

    if iterator is None:
        return result
    return map_values(result, iterator)


def merge(target: Any, source: Mapping[str, Any]) -> Any:
    """Deep-merge ``source`` into ``target`` (a mapping or an object)."""
    for key, value in source.items():
        existing = _child(target, key)
        if isinstance(value, Mapping) and (isinstance(existing, MutableMapping) or hasattr(existing, "__dict__")):
            merge(existing, value)
        else:
            _assign(target, key, value)
    return target


def make(cls: Type[T], data: Mapping[str, Any]) -> T:
    return merge(cls(), data)


# ---------------------------------------------------------------------------
# Facade operations
# ---------------------------------------------------------------------------

def _key_fn(key: KeySpec) -> Callable[[Any], Any]:
    if callable(key):
        return key
    return lambda item: get_path(item, key)


def key_by(items: Iterable[T], key: KeySpec) -> Dict[Any, T]:
    f = _key_fn(key)
    return {f(item): item for item in items}


def group_by(items: Iterable[T], key: KeySpec) -> Dict[Any, List[T]]:
    f = _key_fn(key)
    groups: Dict[Any, List[T]] = {}
    for item in items:
        groups.setdefault(f(item), []).append(item)
    return groups


def find(items: Iterable[T], predicate: Callable[[T], bool], from_index: int = 0) -> Optional[T]:
    for i, item in enumerate(items):
        if i >= from_index and predicate(item):
            return item
    return None


def map_values(obj: Mapping[Any, Any], f: Callable[[Any], V]) -> Dict[Any, V]:
    return {k: f(v) for k, v in obj.items()}
