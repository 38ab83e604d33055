"""Null-safe navigation over nested data.

``opt(user).get("address").get("city").value`` yields the city, or ``None``
as soon as any step along the way is missing.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from .collections import get_path


T = TypeVar("T")


@dataclass(frozen=True)
class Present(Generic[T]):
    value: T

    def get(self, name: Union[str, int]) -> "Opt":
        """Step into key, index or attribute ``name``; a string name may be a dotted path."""
        if isinstance(self.value, Mapping) and name in self.value:
            return opt(self.value[name])
        if isinstance(name, int):
            is_seq = isinstance(self.value, Sequence) and not isinstance(self.value, str)
            if is_seq and -len(self.value) <= name < len(self.value):
                return opt(self.value[name])
            return ABSENT
        return opt(get_path(self.value, name))

    def map(self, f: Callable[[T], Any]) -> "Opt":
        return opt(f(self.value))

    def or_else(self, default: Any) -> T:
        return self.value

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class Absent:
    value: None = None

    def get(self, name: Union[str, int]) -> "Absent":
        return self

    def map(self, f: Callable[[Any], Any]) -> "Absent":
        return self

    def or_else(self, default: T) -> T:
        return default

    def __bool__(self) -> bool:
        return False


Opt = Union[Present[Any], Absent]

ABSENT = Absent()


def opt(value: Any) -> Opt:
    return ABSENT if value is None else Present(value)
