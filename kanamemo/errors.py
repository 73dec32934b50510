from __future__ import annotations

from typing import FrozenSet, Iterable, Tuple


class KanamemoError(Exception):
    """Base class for every error raised by the kanamemo package."""


class ConstructionError(KanamemoError, TypeError):
    """A container, group or config was built from malformed input."""


class OutOfRangeError(KanamemoError, IndexError):
    """A positional index fell outside of the container or grid."""


class InvalidStateError(KanamemoError, RuntimeError):
    """An operation was requested that the current state does not allow."""


class CapacityError(KanamemoError, ValueError):
    """Not enough symbol groups to fill every slot of the grid."""


class DataSourceError(KanamemoError, OSError):
    """Loading a symbol collection failed.

    Errors are tagged so callers can tell a missing collection from a
    broken one without parsing the message.
    """

    available_tags: FrozenSet[str] = frozenset({"NOT_FOUND", "PARSE_ERROR"})

    def __init__(self, message: str, tags: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.tags: Tuple[str, ...] = ()
        self.add_tags(tags)

    def add_tag(self, tag: str) -> None:
        if tag not in self.available_tags:
            raise ValueError(f"unknown tag {tag!r} for {type(self).__name__}: {self.message}")
        self.tags = self.tags + (tag,)

    def add_tags(self, tags: Iterable[str]) -> None:
        for tag in tags:
            self.add_tag(tag)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    @property
    def title(self) -> str:
        if self.tags:
            return f"{type(self).__name__}, tags: {','.join(self.tags)}"
        return type(self).__name__

    def __str__(self) -> str:
        return self.message
