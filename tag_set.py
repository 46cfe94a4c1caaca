"""Ordered, unique string collection used for surname and keyword filters."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

LOGGER = logging.getLogger(__name__)


class TagSet:
    """Insertion-ordered set of non-empty, stripped tags.

    Matching is exact and case-sensitive. Only leading/trailing whitespace is
    removed on add; nothing is case-folded.
    """

    def __init__(self, values: Iterable[str] = ()) -> None:
        self._tags: list[str] = []
        for value in values:
            self.add(value)

    def add(self, value: str) -> bool:
        """Append value unless it is blank or already present. Returns True if added."""
        tag = value.strip() if isinstance(value, str) else ""
        if not tag or tag in self._tags:
            LOGGER.debug("TagSet: ignored add value=%r", value)
            return False
        self._tags.append(tag)
        return True

    def remove(self, value: str) -> bool:
        """Remove the first exact match. Returns True if something was removed."""
        try:
            self._tags.remove(value)
        except ValueError:
            return False
        return True

    def clear(self) -> None:
        self._tags = []

    def joined(self) -> str:
        return ",".join(self._tags)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._tags))

    def __len__(self) -> int:
        return len(self._tags)

    def __contains__(self, value: object) -> bool:
        return value in self._tags

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TagSet):
            return self._tags == other._tags
        return NotImplemented

    def __repr__(self) -> str:
        return f"TagSet({self._tags!r})"
