"""
Field path resolution over JSON-shaped documents.

A field path is a dotted string such as ``message``, ``data.title`` or
``items.*.title``. ``*`` expands over every element of an array; a plain
all-digit segment indexes into an array.

Reading never raises: a missing key, a wildcard over a non-array or a
malformed path simply resolves to nothing. Writing (``set_value``) creates
whatever intermediate containers the destination needs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator, Sequence

WILDCARD = "*"

Segment = str | int


class NodeKind(str, Enum):
    """Shape of a document node."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    OTHER = "other"


def node_kind(value: Any) -> NodeKind:
    """Tag a document value with its variant."""
    if isinstance(value, dict):
        return NodeKind.OBJECT
    if isinstance(value, list):
        return NodeKind.ARRAY
    if isinstance(value, str):
        return NodeKind.STRING
    return NodeKind.OTHER


def split_path(path: str) -> list[str]:
    """
    Split a dotted path into segments.

    Returns an empty list for anything that is not a well-formed path
    (empty string, empty segments like ``a..b``, non-string input).
    """
    if not isinstance(path, str) or not path:
        return []
    segments = path.split(".")
    if any(not segment for segment in segments):
        return []
    return segments


def join_path(segments: Sequence[Segment]) -> str:
    """Inverse of split_path for concrete segments."""
    return ".".join(str(segment) for segment in segments)


@dataclass
class Location:
    """A concrete terminal position in a document."""

    container: dict[str, Any] | list[Any]
    key: Segment
    value: Any
    path: tuple[Segment, ...]

    @property
    def dotted(self) -> str:
        return join_path(self.path)

    @property
    def kind(self) -> NodeKind:
        return node_kind(self.value)

    def write(self, value: Any) -> None:
        """Overwrite the value in place."""
        self.container[self.key] = value  # type: ignore[index]
        self.value = value


class FieldPathResolver:
    """
    Navigates documents by dotted field paths.

    Usage:
        resolver = FieldPathResolver()

        for loc in resolver.resolve(doc, "items.*.title"):
            loc.write(loc.value.upper())

        resolver.set_value(doc, ["translated", "items", 0, "title"], "HOLA")
    """

    # =========================================================================
    # Reading
    # =========================================================================

    def resolve(self, doc: Any, path: str) -> list[Location]:
        """Every string leaf addressed by ``path``, in document order."""
        return [loc for loc in self.locate(doc, path) if loc.kind is NodeKind.STRING]

    def locate(self, doc: Any, path: str) -> list[Location]:
        """Every terminal location addressed by ``path``, whatever its type."""
        segments = split_path(path)
        if not segments:
            return []
        return list(self._walk(doc, segments, ()))

    def get(self, doc: Any, path: str, default: Any = None) -> Any:
        """Value at a wildcard-free path, or ``default``."""
        locations = self.locate(doc, path)
        if len(locations) != 1 or WILDCARD in split_path(path):
            return default
        return locations[0].value

    def _walk(
        self,
        current: Any,
        segments: Sequence[str],
        prefix: tuple[Segment, ...],
    ) -> Iterator[Location]:
        segment, rest = segments[0], segments[1:]
        kind = node_kind(current)

        if segment == WILDCARD:
            if kind is not NodeKind.ARRAY:
                return
            for index, item in enumerate(current):
                if rest:
                    yield from self._walk(item, rest, prefix + (index,))
                else:
                    yield Location(current, index, item, prefix + (index,))
            return

        key = self._read_key(current, kind, segment)
        if key is None:
            return

        child = current[key]
        if rest:
            yield from self._walk(child, rest, prefix + (key,))
        else:
            yield Location(current, key, child, prefix + (key,))

    @staticmethod
    def _read_key(current: Any, kind: NodeKind, segment: str) -> Segment | None:
        if kind is NodeKind.OBJECT:
            return segment if segment in current else None
        if kind is NodeKind.ARRAY and segment.isdigit():
            index = int(segment)
            return index if index < len(current) else None
        return None

    # =========================================================================
    # Writing
    # =========================================================================

    def set_value(self, doc: Any, segments: Sequence[Segment], value: Any) -> bool:
        """
        Write ``value`` at ``segments``, creating containers on the way.

        Integer segments address list indices (lists are padded with None),
        string segments address object keys. Returns False when the write
        is impossible, e.g. a non-numeric key into an existing list.
        """
        if not segments:
            return False

        parent = self._descend(doc, segments[:-1], next_segment=segments[-1])
        if parent is None:
            return False
        return self._assign(parent, segments[-1], value)

    def ensure_container(
        self,
        doc: Any,
        segments: Sequence[Segment],
        factory: Callable[[], dict | list],
    ) -> dict | list | None:
        """Make sure a container exists at ``segments`` and return it."""
        if not segments:
            return doc if node_kind(doc) in (NodeKind.OBJECT, NodeKind.ARRAY) else None

        parent = self._descend(doc, segments[:-1], next_segment=segments[-1])
        if parent is None:
            return None
        return self._child_for_write(parent, segments[-1], factory)

    def _descend(
        self,
        doc: Any,
        segments: Sequence[Segment],
        next_segment: Segment,
    ) -> dict | list | None:
        if node_kind(doc) not in (NodeKind.OBJECT, NodeKind.ARRAY):
            return None

        current = doc
        following = list(segments[1:]) + [next_segment]
        for segment, upcoming in zip(segments, following):
            factory = list if isinstance(upcoming, int) else dict
            current = self._child_for_write(current, segment, factory)
            if current is None:
                return None
        return current

    @staticmethod
    def _array_index(segment: Segment) -> int | None:
        if isinstance(segment, int):
            return segment if segment >= 0 else None
        if segment.isdigit():
            return int(segment)
        return None

    def _child_for_write(
        self,
        container: dict | list,
        segment: Segment,
        factory: Callable[[], dict | list],
    ) -> dict | list | None:
        kind = node_kind(container)

        if kind is NodeKind.OBJECT:
            key = str(segment)
            if node_kind(container.get(key)) not in (NodeKind.OBJECT, NodeKind.ARRAY):
                container[key] = factory()
            return container[key]

        index = self._array_index(segment)
        if index is None:
            return None
        self._pad(container, index)
        if node_kind(container[index]) not in (NodeKind.OBJECT, NodeKind.ARRAY):
            container[index] = factory()
        return container[index]

    def _assign(self, container: dict | list, segment: Segment, value: Any) -> bool:
        if node_kind(container) is NodeKind.OBJECT:
            container[str(segment)] = value
            return True

        index = self._array_index(segment)
        if index is None:
            return False
        self._pad(container, index)
        container[index] = value
        return True

    @staticmethod
    def _pad(items: list, index: int) -> None:
        if index >= len(items):
            items.extend([None] * (index + 1 - len(items)))
