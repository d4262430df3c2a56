"""Path-indexed error accumulator.

An Errors object collects violation records produced while evaluating
constraints. Each record is a dictionary with four keys:

- type: stable, namespaced error token (e.g. "verity.constraints.is_not_type")
- data: structured details used to build messages (expected values, etc.)
- message: optional message override
- path: location of the violation within the evaluated value

Scoped views (``errors["key"]``, ``errors.dig("a", 0)``) share the backing
record list and prefix their path onto every record they add. Views never
copy: records added through any view are visible from the root.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any


class Errors:
    """Ordered collection of violation records."""

    def __init__(self) -> None:
        self._records: list[dict[str, Any]] = []
        self._path: tuple[Any, ...] = ()

    @classmethod
    def _view(cls, records: list[dict[str, Any]], path: tuple[Any, ...]) -> Errors:
        view = cls.__new__(cls)
        view._records = records
        view._path = path
        return view

    @property
    def path(self) -> list[Any]:
        """Path prefix applied to records added through this view."""
        return list(self._path)

    def add(self, error_type: str, /, message: str | None = None, **data: Any) -> Errors:
        """Add an error record at the current path.

        Args:
            error_type: Error token, usually a constraint's ``type`` or ``negated_type``
            message: Optional message override
            **data: Structured details for the record

        Returns:
            This errors view, so calls can be chained
        """
        self._records.append({
            "data": data,
            "message": message,
            "path": list(self._path),
            "type": str(error_type),
        })
        return self

    def __getitem__(self, key: Any) -> Errors:
        """Return a view scoped to a single key or index."""
        return self._view(self._records, self._path + (key,))

    def dig(self, *path: Any) -> Errors:
        """Return a view scoped to a nested path.

        ``errors.dig("a", "b")`` is equivalent to ``errors["a"]["b"]``.
        Passing a single list or tuple is treated as the path itself.
        """
        if len(path) == 1 and isinstance(path[0], (list, tuple)):
            path = tuple(path[0])
        return self._view(self._records, self._path + tuple(path))

    def update(self, other: Errors | list[dict[str, Any]]) -> Errors:
        """Append another collection's records under this view's path."""
        records = other.to_list() if isinstance(other, Errors) else list(other)
        for record in records:
            self.dig(*record.get("path", [])).add(
                record["type"],
                message=record.get("message"),
                **dict(record.get("data") or {}),
            )
        return self

    def merge(self, other: Errors | list[dict[str, Any]]) -> Errors:
        """Return a new root Errors holding this view's records then other's."""
        merged = Errors()
        merged.update(self)
        merged.update(other)
        return merged

    def copy(self) -> Errors:
        """Return an independent root Errors with the same records."""
        return Errors().update(self)

    def to_list(self) -> list[dict[str, Any]]:
        """Return this view's records in insertion order.

        Paths are relative to the view; for a root Errors they are absolute.
        """
        depth = len(self._path)
        result = []
        for record in self._records:
            path = record["path"]
            if depth and tuple(path[:depth]) != self._path:
                continue
            result.append({
                "data": dict(record["data"]),
                "message": record["message"],
                "path": list(path[depth:]),
                "type": record["type"],
            })
        return result

    def group_by_path(self) -> dict[tuple[Any, ...], list[dict[str, Any]]]:
        """Group records by path, preserving first-seen path order."""
        groups: dict[tuple[Any, ...], list[dict[str, Any]]] = {}
        for record in self.to_list():
            groups.setdefault(tuple(record["path"]), []).append(record)
        return groups

    def summary(self, separator: str | None = None) -> str:
        """Return a one-line, human readable summary of the records."""
        if separator is None:
            from verity.config import get_config

            separator = get_config().summary_separator

        parts = []
        for record in self.to_list():
            text = record["message"] or record["type"]
            if record["path"]:
                text = f"{format_path(record['path'])}: {text}"
            parts.append(text)
        return separator.join(parts)

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self.to_list())

    def __len__(self) -> int:
        return len(self.to_list())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Errors):
            return self.to_list() == other.to_list()
        if isinstance(other, list):
            return self.to_list() == [_normalize_record(r) for r in other]
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Errors({self.to_list()!r})"


def format_path(path: list[Any]) -> str:
    """Render a record path as ``a.b[0].c``."""
    text = ""
    for segment in path:
        if isinstance(segment, int) and not isinstance(segment, bool):
            text += f"[{segment}]"
        elif text:
            text += f".{segment}"
        else:
            text = str(segment)
    return text


def _normalize_record(record: dict[str, Any]) -> dict[str, Any]:
    return {
        "data": dict(record.get("data") or {}),
        "message": record.get("message"),
        "path": list(record.get("path") or []),
        "type": record.get("type"),
    }
