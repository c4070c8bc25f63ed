"""
Versioned Serializer

Turns ORM objects into plain dicts using a view schema as the field list.

Each view field declares, through Field(json_schema_extra=visible(...)):
- groups: the views in which the field is serialized
- since: optional lowest API version exposing the field

A field is emitted when its groups intersect the active groups AND its
"since" version (if any) is <= the requested version. Nested views are
filtered with the same rules. Keys are the camelCase aliases, in field
declaration order, so identical input always yields identical output.

Usage:
    from bookshelf.schemas import BOOK_READ, BookView
    from bookshelf.services.serializer import dumps, serialize

    data = serialize(book, BookView, groups=[BOOK_READ], version="2.0")
    body = dumps(data)
"""

import json
import types
import typing
from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Union

from pydantic import BaseModel

BASELINE_VERSION = "1.0"

Version = tuple[int, ...]


def parse_version(text: str) -> Version:
    """
    Parse a dotted version string into a comparable tuple.

    Trailing zeros are dropped so that "2", "2.0" and "2.0.0" compare equal,
    and components compare numerically ("1.10" > "1.9").

    Raises:
        ValueError: If the string is not dotted non-negative integers
    """
    parts = text.strip().split(".")
    if not parts or not all(part.isdigit() for part in parts):
        raise ValueError(f"Invalid version: {text!r}")
    numbers = [int(part) for part in parts]
    while len(numbers) > 1 and numbers[-1] == 0:
        numbers.pop()
    return tuple(numbers)


@dataclass(frozen=True)
class FieldRule:
    """Visibility metadata of one view field."""

    name: str
    key: str
    groups: frozenset[str]
    since: Version | None
    nested: type[BaseModel] | None

    def is_visible(self, groups: frozenset[str], version: Version) -> bool:
        if not self.groups & groups:
            return False
        return self.since is None or self.since <= version


def _nested_view(annotation: Any) -> type[BaseModel] | None:
    """Find the view class inside list[View], View | None, Optional[View]."""
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    origin = typing.get_origin(annotation)
    if origin in (list, tuple, Union, types.UnionType):
        for arg in typing.get_args(annotation):
            view = _nested_view(arg)
            if view is not None:
                return view
    return None


@lru_cache(maxsize=None)
def field_rules(view: type[BaseModel]) -> tuple[FieldRule, ...]:
    """
    Read the visibility metadata of a view, in declaration order.

    Fields without a "groups" entry are never serialized.
    """
    rules = []
    for name, info in view.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        since = extra.get("since")
        rules.append(
            FieldRule(
                name=name,
                key=info.alias or name,
                groups=frozenset(extra.get("groups", ())),
                since=parse_version(since) if since is not None else None,
                nested=_nested_view(info.annotation),
            )
        )
    return tuple(rules)


def serialize(
    obj: Any,
    view: type[BaseModel],
    groups: Iterable[str],
    version: str | None = None,
) -> dict[str, Any] | list[dict[str, Any]]:
    """
    Serialize an object, or a sequence of objects, through a view.

    Args:
        obj: ORM instance (or list/tuple of instances)
        view: View schema listing the fields and their metadata
        groups: Active serialization groups
        version: Requested API version, baseline "1.0" when None

    Returns:
        A dict for a single object, a list of dicts for a sequence
    """
    active = frozenset(groups)
    requested = parse_version(version or BASELINE_VERSION)
    if isinstance(obj, (list, tuple)):
        return [_serialize_one(item, view, active, requested, ()) for item in obj]
    return _serialize_one(obj, view, active, requested, ())


def _serialize_one(
    obj: Any,
    view: type[BaseModel],
    groups: frozenset[str],
    version: Version,
    path: tuple[int, ...],
) -> dict[str, Any]:
    # path holds the ids of the objects being serialized above this one;
    # a relation pointing back into it is skipped instead of recursing forever.
    path = path + (id(obj),)
    data: dict[str, Any] = {}
    for rule in field_rules(view):
        if not rule.is_visible(groups, version):
            continue
        value = getattr(obj, rule.name)
        if rule.nested is not None and value is not None:
            if isinstance(value, (list, tuple)):
                value = [
                    _serialize_one(item, rule.nested, groups, version, path)
                    for item in value
                    if id(item) not in path
                ]
            elif id(value) in path:
                continue
            else:
                value = _serialize_one(value, rule.nested, groups, version, path)
        data[rule.key] = value
    return data


def dumps(data: Any) -> str:
    """Render serialized data as compact, deterministic JSON."""
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
