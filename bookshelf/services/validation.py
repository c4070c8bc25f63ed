"""
Request Validation Service

Write endpoints take the raw JSON body, validate it against a payload
schema, and turn Pydantic errors into ValidationFailed, which the API
renders as a 400 with a list of {"field", "message"} items.

Update endpoints validate the merged state: the body's fields laid over
the entity's current values.
"""

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from bookshelf.exceptions import ValidationFailed, Violation

PayloadT = TypeVar("PayloadT", bound=BaseModel)


def require_object(body: Any) -> dict[str, Any]:
    """
    Check that the request body is a JSON object.

    Raises:
        ValidationFailed: For a missing body, an array, a string, ...
    """
    if not isinstance(body, dict):
        raise ValidationFailed(
            [Violation(field="body", message="Request body must be a JSON object")]
        )
    return body


def _field_label(schema: type[BaseModel], loc: tuple) -> str:
    if not loc:
        return "body"
    head, *rest = loc
    info = schema.model_fields.get(head) if isinstance(head, str) else None
    if info is not None and info.alias:
        head = info.alias
    return ".".join(str(part) for part in (head, *rest))


def to_violations(schema: type[BaseModel], exc: ValidationError) -> list[Violation]:
    """Flatten a Pydantic ValidationError, labelling fields by wire name."""
    return [
        Violation(field=_field_label(schema, tuple(error["loc"])), message=error["msg"])
        for error in exc.errors()
    ]


def validate_payload(schema: type[PayloadT], data: Mapping[str, Any]) -> PayloadT:
    """
    Validate data against a payload schema.

    Unknown keys (such as "idAuthor" on books) are ignored.

    Raises:
        ValidationFailed: Listing every violated constraint
    """
    try:
        return schema.model_validate(dict(data))
    except ValidationError as exc:
        raise ValidationFailed(to_violations(schema, exc)) from exc


def merge_payload(
    schema: type[BaseModel],
    entity: Any,
    body: Mapping[str, Any],
) -> dict[str, Any]:
    """
    Lay the body over the entity's current values.

    Fields present in the body (by camelCase or snake_case name) win;
    the others keep the entity's value. The result is keyed by the
    schema's Python field names.
    """
    merged: dict[str, Any] = {}
    for name, info in schema.model_fields.items():
        alias = info.alias or name
        if alias in body:
            merged[name] = body[alias]
        elif name in body:
            merged[name] = body[name]
        else:
            merged[name] = getattr(entity, name)
    return merged


def apply_payload(entity: Any, payload: BaseModel) -> Any:
    """Copy every validated field of the payload onto the entity."""
    for name, value in payload.model_dump().items():
        setattr(entity, name, value)
    return entity
