"""
Shared Schema Building Blocks

- WireModel: base class translating snake_case attributes to the
  camelCase names used on the wire (first_name <-> firstName).
- Serialization groups and the visible() helper used by the view
  schemas to declare per-field visibility metadata.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# =============================================================================
# Serialization Groups
# =============================================================================
# A group names a view of the data. A field is emitted when one of its
# groups is active for the current response.
AUTHOR_READ = "author:read"
BOOK_READ = "book:read"


def visible(*groups: str, since: str | None = None) -> dict[str, Any]:
    """
    Build the json_schema_extra metadata for a view field.

    Args:
        groups: Groups in which the field is serialized
        since: Lowest API version exposing the field (None = all versions)

    Example:
        comment: str | None = Field(
            default=None,
            json_schema_extra=visible(BOOK_READ, since="2.0"),
        )
    """
    extra: dict[str, Any] = {"groups": list(groups)}
    if since is not None:
        extra["since"] = since
    return extra


class WireModel(BaseModel):
    """
    Base for request and response schemas.

    - alias_generator=to_camel: JSON uses camelCase keys
    - populate_by_name: Python code may still use snake_case names
    - str_strip_whitespace: "  Dune " is validated as "Dune"
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        from_attributes=True,
    )
