"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema


def camelcase(name: str) -> str:
    """Return ``name`` (snake_case) in lowerCamelCase."""
    head, *tail = name.split("_")
    return head + "".join(part.title() for part in tail)


class CamelCaseSchema(Schema):
    """Schema whose wire names are the camelCase form of its attribute names.

    Unknown input keys are dropped rather than rejected.
    """

    class Meta:
        unknown = EXCLUDE

    def on_bind_field(self, field_name: str, field_obj) -> None:
        field_obj.data_key = camelcase(field_obj.data_key or field_name)
