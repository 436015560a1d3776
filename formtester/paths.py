"""Field path resolution.

A field path is a top-level field name optionally followed by bracketed
segments, each selecting a child of the previously resolved field:

    email
    address[city]
    contacts[0][phone]

Resolution goes through the `get_child(name)` capability of forms and
fields, so it works at any nesting depth and with any form library that
offers that capability.
"""

import re
from typing import List, Tuple

from formtester.errors import FieldNotFoundError
from formtester.types import FieldLike, FormLike

_SEGMENT_RE = re.compile(r"\[(?P<part>[^\]]+)\]")


def parse_field_path(path: str) -> Tuple[str, List[str]]:
    """Split a field path into its top-level name and nested segments.

    Examples:
        >>> parse_field_path("email")
        ('email', [])
        >>> parse_field_path("address[city][zip]")
        ('address', ['city', 'zip'])
    """
    pos = path.find("[")
    if pos == -1:
        return path, []
    return path[:pos], _SEGMENT_RE.findall(path[pos:])


def resolve_field(form: FormLike, path: str) -> FieldLike:
    """Resolve a field path against a form.

    Raises:
        FieldNotFoundError: If the path is empty or any segment is unknown
    """
    name, segments = parse_field_path(path)
    if not name:
        raise FieldNotFoundError(path)

    field = _child(form, name, path)
    for segment in segments:
        field = _child(field, segment, path)
    return field


def _child(parent, name: str, path: str) -> FieldLike:
    try:
        return parent.get_child(name)
    # FieldNotFoundError is a KeyError too; re-raise with the full path
    except KeyError:
        raise FieldNotFoundError(path, name) from None


__all__ = [
    "parse_field_path",
    "resolve_field",
]
