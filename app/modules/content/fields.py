"""Field schema inspection."""

from typing import Sequence

from modules.content.domain.schemas import FieldConfig


def has_root_list_field(fields: Sequence[FieldConfig]) -> bool:
    """Check whether a file stores a single list at the document root.

    That is the case when the schema has exactly one field, a List field
    with ``root: true``.
    """
    return len(fields) == 1 and fields[0].widget == "list" and fields[0].root is True
