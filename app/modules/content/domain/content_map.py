"""Flattened representation of entry content.

Nested field values are stored as an ordered mapping from a dot-separated
key path to a leaf value, e.g. ``{"title": "Hi", "tags.0": "a", "author.name": "Jo"}``.
Lists use numeric segments. Empty containers are kept as leaves so they
survive a round trip.
"""

from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Optional

KEY_PATH_SEPARATOR = "."


def flatten(value: Mapping, prefix: str = "") -> Dict[str, Any]:
    """Flatten a nested mapping into an ordered key path dictionary.

    Args:
        value: Nested mapping (lists and mappings may be mixed at any depth).
        prefix: Key path prepended to every produced key.

    Returns:
        Dict of key path to leaf value, in document order.
    """
    result: Dict[str, Any] = {}
    _flatten_into(result, value, prefix)
    return result


def _flatten_into(result: Dict[str, Any], value: Any, prefix: str) -> None:
    if isinstance(value, Mapping):
        items = [(str(key), child) for key, child in value.items()]
    elif isinstance(value, list):
        items = [(str(index), child) for index, child in enumerate(value)]
    else:
        result[prefix] = value
        return

    if not items and prefix:
        result[prefix] = {} if isinstance(value, Mapping) else []
        return

    for key, child in items:
        _flatten_into(result, child, f"{prefix}{KEY_PATH_SEPARATOR}{key}" if prefix else key)


def unflatten(flat: Mapping[str, Any]) -> Dict[str, Any]:
    """Rebuild nested content from a key path mapping.

    Nested containers whose keys are exactly ``0..n-1`` become lists; the
    root always stays a mapping.
    """
    root: Dict[str, Any] = {}
    for key_path, leaf in flat.items():
        node = root
        segments = key_path.split(KEY_PATH_SEPARATOR)
        for segment in segments[:-1]:
            child = node.get(segment)
            if not isinstance(child, dict):
                child = {}
                node[segment] = child
            node = child
        node[segments[-1]] = leaf
    return {key: _restore_lists(child) for key, child in root.items()}


def _restore_lists(node: Any) -> Any:
    if not isinstance(node, dict):
        return node
    restored = {key: _restore_lists(child) for key, child in node.items()}
    if restored and all(key.isdigit() for key in restored):
        indexes = sorted(int(key) for key in restored)
        if indexes == list(range(len(indexes))):
            return [restored[str(index)] for index in indexes]
    return restored


class FlattenedContent(Mapping):
    """Read-only ordered mapping of key path to leaf value.

    Provides prefix-based lookups so callers never have to rebuild the
    nested tree to read one branch of it.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, Any] = dict(values or {})

    @classmethod
    def from_nested(cls, content: Mapping) -> "FlattenedContent":
        """Build flattened content from a nested mapping."""
        return cls(flatten(content))

    def __getitem__(self, key_path: str) -> Any:
        return self._values[key_path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FlattenedContent):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"FlattenedContent({self._values!r})"

    def keys_with_prefix(self, prefix: str) -> List[str]:
        """Return the key paths equal to ``prefix`` or nested below it."""
        nested_prefix = f"{prefix}{KEY_PATH_SEPARATOR}"
        return [
            key for key in self._values if key == prefix or key.startswith(nested_prefix)
        ]

    def get_prefixed(self, prefix: str) -> Dict[str, Any]:
        """Return the leaves under ``prefix`` keyed by their full key path."""
        return {key: self._values[key] for key in self.keys_with_prefix(prefix)}

    def get_subtree(self, prefix: str) -> Any:
        """Return the nested value stored under ``prefix``, or None if absent."""
        if prefix in self._values:
            return self._values[prefix]
        start = len(prefix) + len(KEY_PATH_SEPARATOR)
        branch = {key[start:]: value for key, value in self.get_prefixed(prefix).items()}
        if not branch:
            return None
        return _restore_lists(unflatten(branch))

    def to_dict(self) -> Dict[str, Any]:
        """Return the nested representation of the content."""
        return unflatten(self._values)
