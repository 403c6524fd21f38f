"""Path template compilation.

A path template such as ``{{year}}/{{slug}}`` is compiled into a matcher that
extracts the placeholder values from a concrete sub-path. Callers only use
the ``TemplateCompiler`` protocol, so the regex-based implementation can be
swapped for another matcher.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List, Optional, Pattern, Protocol, Tuple, Union

SLUG_PLACEHOLDER = "{{slug}}"

_OPEN = "{{"
_CLOSE = "}}"

Segment = Union[str, Tuple[str]]


def parse_template(template: str) -> List[Segment]:
    """Split a template into literal strings and ``(name,)`` placeholders.

    An opening ``{{`` without a matching ``}}`` (or with another ``{{`` inside
    it) is kept as literal text.
    """
    segments: List[Segment] = []
    literal: List[str] = []
    index = 0

    while index < len(template):
        start = template.find(_OPEN, index)
        if start < 0:
            literal.append(template[index:])
            break

        end = template.find(_CLOSE, start + len(_OPEN))
        name = template[start + len(_OPEN) : end] if end >= 0 else ""

        if end < 0 or not name.strip() or _OPEN in name:
            literal.append(template[index : start + len(_OPEN)])
            index = start + len(_OPEN)
            continue

        prefix = "".join(literal) + template[index:start]
        if prefix:
            segments.append(prefix)
        literal = []
        segments.append((name.strip(),))
        index = end + len(_CLOSE)

    if "".join(literal):
        segments.append("".join(literal))

    return segments


def template_to_pattern(template: str, placeholder_pattern: str = "[^/]+?") -> str:
    """Turn a template into a regex fragment with anonymous placeholders."""
    return "".join(
        re.escape(segment) if isinstance(segment, str) else placeholder_pattern
        for segment in parse_template(template)
    )


class CompiledTemplate(Protocol):
    """A template ready to be matched against concrete paths."""

    def match(self, value: str) -> Optional[Dict[str, str]]:
        """Return placeholder values keyed by placeholder name, or None."""
        ...


class TemplateCompiler(Protocol):
    """Compiles path templates into matchers."""

    def compile(self, template: str) -> Optional[CompiledTemplate]:
        """Compile a template; None when it cannot be compiled."""
        ...


@dataclass(frozen=True)
class RegexTemplate:
    """Compiled template backed by a regular expression with named groups."""

    pattern: Pattern[str]
    group_names: Dict[str, str]

    def match(self, value: str) -> Optional[Dict[str, str]]:
        found = self.pattern.fullmatch(value)
        if found is None:
            return None
        return {name: found.group(group) for name, group in self.group_names.items()}


def _group_name(name: str, taken: Dict[str, str]) -> str:
    group = re.sub(r"\W", "_", name)
    if not group or group[0].isdigit():
        group = f"_{group}"
    base, counter = group, 1
    while group in taken.values():
        counter += 1
        group = f"{base}_{counter}"
    return group


@lru_cache(maxsize=256)
def _compile_regex_template(template: str) -> RegexTemplate:
    parts: List[str] = []
    group_names: Dict[str, str] = {}

    for segment in parse_template(template):
        if isinstance(segment, str):
            parts.append(re.escape(segment))
            continue

        (name,) = segment
        if name in group_names:
            parts.append(f"(?P={group_names[name]})")
            continue

        group = _group_name(name, group_names)
        group_names[name] = group
        if name == "slug":
            parts.append(f"(?P<{group}>.+)")
        else:
            parts.append(f"(?P<{group}>[^/]+?)")

    return RegexTemplate(pattern=re.compile("".join(parts)), group_names=group_names)


class RegexTemplateCompiler:
    """Default compiler: literals are escaped, placeholders become named groups.

    ``{{slug}}`` captures greedily (it may span several path segments); any
    other placeholder matches within a single path segment.
    """

    def compile(self, template: str) -> Optional[CompiledTemplate]:
        try:
            return _compile_regex_template(template)
        except re.error:
            return None


DEFAULT_TEMPLATE_COMPILER = RegexTemplateCompiler()


def get_slug(
    sub_path: str,
    template: Optional[str] = None,
    *,
    compiler: Optional[TemplateCompiler] = None,
) -> str:
    """Extract the slug from a sub-path using the collection's path template.

    Args:
        sub_path: Path of the file relative to the collection folder, without
            locale decoration or extension.
        template: Collection ``path`` option, e.g. ``{{year}}/{{slug}}``.
        compiler: Template compiler; defaults to the regex compiler.

    Returns:
        The captured slug, or ``sub_path`` unchanged when there is no template,
        the template has no ``{{slug}}`` or the sub-path does not match.
    """
    if not template or SLUG_PLACEHOLDER not in template:
        return sub_path

    compiled = (compiler or DEFAULT_TEMPLATE_COMPILER).compile(template)
    if compiled is None:
        return sub_path

    values = compiled.match(sub_path)
    if not values or not values.get("slug"):
        return sub_path

    return values["slug"]
