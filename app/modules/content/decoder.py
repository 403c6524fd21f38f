"""Content decoders.

Turns the raw text of an entry file into structured content. The batch
driver only relies on the ``ContentDecoder`` protocol; ``FrontMatterDecoder``
is the default implementation covering YAML, TOML, JSON and Markdown with
YAML/TOML/JSON front matter.
"""

import datetime
import json
import re
import tomllib
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Tuple

import yaml

from modules.content.domain.errors import ContentParseError
from modules.content.domain.models import FileConfig, RawFileItem
from modules.content.paths import get_front_matter_delimiters

FRONT_MATTER_FORMATS = frozenset({"yaml-frontmatter", "toml-frontmatter", "json-frontmatter"})

CustomParser = Callable[[str], Any]


class ContentDecoder(Protocol):
    """Decodes a raw file into structured content."""

    def decode(self, file: RawFileItem, file_config: FileConfig) -> Any:
        """Return the parsed content.

        Raises:
            ContentParseError: If the text cannot be parsed.
        """
        ...


def detect_front_matter_format(text: str) -> str:
    """Detect the front matter serialization format from its opening delimiter."""
    if text.startswith("+++"):
        return "toml-frontmatter"

    if text.startswith("{"):
        return "json-frontmatter"

    return "yaml-frontmatter"


def normalize_line_breaks(text: str) -> str:
    """Trim the text and convert CRLF/CR line breaks to LF."""
    return re.sub(r"\r\n?", "\n", text.strip())


def _stringify_dates(value: Any) -> Any:
    """Convert parsed date/time values back to ISO strings.

    YAML and TOML parsers produce date objects, while entry content keeps
    dates as the strings the author wrote.
    """
    if isinstance(value, dict):
        return {key: _stringify_dates(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_stringify_dates(item) for item in value]
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    return value


def parse_yaml(text: str) -> Any:
    return _stringify_dates(yaml.safe_load(text))


def parse_toml(text: str) -> Any:
    return _stringify_dates(tomllib.loads(text))


def parse_json(text: str) -> Any:
    return json.loads(text)


_HEAD_PARSERS: Dict[str, CustomParser] = {
    "yaml-frontmatter": parse_yaml,
    "toml-frontmatter": parse_toml,
    "json-frontmatter": parse_json,
}


class FrontMatterDecoder:
    """Default decoder for data files and Markdown with front matter.

    Attributes:
        custom_parsers: Parsers for custom format names, tried first.
    """

    def __init__(self, custom_parsers: Optional[Mapping[str, CustomParser]] = None):
        self.custom_parsers: Dict[str, CustomParser] = dict(custom_parsers or {})

    def register_parser(self, format: str, parser: CustomParser) -> None:
        """Register a parser for a custom format name."""
        self.custom_parsers[format] = parser

    def decode(self, file: RawFileItem, file_config: FileConfig) -> Any:
        text = normalize_line_breaks(file.text or "")
        configured_format = file_config.format
        format = (
            detect_front_matter_format(text)
            if configured_format == "frontmatter"
            else configured_format
        )

        try:
            custom_parser = self.custom_parsers.get(format)
            if custom_parser is not None:
                return custom_parser(text)

            if format in ("yaml", "yml"):
                return parse_yaml(text)

            if format == "toml":
                return parse_toml(text)

            if format == "json":
                return parse_json(text)

            if format in FRONT_MATTER_FORMATS:
                delimiters = file_config.fm_delimiters or get_front_matter_delimiters(format)
                return self._parse_front_matter(text, format, delimiters)
        except ContentParseError:
            raise
        except Exception as e:
            raise ContentParseError(file.path, f"{type(e).__name__}: {e}", e) from e

        raise ContentParseError(file.path, f"an unknown format: {format}")

    def _parse_front_matter(
        self, text: str, format: str, delimiters: Optional[Tuple[str, str]]
    ) -> Dict[str, Any]:
        start, end = delimiters or ("---", "---")
        # The head may be empty; the body is everything after the closing delimiter
        pattern = re.compile(
            rf"^{re.escape(start)}\n(?:(?P<head>.*?)\n)?{re.escape(end)}$(?:\n(?P<body>.+))?",
            re.MULTILINE | re.DOTALL,
        )
        found = pattern.match(text)
        head = found.group("head") if found else None
        body = found.group("body") if found else None

        if not head and not body:
            # Markdown without a front matter block
            if text:
                return {"body": text}
            raise ValueError("No front matter block found")

        if format == "json-frontmatter" and (start, end) == ("{", "}"):
            head = f"{{{head or ''}}}"

        data = _HEAD_PARSERS[format](head) if head else {}
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("Front matter must be a mapping")

        if body is not None:
            data["body"] = body

        return data
