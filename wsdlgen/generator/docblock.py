"""Documentation comment parsing.

Works on PHP-style ``/** ... */`` blocks as well as plain docstrings::

    Add two numbers.

    @param int
    @param int
    @return int
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

TagValue = str | bool

_DECORATION = " *\t\r/"
_TAG_LINE = re.compile(r"^(?:/?\*+)?\s*@(\S+)(?:\s+(\S+))?")


def _lines(comment: str | None) -> list[str]:
    if not comment:
        return []
    return comment.splitlines()


def extract_summary(comment: str | None) -> str:
    """Return the prose that precedes the first tag line."""
    words: list[str] = []
    for line in _lines(comment):
        line = line.strip(_DECORATION)
        if line.startswith("@"):
            break
        if line:
            words.append(line)
    return " ".join(words)


def _tags(comment: str | None) -> Iterator[tuple[str, TagValue]]:
    for line in _lines(comment):
        line = line.strip()
        if line.endswith("*/"):
            line = line[:-2].rstrip()
        match = _TAG_LINE.match(line)
        if match is None:
            continue
        value = match.group(2)
        yield match.group(1), value if value is not None else True


def extract_tag(comment: str | None, tag_name: str) -> list[TagValue]:
    """Return the values of every ``@tag_name`` line, in comment order.

    A tag without a value (e.g. ``@ignoreInWsdl``) yields ``True``.
    """
    return [value for name, value in _tags(comment) if name == tag_name]


def first_tag(comment: str | None, tag_name: str) -> TagValue | None:
    """Return the first value of a tag, or None when the tag is absent."""
    values = extract_tag(comment, tag_name)
    return values[0] if values else None


@dataclass
class DocBlock:
    """A parsed comment: summary text plus tag name -> ordered values."""

    summary: str
    tags: dict[str, list[TagValue]] = field(default_factory=dict)

    @classmethod
    def parse(cls, comment: str | None) -> "DocBlock":
        tags: dict[str, list[TagValue]] = {}
        for name, value in _tags(comment):
            tags.setdefault(name, []).append(value)
        return cls(summary=extract_summary(comment), tags=tags)

    def get(self, tag_name: str) -> list[TagValue]:
        return self.tags.get(tag_name, [])

    def first(self, tag_name: str) -> TagValue | None:
        values = self.get(tag_name)
        return values[0] if values else None

    def has(self, tag_name: str) -> bool:
        return tag_name in self.tags
