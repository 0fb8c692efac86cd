"""IconDocument — SVG source text with located spans for the parts we rewrite.

Locating by regex keeps every byte outside the replaced spans untouched, the
same splice-at-offsets approach used for surgical edits.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_ROOT_RE = re.compile(r"<svg\b[^>]*>", re.IGNORECASE)
_PATH_RE = re.compile(r"<path\b[^>]*>", re.IGNORECASE)
# Leading whitespace is part of the match so removing an attribute leaves no gap
_ATTR_RE = re.compile(r"""(\s+)([^\s=/>"']+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")

SIZING_ATTRIBUTES = frozenset({"viewbox", "width", "height"})


@dataclass
class Attribute:
    name: str
    value: str
    # Absolute offsets: whole `  name="value"` and the bare value
    span: tuple[int, int]
    value_span: tuple[int, int]


@dataclass
class PathElement:
    index: int
    tag: str
    tag_span: tuple[int, int]
    d: str
    d_span: tuple[int, int]


@dataclass
class IconDocument:
    """Represents one SVG file as text plus spans."""

    text: str
    root_tag: str = ""
    root_span: tuple[int, int] | None = None
    root_attributes: list[Attribute] = field(default_factory=list)
    paths: list[PathElement] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> IconDocument:
        doc = cls(text=text)

        root_match = _ROOT_RE.search(text)
        if root_match is None:
            return doc
        doc.root_tag = root_match.group(0)
        doc.root_span = (root_match.start(), root_match.end())
        doc.root_attributes = _scan_attributes(doc.root_tag, root_match.start())

        for match in _PATH_RE.finditer(text, root_match.end()):
            attrs = _scan_attributes(match.group(0), match.start())
            d_attr = next((a for a in attrs if a.name == "d"), None)
            if d_attr is None:
                continue
            doc.paths.append(
                PathElement(
                    index=len(doc.paths),
                    tag=match.group(0),
                    tag_span=(match.start(), match.end()),
                    d=d_attr.value,
                    d_span=d_attr.value_span,
                )
            )
        return doc

    @property
    def has_root(self) -> bool:
        return self.root_span is not None

    def attribute_map(self) -> dict[str, str]:
        """Root attributes by name; the first occurrence wins."""
        attrs: dict[str, str] = {}
        for attr in self.root_attributes:
            attrs.setdefault(attr.name, attr.value)
        return attrs

    def sizing_attributes(self) -> list[Attribute]:
        return [a for a in self.root_attributes if a.name.lower() in SIZING_ATTRIBUTES]


def _scan_attributes(tag_text: str, offset: int) -> list[Attribute]:
    attrs: list[Attribute] = []
    for m in _ATTR_RE.finditer(tag_text):
        group = 3 if m.group(3) is not None else 4
        attrs.append(
            Attribute(
                name=m.group(2),
                value=m.group(group),
                span=(offset + m.start(), offset + m.end()),
                value_span=(offset + m.start(group), offset + m.end(group)),
            )
        )
    return attrs
