"""Glyph definitions, records and codepoint assignments.

A GlyphDefinition is what a manifest declares; a GlyphRecord is what the
assembler produces for the font; a CodepointAssignment is the stable
identifier-to-character mapping handed back to callers.
"""

from dataclasses import dataclass, field
from typing import Any

from iconsmith.domain.outline import Outline


@dataclass
class GlyphDefinition:
    """A named icon waiting to be turned into a glyph.

    Attributes:
        identifier: Name of the icon (e.g., "Home", "ArrowLeft")
        text: SVG source before synthesis; the assigned character after
        order: Global position assigned when the manifest was read
        collection: Storage grouping key, never used for ordering
    """

    identifier: str
    text: str
    order: int
    collection: str = "default"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the definition
        """
        return {
            "identifier": self.identifier,
            "text": self.text,
            "order": self.order,
            "collection": self.collection,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlyphDefinition":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a definition

        Returns:
            GlyphDefinition instance
        """
        return cls(
            identifier=data["identifier"],
            text=data["text"],
            order=data["order"],
            collection=data.get("collection", "default"),
        )


@dataclass(frozen=True, slots=True)
class CodepointAssignment:
    """The character and glyph id given to one icon.

    Attributes:
        identifier: Icon name
        collection: Collection the icon was stored under
        order: Global order value of the icon
        codepoint: Assigned Private Use Area codepoint
        glyph_id: Index of the glyph in the font (>= 1)
    """

    identifier: str
    collection: str
    order: int
    codepoint: int
    glyph_id: int

    @property
    def character(self) -> str:
        """The assigned codepoint as a one-character string."""
        return chr(self.codepoint)

    @property
    def label(self) -> str:
        """Codepoint in ``U+XXXX`` notation."""
        return f"U+{self.codepoint:04X}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "identifier": self.identifier,
            "collection": self.collection,
            "order": self.order,
            "codepoint": self.label,
            "glyph_id": self.glyph_id,
        }


@dataclass
class GlyphRecord:
    """A glyph ready to be placed in the font.

    Attributes:
        glyph_id: Index in the glyph order (0 is reserved for .notdef)
        codepoint: Assigned codepoint
        identifier: Icon name the glyph was built from
        collection: Collection of the source definition
        order: Global order of the source definition
        outline: Em-space, quadratic-only outline
        glyph: fontTools simple glyph with xMin = yMin = 0
    """

    glyph_id: int
    codepoint: int
    identifier: str
    collection: str
    order: int
    outline: Outline
    glyph: Any = field(repr=False, default=None)

    @property
    def glyph_name(self) -> str:
        """Name of the glyph inside the font."""
        return f"uni{self.codepoint:04X}"

    def assignment(self) -> CodepointAssignment:
        """The codepoint assignment this record represents."""
        return CodepointAssignment(
            identifier=self.identifier,
            collection=self.collection,
            order=self.order,
            codepoint=self.codepoint,
            glyph_id=self.glyph_id,
        )


@dataclass(frozen=True)
class SynthesisResult:
    """Outcome of a synthesis pass.

    Attributes:
        font_bytes: Complete TrueType font image
        assignments: Codepoint assignments in canonical order
    """

    font_bytes: bytes
    assignments: tuple[CodepointAssignment, ...]

    def codepoint_map(self) -> dict[str, int]:
        """Map each identifier to its assigned codepoint, in canonical order."""
        return {a.identifier: a.codepoint for a in self.assignments}
