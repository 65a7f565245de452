"""Domain models for iconsmith.

This module contains the core domain models representing outlines, icon
definitions and the glyphs built from them. Models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Independent of the SVG parser used to produce them
- Drawable into any fontTools pen

Key classes:
- PathCommand / Outline: Drawing commands of one glyph
- ViewBox / ParsedVector: Extracted outline with its declared frame
- GlyphDefinition: An icon declared by a manifest
- GlyphRecord: A glyph ready for the font tables
- CodepointAssignment: Identifier to codepoint mapping
- SynthesisResult: Font bytes plus assignments
"""

from iconsmith.domain.glyph import (
    CodepointAssignment,
    GlyphDefinition,
    GlyphRecord,
    SynthesisResult,
)
from iconsmith.domain.outline import (
    CommandType,
    Coordinate,
    Outline,
    ParsedVector,
    PathCommand,
    ViewBox,
)

__all__: list[str] = [
    # Enums
    "CommandType",
    # Geometry
    "Coordinate",
    "PathCommand",
    "Outline",
    "ViewBox",
    "ParsedVector",
    # Glyphs
    "GlyphDefinition",
    "GlyphRecord",
    "CodepointAssignment",
    "SynthesisResult",
]
