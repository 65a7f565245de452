"""Core synthesis pipeline for iconsmith.

This module contains the stages that turn SVG icon sources into a
TrueType font:

- Vector extraction (markup to one flattened outline, strokes included)
- Curve normalization (cubic Beziers to quadratic splines)
- Em-space mapping (SVG user space to font units, y axis up)
- Glyph assembly (canonical order, glyph ids and PUA codepoints)
- Font table building (head/hhea/maxp/hmtx/OS2/post/name/cmap/glyf/loca)

Key classes:
- VectorExtractor: Glyph source to ParsedVector
- CurveNormalizer: Outline to quadratic-only outline
- EmSpaceMapper: Outline to font units
- GlyphAssembler: Definitions to glyph records
- FontTableBuilder: Glyph records to font bytes
- FontSynthesizer: The whole pipeline behind one call
"""

from iconsmith.core.assembler import (
    AssignmentContext,
    GlyphAssembler,
    build_simple_glyph,
    canonical_order,
    flatten_collections,
)
from iconsmith.core.extractor import VectorExtractor, extract_view_box, wrap_markup
from iconsmith.core.mapper import EmSpaceMapper
from iconsmith.core.normalizer import CurveNormalizer
from iconsmith.core.synthesizer import FontSynthesizer
from iconsmith.core.tables import FontTableBuilder, make_postscript_name

__all__ = [
    # Assembly
    "AssignmentContext",
    "GlyphAssembler",
    "build_simple_glyph",
    "canonical_order",
    "flatten_collections",
    # Pipeline stages
    "CurveNormalizer",
    "EmSpaceMapper",
    "FontTableBuilder",
    "VectorExtractor",
    "extract_view_box",
    "make_postscript_name",
    "wrap_markup",
    # Orchestration
    "FontSynthesizer",
]
