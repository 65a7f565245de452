"""Manifest and font file I/O for iconsmith.

This module handles everything that touches the file system or parses
external documents, keeping the core pipeline free of I/O.

Key responsibilities:
- Parse SVG documents into drawable paths
- Load and validate glyph manifests
- Write fonts atomically and export codepoint maps
- Read generated fonts back for inspection

Key classes:
- SvgDocumentParser: SVG document to VectorGroup
- IconSetResolver: Iconify-format icon sets on disk
- FontWriter: Save font bytes
- FontReader: Load fonts and list their icon mapping
"""

from iconsmith.io.manifest import (
    IconResolver,
    IconSetResolver,
    Manifest,
    ManifestModel,
    load_manifest,
    parse_manifest,
)
from iconsmith.io.markup import wrap_icon_body
from iconsmith.io.reader import FontReader, MappedGlyph
from iconsmith.io.svg_parser import SvgDocumentParser, VectorDocumentParser
from iconsmith.io.writer import (
    FontWriter,
    codepoint_map,
    font_output_path,
    is_up_to_date,
    module_leaf,
    write_codepoint_map,
    write_stamp,
)

__all__ = [
    "FontReader",
    "FontWriter",
    "IconResolver",
    "IconSetResolver",
    "Manifest",
    "ManifestModel",
    "MappedGlyph",
    "SvgDocumentParser",
    "VectorDocumentParser",
    "codepoint_map",
    "font_output_path",
    "is_up_to_date",
    "load_manifest",
    "module_leaf",
    "parse_manifest",
    "wrap_icon_body",
    "write_codepoint_map",
    "write_stamp",
]
