"""Font reader for inspecting generated icon fonts.

This module provides the FontReader class, which loads a TrueType font and
lists the codepoint to glyph mapping together with each glyph's geometry.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from fontTools.ttLib import TTFont

from iconsmith.exceptions import FontReadError
from iconsmith.io.writer import FONT_SUFFIX

NAME_ID_FAMILY = 1


@dataclass(frozen=True, slots=True)
class MappedGlyph:
    """One cmap entry of a loaded font.

    Attributes:
        codepoint: Mapped codepoint
        glyph_name: Name of the glyph in the glyph order
        glyph_id: Index of the glyph
        contours: Number of contours (0 for empty glyphs)
        bounds: (xMin, yMin, xMax, yMax) as stored, or None for empty glyphs
        advance_width: Horizontal advance
    """

    codepoint: int
    glyph_name: str
    glyph_id: int
    contours: int
    bounds: tuple[int, int, int, int] | None
    advance_width: int

    @property
    def label(self) -> str:
        return f"U+{self.codepoint:04X}"


class FontReader:
    """Loads a TrueType font and reads its icon mapping.

    Example:
        with FontReader(Path("icons.ttf")) as reader:
            for entry in reader.iter_mapped_glyphs():
                print(entry.label, entry.glyph_name)
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FontReadError: If the file is missing, not a TrueType font, or invalid
        """
        if not self._font_path.exists():
            raise FontReadError(str(self._font_path), "file not found")

        try:
            font = TTFont(str(self._font_path))
        except Exception as e:
            raise FontReadError(str(self._font_path), str(e)) from e

        if "glyf" not in font:
            font.close()
            raise FontReadError(
                str(self._font_path), f"not a TrueType ({FONT_SUFFIX}) font with a glyf table"
            )
        self._font = font

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def family_name(self) -> str:
        """Family name from the name table (empty if absent)."""
        name = self._require_font()["name"].getDebugName(NAME_ID_FAMILY)
        return name or ""

    @property
    def units_per_em(self) -> int:
        return self._require_font()["head"].unitsPerEm

    @property
    def glyph_count(self) -> int:
        """Total number of glyphs, .notdef included."""
        return self._require_font()["maxp"].numGlyphs

    def iter_mapped_glyphs(self) -> Iterator[MappedGlyph]:
        """Iterate over the cmap entries in codepoint order.

        Raises:
            RuntimeError: If the font has not been loaded yet
        """
        font = self._require_font()
        cmap = font.getBestCmap() or {}
        glyf = font["glyf"]
        hmtx = font["hmtx"]

        for codepoint in sorted(cmap):
            glyph_name = cmap[codepoint]
            glyph = glyf[glyph_name]
            contours = max(glyph.numberOfContours, 0)
            bounds = None
            if contours:
                bounds = (glyph.xMin, glyph.yMin, glyph.xMax, glyph.yMax)
            advance, _ = hmtx[glyph_name]
            yield MappedGlyph(
                codepoint=codepoint,
                glyph_name=glyph_name,
                glyph_id=font.getGlyphID(glyph_name),
                contours=contours,
                bounds=bounds,
                advance_width=advance,
            )

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None

    def __enter__(self) -> "FontReader":
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        self.close()
