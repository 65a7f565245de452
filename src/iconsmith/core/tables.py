"""Binary font table assembly.

This module builds every table of the TrueType icon font with
fontTools' FontBuilder and serializes the result to bytes. All glyphs share
one advance width, sit on the baseline, and are reachable only through their
Private Use Area codepoints.

Key components:
- make_postscript_name: Sanitize a module name for the name table
- build_character_map: Validated codepoint to glyph-name mapping
- FontTableBuilder: Assembles head/hhea/maxp/hmtx/OS2/post/name/cmap/glyf/loca
"""

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from io import BytesIO

from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from iconsmith.config import PUA_END, PUA_START, FontConfig, NamingConfig
from iconsmith.domain import GlyphRecord
from iconsmith.exceptions import FontTableError
from iconsmith.utils import SynthesisLogger

NOTDEF = ".notdef"

# Name table IDs we write
NAME_ID_COPYRIGHT = 0
NAME_ID_FAMILY = 1
NAME_ID_SUBFAMILY = 2
NAME_ID_FULL_NAME = 4
NAME_ID_VERSION = 5
NAME_ID_POSTSCRIPT = 6
NAME_ID_DESCRIPTION = 10
NAME_ID_VENDOR_URL = 11
NAME_ID_TYPOGRAPHIC_FAMILY = 16
NAME_ID_TYPOGRAPHIC_SUBFAMILY = 17

FS_SELECTION_REGULAR = 1 << 6

# Fixed head timestamps keep the output byte-for-byte reproducible
FIXED_TIMESTAMP = 0


def make_postscript_name(base: str) -> str:
    """Replace every character outside ``[A-Za-z0-9]`` with ``-``."""
    return "".join(c if c.isascii() and c.isalnum() else "-" for c in base)


def build_character_map(
    records: Sequence[GlyphRecord],
    first_codepoint: int = PUA_START,
    last_codepoint: int = PUA_END,
) -> dict[int, str]:
    """Build the codepoint to glyph-name mapping for the cmap table.

    Every record must carry a unique codepoint inside
    ``first_codepoint..last_codepoint`` and the glyph id matching its
    position after .notdef, so that the name resolves to the recorded id.

    Args:
        records: Glyph records in glyph-id order
        first_codepoint: Lowest codepoint allowed in the map
        last_codepoint: Highest codepoint allowed in the map

    Returns:
        Mapping of codepoint to glyph name

    Raises:
        FontTableError: If a codepoint repeats or falls outside the range,
            or a glyph id is out of place
    """
    mapping: dict[int, str] = {}
    for position, record in enumerate(records, start=1):
        if record.glyph_id != position:
            raise FontTableError(
                "cmap",
                f"glyph '{record.identifier}' has id {record.glyph_id}, expected {position}",
            )
        if record.codepoint in mapping:
            raise FontTableError(
                "cmap",
                f"codepoint U+{record.codepoint:04X} assigned twice "
                f"('{record.identifier}')",
            )
        if not first_codepoint <= record.codepoint <= last_codepoint:
            raise FontTableError(
                "cmap",
                f"codepoint U+{record.codepoint:04X} of '{record.identifier}' is outside "
                f"U+{first_codepoint:04X}..U+{last_codepoint:04X}",
            )
        mapping[record.codepoint] = record.glyph_name
    return mapping


@contextmanager
def _building(tag: str) -> Iterator[None]:
    try:
        yield
    except FontTableError:
        raise
    except Exception as e:
        raise FontTableError(tag, str(e)) from e


class FontTableBuilder:
    """Assembles the binary tables of a monospaced icon font.

    Example:
        builder = FontTableBuilder()
        font_bytes = builder.build("icons", records)
    """

    def __init__(
        self,
        font_config: FontConfig | None = None,
        naming: NamingConfig | None = None,
        synthesis_logger: SynthesisLogger | None = None,
    ) -> None:
        self.font_config = font_config if font_config is not None else FontConfig()
        self.naming = naming if naming is not None else NamingConfig()
        self.synthesis_logger = synthesis_logger

    def build(self, module_name: str, records: Sequence[GlyphRecord]) -> bytes:
        """Build the complete font image.

        Args:
            module_name: Family name of the font
            records: Glyph records in glyph-id order (ids 1..N)

        Returns:
            TrueType font bytes

        Raises:
            FontTableError: Naming the table that could not be built
        """
        cfg = self.font_config
        fb = FontBuilder(cfg.units_per_em, isTTF=True)
        # Keep forced glyph minimums and fixed timestamps as set
        fb.font.recalcBBoxes = False
        fb.font.recalcTimestamp = False

        glyph_order = [NOTDEF] + [record.glyph_name for record in records]

        with _building("cmap"):
            cmap = build_character_map(records, cfg.first_codepoint, cfg.last_codepoint)
            fb.setupGlyphOrder(glyph_order)
            fb.setupCharacterMap(cmap)
        self._built("cmap")

        with _building("glyf"):
            glyphs = {NOTDEF: TTGlyphPen(None).glyph()}
            for record in records:
                glyphs[record.glyph_name] = record.glyph
            fb.setupGlyf(glyphs, calcGlyphBounds=False)
        self._built("glyf")

        with _building("hmtx"):
            fb.setupHorizontalMetrics({name: (cfg.advance_width, 0) for name in glyph_order})
        self._built("hmtx")

        with _building("hhea"):
            fb.setupHorizontalHeader(
                ascent=cfg.ascent,
                descent=cfg.descent,
                lineGap=0,
                advanceWidthMax=cfg.advance_width,
                minLeftSideBearing=0,
                minRightSideBearing=0,
                xMaxExtent=cfg.advance_width,
            )
        self._built("hhea")

        with _building("name"):
            fb.setupNameTable(self._name_strings(module_name), windows=True, mac=False)
        self._built("name")

        with _building("OS/2"):
            first_char, last_char = self._char_index_range(records)
            fb.setupOS2(
                version=4,
                xAvgCharWidth=cfg.advance_width,
                usWeightClass=400,
                usWidthClass=5,
                fsType=0,
                fsSelection=FS_SELECTION_REGULAR,
                usFirstCharIndex=first_char,
                usLastCharIndex=last_char,
                sTypoAscender=cfg.ascent,
                sTypoDescender=cfg.descent,
                sTypoLineGap=0,
                usWinAscent=cfg.ascent,
                usWinDescent=-cfg.descent,
                ulCodePageRange1=0,
                ulCodePageRange2=0,
                sxHeight=0,
                sCapHeight=0,
                usDefaultChar=0,
                usBreakChar=0,
                usMaxContext=0,
            )
        self._built("OS/2")

        with _building("post"):
            fb.setupPost(
                keepGlyphNames=False,
                italicAngle=0,
                underlinePosition=10,
                underlineThickness=0,
            )
        self._built("post")

        with _building("maxp"):
            fb.setupMaxp()
            fb.font["maxp"].recalc(fb.font)
        self._built("maxp")

        # head last: maxp.recalc rewrites the head bounding box
        with _building("head"):
            fb.setupHead(
                unitsPerEm=cfg.units_per_em,
                fontRevision=1.0,
                flags=0,
                created=FIXED_TIMESTAMP,
                modified=FIXED_TIMESTAMP,
                xMin=0,
                yMin=cfg.descent,
                xMax=cfg.units_per_em,
                yMax=cfg.ascent,
                lowestRecPPEM=8,
            )
        self._built("head")

        with _building("sfnt"):
            buffer = BytesIO()
            fb.font.save(buffer)
            return buffer.getvalue()

    def _name_strings(self, module_name: str) -> dict[int, str]:
        naming = self.naming
        family = module_name
        style = naming.style_name
        strings = {
            NAME_ID_COPYRIGHT: naming.copyright_notice,
            NAME_ID_FAMILY: family,
            NAME_ID_SUBFAMILY: style,
            NAME_ID_FULL_NAME: f"{family} {style}",
            NAME_ID_VERSION: naming.version,
            NAME_ID_POSTSCRIPT: f"{make_postscript_name(family)}-{style}",
            NAME_ID_DESCRIPTION: naming.description,
            NAME_ID_TYPOGRAPHIC_FAMILY: family,
            NAME_ID_TYPOGRAPHIC_SUBFAMILY: style,
        }
        if naming.vendor_url:
            strings[NAME_ID_VENDOR_URL] = naming.vendor_url
        return strings

    def _char_index_range(self, records: Sequence[GlyphRecord]) -> tuple[int, int]:
        first = self.font_config.first_codepoint
        if not records:
            return first, first
        codepoints = [record.codepoint for record in records]
        return min(codepoints), max(codepoints)

    def _built(self, tag: str) -> None:
        if self.synthesis_logger is not None:
            self.synthesis_logger.log_table_built(tag)
