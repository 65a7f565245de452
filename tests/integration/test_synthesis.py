"""Integration tests for end-to-end icon font synthesis.

Glyph definitions go in, a TrueType font comes out, and the font is read
back with fontTools to check what a text renderer would see.
"""

from io import BytesIO
from pathlib import Path

import pytest
from fontTools.pens.recordingPen import RecordingPen
from fontTools.ttLib import TTFont

from iconsmith.config import FontConfig, IconsmithSettings
from iconsmith.core import FontSynthesizer
from iconsmith.domain import GlyphDefinition
from iconsmith.exceptions import (
    BlankGlyphSourceError,
    CapacityExceededError,
    GlyphProcessingError,
)

FULL_SQUARE = "M0 0H24V24H0Z"

CIRCLE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">'
    '<circle cx="12" cy="12" r="10"/></svg>'
)

STROKED_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="none" '
    'stroke="currentColor" stroke-width="2" stroke-linecap="round">'
    '<path d="M5 12h14M12 5v14"/></svg>'
)


def icon_set() -> list[GlyphDefinition]:
    return [
        GlyphDefinition("Square", FULL_SQUARE, 0, "inline"),
        GlyphDefinition("Circle", CIRCLE_SVG, 1, "mdi"),
        GlyphDefinition("Plus", STROKED_SVG, 2, "lucide"),
        GlyphDefinition("Bar", "M2 10h20v4H2z", 3, "inline"),
    ]


def load(font_bytes: bytes) -> TTFont:
    return TTFont(BytesIO(font_bytes))


class TestCodepointAssignment:
    """Tests for the codepoints given to glyphs."""

    def test_consecutive_from_pua_start(self):
        """Test N glyphs receive U+E000 through U+E000+N-1."""
        definitions = icon_set()
        result = FontSynthesizer().synthesize("icons", definitions)

        assert [a.codepoint for a in result.assignments] == [0xE000, 0xE001, 0xE002, 0xE003]
        assert [a.glyph_id for a in result.assignments] == [1, 2, 3, 4]
        assert result.codepoint_map() == {
            "Square": 0xE000,
            "Circle": 0xE001,
            "Plus": 0xE002,
            "Bar": 0xE003,
        }

    def test_order_beats_collection(self):
        """Test the global order decides codepoints, not the collection buckets."""
        five = GlyphDefinition("Five", FULL_SQUARE, 5, "aaa")
        two = GlyphDefinition("Two", FULL_SQUARE, 2, "zzz")

        result = FontSynthesizer().synthesize("icons", {"aaa": [five], "zzz": [two]})

        assert two.text == "\ue000"
        assert five.text == "\ue001"
        assert [a.identifier for a in result.assignments] == ["Two", "Five"]

    def test_texts_replaced_by_characters(self):
        """Test each definition's text becomes its assigned character."""
        definitions = icon_set()
        FontSynthesizer().synthesize("icons", definitions)
        assert [d.text for d in definitions] == [chr(0xE000 + i) for i in range(4)]

    def test_cmap_matches_assignments(self):
        """Test the cmap has exactly the assigned codepoints, each at its glyph id."""
        result = FontSynthesizer().synthesize("icons", icon_set())
        font = load(result.font_bytes)
        cmap = font.getBestCmap()

        assert set(cmap) == {a.codepoint for a in result.assignments}
        for assignment in result.assignments:
            assert font.getGlyphID(cmap[assignment.codepoint]) == assignment.glyph_id

    def test_capacity_exceeded(self):
        """Test more glyphs than available codepoints aborts the build."""
        settings = IconsmithSettings(
            font=FontConfig(first_codepoint=0xF8FF, last_codepoint=0xF8FF)
        )
        definitions = icon_set()[:2]

        with pytest.raises(CapacityExceededError):
            FontSynthesizer(settings).synthesize("icons", definitions)
        assert definitions[0].text == FULL_SQUARE


class TestFontStructure:
    """Tests for the produced font."""

    def test_notdef_and_metrics(self):
        """Test .notdef leads and every glyph shares the advance width."""
        font = load(FontSynthesizer().synthesize("icons", icon_set()).font_bytes)

        assert font.getGlyphOrder()[0] == ".notdef"
        assert font["maxp"].numGlyphs == 5
        assert font["head"].unitsPerEm == 1000
        assert {font["hmtx"][name][0] for name in font.getGlyphOrder()} == {1000}

    def test_full_view_box_glyph_fills_em(self):
        """Test a glyph covering its 24x24 view box spans 0..1000 on both axes."""
        font = load(FontSynthesizer().synthesize("icons", icon_set()).font_bytes)
        glyph = font["glyf"]["uniE000"]
        assert (glyph.xMin, glyph.yMin, glyph.xMax, glyph.yMax) == (0, 0, 1000, 1000)

    def test_glyph_minimums_zero(self):
        """Test every glyph reports xMin = yMin = 0."""
        font = load(FontSynthesizer().synthesize("icons", icon_set()).font_bytes)
        for codepoint, name in font.getBestCmap().items():
            glyph = font["glyf"][name]
            assert (glyph.xMin, glyph.yMin) == (0, 0), hex(codepoint)

    def test_outlines_are_quadratic(self):
        """Test glyph outlines only use lines and quadratic curves."""
        font = load(FontSynthesizer().synthesize("icons", icon_set()).font_bytes)
        glyph_set = font.getGlyphSet()

        for name in font.getBestCmap().values():
            pen = RecordingPen()
            glyph_set[name].draw(pen)
            operators = {op for op, _ in pen.value}
            assert "curveTo" not in operators
            assert operators <= {"moveTo", "lineTo", "qCurveTo", "closePath"}

    def test_stroked_icon_has_ink(self):
        """Test stroke-only icons produce contours."""
        font = load(FontSynthesizer().synthesize("icons", icon_set()).font_bytes)
        assert font["glyf"]["uniE002"].numberOfContours > 0

    def test_family_name(self):
        """Test the module name becomes the family name."""
        font = load(FontSynthesizer().synthesize("my icons", icon_set()).font_bytes)
        assert font["name"].getDebugName(1) == "my icons"
        assert font["name"].getDebugName(6) == "my-icons-Regular"

    def test_deterministic_output(self):
        """Test repeated runs over equal input give identical bytes."""
        first = FontSynthesizer().synthesize("icons", icon_set()).font_bytes
        second = FontSynthesizer().synthesize("icons", icon_set()).font_bytes
        assert first == second


class TestFailures:
    """Tests for aborted builds."""

    def test_blank_source_aborts(self, tmp_path):
        """Test a blank glyph aborts, names the glyph and writes nothing."""
        definitions = icon_set() + [GlyphDefinition("Blank", "  \n ", 9, "inline")]
        manifest = tmp_path / "icons.toml"

        with pytest.raises(BlankGlyphSourceError, match="'Blank'"):
            FontSynthesizer().build(manifest, "app::icons", definitions)

        assert not (tmp_path / "icons.ttf").exists()
        assert definitions[0].text == FULL_SQUARE

    def test_degenerate_glyph_aborts(self):
        """Test a zero-height glyph aborts with the glyph named."""
        definitions = icon_set() + [GlyphDefinition("Line", "M0 12H24", 9, "inline")]

        with pytest.raises(GlyphProcessingError) as exc_info:
            FontSynthesizer().synthesize("icons", definitions)

        assert exc_info.value.identifier == "Line"
        assert [d.text for d in definitions[:4]] == [d.text for d in icon_set()]


class TestBuild:
    """Tests for writing the font beside its manifest."""

    def test_writes_module_leaf_font(self, tmp_path):
        """Test the font is named after the last module segment."""
        manifest = tmp_path / "icons.toml"

        path, result = FontSynthesizer().build(manifest, "app::ui::glyphs", icon_set())

        assert path == tmp_path / "glyphs.ttf"
        assert Path(path).read_bytes() == result.font_bytes
        assert load(result.font_bytes)["name"].getDebugName(1) == "glyphs"

    def test_stats(self):
        """Test synthesis statistics are collected."""
        synthesizer = FontSynthesizer()
        synthesizer.synthesize("icons", icon_set())

        stats = synthesizer.stats
        assert stats.glyph_count == 4
        assert stats.contour_count > 0
        assert stats.duration_seconds >= 0
