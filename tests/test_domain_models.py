"""Tests for domain models to verify they work correctly."""

import pytest
from fontTools.misc.transform import Identity
from fontTools.pens.recordingPen import RecordingPen

from iconsmith.domain import (
    CodepointAssignment,
    CommandType,
    GlyphDefinition,
    GlyphRecord,
    Outline,
    PathCommand,
    SynthesisResult,
    ViewBox,
)


def square(x: float, y: float, size: float) -> Outline:
    outline = Outline()
    outline.move_to((x, y))
    outline.line_to((x + size, y))
    outline.line_to((x + size, y + size))
    outline.line_to((x, y + size))
    outline.close()
    return outline


class TestPathCommand:
    """Tests for PathCommand class."""

    def test_end_point(self) -> None:
        """Test the end point is the last point of the command."""
        cmd = PathCommand(CommandType.QUAD_TO, ((1.0, 2.0), (3.0, 4.0)))
        assert cmd.end_point == (3.0, 4.0)

    def test_close_has_no_end_point(self) -> None:
        """Test CLOSE carries no points."""
        assert PathCommand(CommandType.CLOSE).end_point is None

    def test_transformed(self) -> None:
        """Test points are mapped through a transform."""
        cmd = PathCommand(CommandType.LINE_TO, ((1.0, 2.0),))
        moved = cmd.transformed(Identity.translate(10, 20))
        assert moved.points == ((11.0, 22.0),)
        assert moved.command is CommandType.LINE_TO


class TestOutline:
    """Tests for Outline class."""

    def test_empty_outline(self) -> None:
        """Test a fresh outline is empty and has no bounds."""
        outline = Outline()
        assert outline.is_empty()
        assert len(outline) == 0
        assert outline.bounding_box() is None

    def test_builders_append_commands(self) -> None:
        """Test builder methods append the matching commands."""
        outline = Outline()
        outline.move_to((0, 0))
        outline.line_to((10, 0))
        outline.quad_to((10, 10), (0, 10))
        outline.curve_to((0, 5), (0, 5), (0, 0))
        outline.close()

        assert [cmd.command for cmd in outline] == [
            CommandType.MOVE_TO,
            CommandType.LINE_TO,
            CommandType.QUAD_TO,
            CommandType.CURVE_TO,
            CommandType.CLOSE,
        ]
        assert outline.has_cubics()
        assert outline.contour_count() == 1

    def test_bounding_box_includes_curve_extrema(self) -> None:
        """Test bounds follow the curve, not just its control points."""
        outline = Outline()
        outline.move_to((0, 0))
        outline.quad_to((5, 10), (10, 0))
        outline.close()

        x_min, y_min, x_max, y_max = outline.bounding_box()
        assert (x_min, y_min, x_max) == (0, 0, 10)
        assert y_max == pytest.approx(5.0)

    def test_extend_and_contour_count(self) -> None:
        """Test extending concatenates subpaths."""
        outline = square(0, 0, 10)
        outline.extend(square(20, 0, 10))
        assert outline.contour_count() == 2
        assert outline.bounding_box() == (0, 0, 30, 10)

    def test_transformed_returns_new_outline(self) -> None:
        """Test transforming leaves the original untouched."""
        outline = square(0, 0, 10)
        scaled = outline.transformed(Identity.scale(2))
        assert scaled.bounding_box() == (0, 0, 20, 20)
        assert outline.bounding_box() == (0, 0, 10, 10)

    def test_draw_open_contour(self) -> None:
        """Test open subpaths end with endPath unless closing is requested."""
        outline = Outline()
        outline.move_to((0, 0))
        outline.line_to((10, 0))
        outline.line_to((10, 10))

        pen = RecordingPen()
        outline.draw(pen)
        assert pen.value[-1] == ("endPath", ())

        pen = RecordingPen()
        outline.draw(pen, close_open_contours=True)
        assert pen.value[-1] == ("closePath", ())

    def test_from_recording_splits_multi_segment_commands(self) -> None:
        """Test implied on-curve points split a quadratic spline."""
        recording = [
            ("moveTo", ((0, 0),)),
            ("qCurveTo", ((10, 0), (10, 10), (0, 10))),
            ("curveTo", ((0, 8), (0, 4), (0, 0))),
            ("closePath", ()),
        ]
        outline = Outline.from_recording(recording)

        commands = [cmd.command for cmd in outline]
        assert commands.count(CommandType.QUAD_TO) == 2
        assert commands.count(CommandType.CURVE_TO) == 1
        assert outline.commands[1].points[1] == (10.0, 5.0)
        assert outline.commands[2].points[-1] == (0, 10)

    def test_from_recording_ignores_end_path(self) -> None:
        """Test endPath leaves no command behind."""
        outline = Outline.from_recording(
            [("moveTo", ((0, 0),)), ("lineTo", ((1, 1),)), ("endPath", ())]
        )
        assert len(outline) == 2

    def test_from_recording_rejects_unknown_command(self) -> None:
        """Test unsupported pen commands raise ValueError."""
        with pytest.raises(ValueError, match="addComponent"):
            Outline.from_recording([("addComponent", ("a", (1, 0, 0, 1, 0, 0)))])


class TestViewBox:
    """Tests for ViewBox class."""

    def test_is_usable(self) -> None:
        """Test both sides must exceed the minimum dimension."""
        assert ViewBox(0, 0, 24, 24).is_usable(1e-6)
        assert not ViewBox(0, 0, 24, 1e-7).is_usable(1e-6)


class TestGlyphDefinition:
    """Tests for GlyphDefinition class."""

    def test_serialization(self) -> None:
        """Test definition serialization and deserialization."""
        d1 = GlyphDefinition("Home", "M0 0h1v1z", 3, "mdi")
        d2 = GlyphDefinition.from_dict(d1.to_dict())
        assert d2 == d1

    def test_default_collection(self) -> None:
        """Test the collection key defaults when omitted."""
        d = GlyphDefinition.from_dict({"identifier": "Dot", "text": "M0 0", "order": 0})
        assert d.collection == "default"


class TestAssignments:
    """Tests for CodepointAssignment, GlyphRecord and SynthesisResult."""

    def test_assignment_label_and_character(self) -> None:
        """Test the codepoint renderings."""
        a = CodepointAssignment("Home", "mdi", 0, 0xE00A, 11)
        assert a.label == "U+E00A"
        assert a.character == "\ue00a"
        assert a.to_dict()["codepoint"] == "U+E00A"

    def test_record_glyph_name_and_assignment(self) -> None:
        """Test a record names its glyph after its codepoint."""
        record = GlyphRecord(1, 0xE000, "Home", "mdi", 4, square(0, 0, 1))
        assert record.glyph_name == "uniE000"
        assert record.assignment() == CodepointAssignment("Home", "mdi", 4, 0xE000, 1)

    def test_result_codepoint_map_keeps_order(self) -> None:
        """Test the map follows the assignment sequence."""
        result = SynthesisResult(
            font_bytes=b"",
            assignments=(
                CodepointAssignment("B", "x", 2, 0xE000, 1),
                CodepointAssignment("A", "y", 5, 0xE001, 2),
            ),
        )
        assert list(result.codepoint_map().items()) == [("B", 0xE000), ("A", 0xE001)]
