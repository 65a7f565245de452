"""Unit tests for em-space mapping."""

import pytest

from iconsmith.core.mapper import EmSpaceMapper, fit_transform, view_box_transform
from iconsmith.domain import Outline, ViewBox
from iconsmith.exceptions import DegenerateGeometryError


def rect(x0: float, y0: float, x1: float, y1: float) -> Outline:
    outline = Outline()
    outline.move_to((x0, y0))
    outline.line_to((x1, y0))
    outline.line_to((x1, y1))
    outline.line_to((x0, y1))
    outline.close()
    return outline


class TestViewBoxTransform:
    """Tests for view_box_transform function."""

    def test_corners_map_onto_em(self):
        """Test the view box corners land on the em square, y flipped."""
        t = view_box_transform(ViewBox(0, 0, 24, 24), 1000)
        assert t.transformPoint((0, 0)) == pytest.approx((0, 1000))
        assert t.transformPoint((24, 24)) == pytest.approx((1000, 0))
        assert t.transformPoint((12, 6)) == pytest.approx((500, 750))

    def test_offset_view_box(self):
        """Test a view box origin is translated away first."""
        t = view_box_transform(ViewBox(-2, -2, 28, 28), 1000)
        assert t.transformPoint((-2, -2)) == pytest.approx((0, 1000))
        assert t.transformPoint((26, 26)) == pytest.approx((1000, 0))

    def test_scale_follows_height(self):
        """Test a wide view box is scaled by its height."""
        t = view_box_transform(ViewBox(0, 0, 48, 24), 1000)
        assert t.transformPoint((48, 24)) == pytest.approx((2000, 0))


class TestFitTransform:
    """Tests for fit_transform function."""

    def test_wide_box(self):
        """Test the limiting axis decides the scale."""
        t = fit_transform((10, 10, 30, 20), 1000, 1000)
        assert t.transformPoint((10, 20)) == pytest.approx((0, 0))
        assert t.transformPoint((30, 10)) == pytest.approx((1000, 500))

    def test_tall_box(self):
        """Test a tall box fills the height."""
        t = fit_transform((0, 0, 5, 10), 1000, 1000)
        assert t.transformPoint((0, 0)) == pytest.approx((0, 1000))
        assert t.transformPoint((5, 10)) == pytest.approx((500, 0))

    def test_non_positive_scale(self):
        """Test an unusable target box is rejected."""
        with pytest.raises(DegenerateGeometryError):
            fit_transform((0, 0, 10, 10), 0, 1000)


class TestEmSpaceMapper:
    """Tests for EmSpaceMapper class."""

    def test_view_box_path(self):
        """Test the 24x24 triangle fills the em exactly."""
        outline = Outline()
        outline.move_to((0, 0))
        outline.line_to((24, 0))
        outline.line_to((24, 24))
        outline.close()

        mapped = EmSpaceMapper().map(outline, ViewBox(0, 0, 24, 24))
        assert mapped.bounding_box() == pytest.approx((0, 0, 1000, 1000))

    def test_view_box_keeps_padding(self):
        """Test padding inside the view box survives the mapping."""
        mapped = EmSpaceMapper().map(rect(6, 6, 18, 18), ViewBox(0, 0, 24, 24))
        assert mapped.bounding_box() == pytest.approx((250, 250, 750, 750))

    def test_bbox_fit_without_view_box(self):
        """Test geometry is fitted when there is no view box."""
        mapped = EmSpaceMapper().map(rect(10, 10, 30, 20))
        assert mapped.bounding_box() == pytest.approx((0, 0, 1000, 500))

    def test_unusable_view_box_falls_back_to_fit(self):
        """Test a vanishing view box is ignored."""
        mapped = EmSpaceMapper().map(rect(0, 0, 4, 4), ViewBox(0, 0, 24, 1e-9))
        assert mapped.bounding_box() == pytest.approx((0, 0, 1000, 1000))

    def test_custom_metrics(self):
        """Test the fit respects the configured maximum box."""
        mapper = EmSpaceMapper(units_per_em=2048, max_width=2048, max_height=1024)
        mapped = mapper.map(rect(0, 0, 10, 10))
        assert mapped.bounding_box() == pytest.approx((0, 0, 1024, 1024))

    @pytest.mark.parametrize(
        "outline",
        [
            rect(0, 5, 10, 5),
            rect(3, 0, 3, 10),
            rect(1, 1, 1 + 1e-7, 2),
        ],
    )
    def test_degenerate_bbox(self, outline):
        """Test a side at or below 1e-6 aborts, with or without a view box."""
        with pytest.raises(DegenerateGeometryError):
            EmSpaceMapper().map(outline)
        with pytest.raises(DegenerateGeometryError):
            EmSpaceMapper().map(outline, ViewBox(0, 0, 24, 24))

    def test_empty_outline(self):
        """Test an empty outline cannot be mapped."""
        with pytest.raises(DegenerateGeometryError, match="empty"):
            EmSpaceMapper().map(Outline())
