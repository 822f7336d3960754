"""Tests for rectangle and anchor geometry."""

import logging

import pytest

from imgcrop.models import (
    Anchor,
    ExplicitRect,
    Margins,
    Rect,
    SizeWithAnchor,
    anchor_offset,
    clamp_rect,
    margin_rect,
    parse_anchor,
    resolve_directive,
    size_rect,
)


class TestRect:
    """Tests for the Rect data class."""

    def test_from_xywh(self) -> None:
        assert Rect.from_xywh(10, 20, 30, 40) == Rect(10, 20, 40, 60)

    def test_size_properties(self) -> None:
        rect = Rect(200, 150, 600, 450)

        assert rect.width == 400
        assert rect.height == 300
        assert rect.size == (400, 300)
        assert not rect.is_empty

    def test_inverted_rect_is_kept_and_empty(self) -> None:
        rect = Rect(70, 0, 30, 10)

        assert rect.x0 == 70
        assert rect.width == -40
        assert rect.is_empty

    def test_contains(self) -> None:
        outer = Rect(0, 0, 100, 100)

        assert outer.contains(Rect(10, 10, 90, 90))
        assert outer.contains(outer)
        assert not outer.contains(Rect(-1, 0, 50, 50))
        assert not outer.contains(Rect(50, 50, 101, 60))


class TestClampRect:
    """Tests for clamping rectangles to image bounds."""

    bounds = Rect(0, 0, 100, 80)

    def test_inside_unchanged(self) -> None:
        rect = Rect(10, 10, 50, 50)

        assert clamp_rect(rect, self.bounds) == rect

    def test_each_edge_clamped_independently(self) -> None:
        assert clamp_rect(Rect(-20, -5, 150, 90), self.bounds) == self.bounds
        assert clamp_rect(Rect(-20, 10, 50, 50), self.bounds) == Rect(0, 10, 50, 50)
        assert clamp_rect(Rect(10, 10, 500, 50), self.bounds) == Rect(10, 10, 100, 50)

    def test_entirely_outside_is_empty_and_contained(self) -> None:
        for rect in (
            Rect(200, 200, 300, 300),
            Rect(-300, -300, -200, -200),
            Rect(150, 0, 250, 80),
        ):
            clamped = clamp_rect(rect, self.bounds)

            assert clamped.is_empty
            assert self.bounds.contains(clamped)

    def test_inverted_rect_becomes_empty(self) -> None:
        clamped = clamp_rect(Rect(70, 10, 30, 50), self.bounds)

        assert clamped.width == 0
        assert clamped.height == 40
        assert self.bounds.contains(clamped)

    def test_offset_bounds(self) -> None:
        bounds = Rect(50, 50, 150, 100)

        assert clamp_rect(Rect(0, 0, 100, 200), bounds) == Rect(50, 50, 100, 100)


class TestAnchorOffset:
    """Tests for anchor offset resolution."""

    @pytest.mark.parametrize(
        "anchor,expected",
        [
            (Anchor.CENTER, (200, 150)),
            (Anchor.TOP_LEFT, (0, 0)),
            (Anchor.TOP_RIGHT, (400, 0)),
            (Anchor.BOTTOM_LEFT, (0, 300)),
            (Anchor.BOTTOM_RIGHT, (400, 300)),
        ],
    )
    def test_each_anchor(self, anchor: Anchor, expected: tuple[int, int]) -> None:
        assert anchor_offset(800, 600, 400, 300, anchor) == expected

    def test_center_odd_remainder_goes_bottom_right(self) -> None:
        # 101 - 50 = 51 -> 25 before, 26 after
        assert anchor_offset(101, 11, 50, 10, Anchor.CENTER) == (25, 0)

    def test_string_values_accepted(self) -> None:
        assert anchor_offset(800, 600, 400, 300, "BottomRight") == (400, 300)

    def test_unknown_anchor_falls_back_to_top_left(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="imgcrop.models"):
            offset = anchor_offset(800, 600, 400, 300, "Middle")

        assert offset == (0, 0)
        assert "Unknown anchor" in caplog.text

    def test_parse_anchor(self) -> None:
        assert parse_anchor("Center") is Anchor.CENTER
        assert parse_anchor(Anchor.TOP_RIGHT) is Anchor.TOP_RIGHT
        assert parse_anchor("center") is None
        assert parse_anchor(7) is None

    def test_exactly_five_anchors(self) -> None:
        assert len(Anchor) == 5


class TestSizeRect:
    """Tests for size-with-anchor rectangles."""

    def test_center_scenario(self) -> None:
        rect = size_rect(Rect(0, 0, 800, 600), 400, 300, Anchor.CENTER)

        assert rect == Rect(200, 150, 600, 450)

    def test_oversized_request_limited_to_source(self) -> None:
        rect = size_rect(Rect(0, 0, 100, 50), 500, 500, Anchor.BOTTOM_RIGHT)

        assert rect == Rect(0, 0, 100, 50)

    def test_negative_size_becomes_empty(self) -> None:
        rect = size_rect(Rect(0, 0, 100, 50), -10, 20, Anchor.CENTER)

        assert rect.width == 0
        assert rect.height == 20

    def test_offset_relative_to_bounds_min(self) -> None:
        rect = size_rect(Rect(100, 40, 200, 90), 20, 10, Anchor.BOTTOM_RIGHT)

        assert rect == Rect(180, 80, 200, 90)


class TestMarginRect:
    """Tests for margin rectangles."""

    def test_equal_margins(self) -> None:
        assert margin_rect(Rect(0, 0, 100, 100), 10, 10, 10, 10) == Rect(10, 10, 90, 90)

    def test_argument_order_top_right_bottom_left(self) -> None:
        assert margin_rect(Rect(0, 0, 100, 100), 1, 2, 3, 4) == Rect(4, 1, 98, 97)

    def test_overlapping_margins_not_validated(self) -> None:
        rect = margin_rect(Rect(0, 0, 100, 100), 0, 70, 0, 70)

        assert rect == Rect(70, 0, 30, 100)
        assert rect.is_empty


class TestResolveDirective:
    """Tests for directive resolution."""

    bounds = Rect(0, 0, 500, 300)

    def test_explicit_rect_passed_through(self) -> None:
        rect = Rect(-10, -10, 1000, 1000)

        assert resolve_directive(ExplicitRect(rect), self.bounds) == rect

    def test_size_with_anchor(self) -> None:
        directive = SizeWithAnchor(300, 300, Anchor.BOTTOM_RIGHT)

        assert resolve_directive(directive, self.bounds) == Rect(200, 0, 500, 300)

    def test_size_with_anchor_defaults_to_center(self) -> None:
        assert resolve_directive(SizeWithAnchor(100, 100), self.bounds) == Rect(200, 100, 300, 200)

    def test_margins(self) -> None:
        directive = Margins(top=5, right=10, bottom=15, left=20)

        assert resolve_directive(directive, self.bounds) == Rect(20, 5, 490, 285)

    def test_unknown_directive_raises(self) -> None:
        with pytest.raises(TypeError):
            resolve_directive((0, 0, 10, 10), self.bounds)
