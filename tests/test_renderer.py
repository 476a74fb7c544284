"""Tests for report rendering."""

import pytest
from PIL import Image, ImageFont, ImageOps

from expense_reports.config import ReportSettings
from expense_reports.services.rendering import ReportRenderer


@pytest.fixture
def renderer():
    return ReportRenderer(ReportSettings())


class TestReportRenderer:
    """Tests for ReportRenderer."""

    def test_canvas_size_and_mode(self, renderer):
        """Test that the canvas is 800x600 RGBA."""
        rendered = renderer.render("apples: 3")
        assert rendered.size == (800, 600)
        assert rendered.image.mode == "RGBA"

    def test_empty_text_is_blank_white_canvas(self, renderer):
        """Test that an empty report renders a blank white canvas."""
        rendered = renderer.render("")
        assert rendered.lines_drawn == 0
        assert rendered.lines_clipped == 0
        assert rendered.image.getextrema() == ((255, 255), (255, 255), (255, 255), (255, 255))

    def test_text_is_drawn_near_first_baseline(self, renderer):
        """Test that the first line is drawn just above y=50 at x=50."""
        rendered = renderer.render("HELLO WORLD")
        gray = rendered.image.convert("L")
        # Glyphs sit above the first baseline at y=50
        darkest, _ = gray.crop((50, 20, 400, 56)).getextrema()
        assert darkest < 128
        # Nothing left of the fixed x offset
        left_min, _ = gray.crop((0, 0, 45, 600)).getextrema()
        assert left_min == 255

    def test_text_sits_on_baseline(self, renderer):
        """Test that capital letters end on the baseline."""
        if not isinstance(renderer.font, ImageFont.FreeTypeFont):
            pytest.skip("bitmap font has no baseline anchor")
        rendered = renderer.render("HHHH")
        ink = ImageOps.invert(rendered.image.convert("L")).getbbox()
        assert ink is not None
        _, top, _, bottom = ink
        assert 48 <= bottom <= 52
        assert top < 48

    def test_baselines(self, renderer):
        """Test that baselines start at 50 and step by 30."""
        assert renderer.baseline_for(0) == 50
        assert renderer.baseline_for(1) == 80
        assert renderer.baseline_for(18) == 590
        assert renderer.baseline_for(19) == 620

    def test_thirty_lines_clip_after_nineteen(self, renderer):
        """Test that 30 lines on the default canvas draw 19 and clip 11."""
        text = "\n".join(f"item{i}: {i}" for i in range(30))
        rendered = renderer.render(text)
        assert rendered.lines_drawn == 19
        assert rendered.lines_clipped == 11

    def test_lines_that_fit_are_not_clipped(self, renderer):
        """Test that a report that fits is drawn completely."""
        text = "\n".join(f"item{i}: {i}" for i in range(19))
        rendered = renderer.render(text)
        assert rendered.lines_drawn == 19
        assert rendered.lines_clipped == 0

    def test_png_bytes(self, renderer):
        """Test PNG encoding of the canvas."""
        data = renderer.render("apples: 3").to_png_bytes()
        assert data.startswith(b"\x89PNG\r\n\x1a\n")

    def test_custom_canvas(self):
        """Test clipping with a custom canvas geometry."""
        settings = ReportSettings(width=200, height=100, first_line_y=20, line_spacing=20)
        rendered = ReportRenderer(settings).render("a\nb\nc\nd\ne\nf")
        assert rendered.size == (200, 100)
        # Baselines 20, 40, 60, 80, 100 fit; 120 does not
        assert rendered.lines_drawn == 5
        assert rendered.lines_clipped == 1

    def test_missing_font_file_raises(self):
        """Test that a configured font that cannot load raises OSError."""
        settings = ReportSettings(font_path="/nonexistent/font.ttf")
        with pytest.raises(OSError):
            ReportRenderer(settings).render("apples: 3")

    def test_injected_font_is_used(self):
        """Test rendering with an injected font."""
        font = ImageFont.load_default()
        rendered = ReportRenderer(ReportSettings(), font=font).render("apples: 3")
        assert isinstance(rendered.image, Image.Image)
        assert rendered.lines_drawn == 1
