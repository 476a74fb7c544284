"""
Report Rendering using Pillow

Rasterizes report text onto a fixed-size canvas:
- one RGBA canvas (32-bit color), white background
- black text at a fixed font size
- line i has its baseline at (text_x, first_line_y + i * line_spacing)

Lines whose baseline falls below the canvas are not drawn and are
counted as clipped. There is no wrapping, no pagination and no
measurement-based layout.
"""

from io import BytesIO
from typing import Optional, Union

from PIL import Image, ImageDraw, ImageFont
from pydantic import BaseModel, ConfigDict

from expense_reports.config import ReportSettings, get_settings


BACKGROUND_COLOR = (255, 255, 255, 255)
TEXT_COLOR = (0, 0, 0, 255)

# Tried in order when no font_path is configured
FALLBACK_FONTS = ("DejaVuSans.ttf", "LiberationSans-Regular.ttf", "Arial.ttf")

Font = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]


class RenderedReport(BaseModel):
    """A rendered report canvas plus layout statistics."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    image: Image.Image
    lines_drawn: int
    lines_clipped: int

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    def to_png_bytes(self) -> bytes:
        out = BytesIO()
        self.image.save(out, format="PNG")
        return out.getvalue()


def load_font(size: int, font_path: Optional[str] = None) -> Font:
    """
    Load a TrueType font of the given pixel size.

    A configured font_path must load; otherwise common system fonts are
    tried before falling back to Pillow's bundled default font.
    """
    if font_path:
        return ImageFont.truetype(font_path, size=size)

    for candidate in FALLBACK_FONTS:
        try:
            return ImageFont.truetype(candidate, size=size)
        except OSError:
            continue

    return ImageFont.load_default(size=size)


def _text_origin(
    font: Font, x: int, baseline: int, size: int
) -> tuple[tuple[int, int], Optional[str]]:
    """Where to draw a line so it sits on `baseline`, and the anchor to use."""
    if isinstance(font, ImageFont.FreeTypeFont):
        return (x, baseline), "ls"
    # Bitmap fonts only support the top-left anchor
    return (x, baseline - size), None


class ReportRenderer:
    """Draws report text onto a fixed canvas."""

    def __init__(
        self,
        settings: Optional[ReportSettings] = None,
        font: Optional[Font] = None,
    ):
        self._settings = settings or get_settings().reports
        self._font = font

    @property
    def font(self) -> Font:
        if self._font is None:
            self._font = load_font(self._settings.font_size, self._settings.font_path)
        return self._font

    def baseline_for(self, index: int) -> int:
        """Baseline y coordinate of the line at `index` (0-based)."""
        return self._settings.first_line_y + index * self._settings.line_spacing

    def visible_line_count(self, total_lines: int) -> int:
        """How many of `total_lines` have a baseline inside the canvas."""
        count = 0
        while count < total_lines and self.baseline_for(count) <= self._settings.height:
            count += 1
        return count

    def render(self, text: str) -> RenderedReport:
        """
        Render newline-separated text.

        An empty string produces a blank canvas.
        """
        settings = self._settings
        lines = text.split("\n") if text else []

        image = Image.new("RGBA", (settings.width, settings.height), BACKGROUND_COLOR)
        draw = ImageDraw.Draw(image)

        visible = self.visible_line_count(len(lines))
        if visible:
            font = self.font
            for index, line in enumerate(lines[:visible]):
                xy, anchor = _text_origin(
                    font, settings.text_x, self.baseline_for(index), settings.font_size
                )
                draw.text(xy, line, font=font, fill=TEXT_COLOR, anchor=anchor)

        return RenderedReport(
            image=image,
            lines_drawn=visible,
            lines_clipped=len(lines) - visible,
        )
