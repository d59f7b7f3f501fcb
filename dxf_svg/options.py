"""
Options Module

Per-call configuration for the SVG conversion.
"""

from dataclasses import dataclass

DEFAULT_PADDING = 10.0
DEFAULT_VIEWPORT = (100.0, 100.0)  # (width, height) when bounds are not fitted
MIN_EXTENT = 1.0  # viewport extent used for a zero-width or zero-height box


@dataclass(frozen=True)
class SvgOptions:
    """
    Conversion settings.

    Attributes:
        use_bounds: Fit the viewport to the drawing's bounding box
        padding: Margin added on every side of the fitted box (output units)
        stroke_width: Stroke width of every emitted element
        default_color: Paint used for entities without a color
    """
    use_bounds: bool = True
    padding: float = DEFAULT_PADDING
    stroke_width: float = 1.0
    default_color: str = "black"

    def __post_init__(self):
        if self.padding < 0:
            raise ValueError(f"padding must be >= 0, got {self.padding}")
        if self.stroke_width <= 0:
            raise ValueError(f"stroke_width must be > 0, got {self.stroke_width}")
