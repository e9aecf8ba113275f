"""Configuration settings for deckdraw."""

from pathlib import Path

from pydantic import BaseModel, Field

from deckdraw.exceptions import ConfigurationError

DEFAULT_ALLOWED_ANGLES: tuple[float, ...] = (0, 45, 90, 135, 180, -45, -90, -135, -180)


class DrawingConfig(BaseModel):
    """Units, snapping and bounds for the drawing canvas.

    All lengths are in model pixels unless the field name says otherwise.
    One model foot is ``pixels_per_foot`` model pixels; the drawing grid is
    one inch.
    """

    pixels_per_foot: float = Field(
        default=24.0,
        gt=0.0,
        description="Model pixels per real-world foot",
    )
    grid_spacing_inches: float = Field(
        default=1.0,
        gt=0.0,
        le=12.0,
        description="Grid spacing for drawn points, in inches",
    )
    snap_tolerance_pixels: float = Field(
        default=10.0,
        gt=0.0,
        description="Snap tolerance in screen pixels",
    )
    epsilon: float = Field(
        default=0.01,
        gt=0.0,
        le=1.0,
        description="Tolerance for coordinate comparisons",
    )
    model_width_feet: float = Field(
        default=100.0,
        gt=0.0,
        description="Width of the drawable model area in feet",
    )
    model_height_feet: float = Field(
        default=100.0,
        gt=0.0,
        description="Height of the drawable model area in feet",
    )
    closing_gap_feet: float = Field(
        default=0.25,
        ge=0.0,
        le=2.0,
        description="Largest misalignment auto-corrected when closing a shape (3 inches)",
    )
    angle_snap_min_distance: float = Field(
        default=5.0,
        ge=0.0,
        description="Below this distance from the previous point no angle snap is applied",
    )
    close_tolerance_multiplier: float = Field(
        default=3.0,
        gt=0.0,
        description="Multiplier on the snap tolerance used to detect a closing click",
    )
    allowed_angles: tuple[float, ...] = Field(
        default=DEFAULT_ALLOWED_ANGLES,
        min_length=1,
        description="Segment angles (degrees) a drawn edge snaps to",
    )

    @property
    def grid_spacing_pixels(self) -> float:
        """Grid spacing in model pixels."""
        return self.pixels_per_foot * self.grid_spacing_inches / 12.0

    @property
    def closing_gap_pixels(self) -> float:
        """Auto-correct threshold for closing, in model pixels."""
        return self.closing_gap_feet * self.pixels_per_foot

    @property
    def model_width_pixels(self) -> float:
        return self.model_width_feet * self.pixels_per_foot

    @property
    def model_height_pixels(self) -> float:
        return self.model_height_feet * self.pixels_per_foot

    def get_close_tolerance(self, viewport_scale: float | None) -> float:
        """Get the closing-click radius in model pixels for a viewport scale.

        Args:
            viewport_scale: Screen pixels per model pixel. ``None`` or ``0``
                fall back to a scale of 1.

        Returns:
            Radius around the first point that counts as a closing click
        """
        scale = viewport_scale or 1.0
        return (self.snap_tolerance_pixels / scale) * self.close_tolerance_multiplier

    def feet_to_pixels(self, feet: float) -> float:
        return feet * self.pixels_per_foot

    def pixels_to_feet(self, pixels: float) -> float:
        return pixels / self.pixels_per_foot


class GeometryConfig(BaseModel):
    """Tolerances for simplification, validation and edge classification."""

    collinear_tolerance: float = Field(
        default=0.1,
        gt=0.0,
        le=10.0,
        description="Cross-product magnitude at or below which three points are collinear",
    )
    parallel_epsilon: float = Field(
        default=1e-10,
        gt=0.0,
        description="Determinant magnitude below which two segments are parallel",
    )
    intersection_tolerance: float = Field(
        default=0.001,
        ge=0.0,
        lt=0.5,
        description="Parametric margin that excludes endpoint touches from self-intersection",
    )
    angle_step_degrees: float = Field(
        default=45.0,
        gt=0.0,
        le=90.0,
        description="Turn angles must be multiples of this step",
    )
    angle_tolerance_degrees: float = Field(
        default=2.0,
        ge=0.0,
        lt=22.5,
        description="Tolerance when matching angles and classifying edges",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class DeckDrawSettings(BaseModel):
    """Main application settings."""

    drawing: DrawingConfig = Field(default_factory=DrawingConfig)
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> DeckDrawSettings:
    """Get default application settings."""
    return DeckDrawSettings()


def resolve_drawing_config(config: "DrawingConfig | DeckDrawSettings | None") -> DrawingConfig:
    """Return the drawing configuration carried by ``config``.

    Args:
        config: A DrawingConfig, full settings, or None for defaults

    Returns:
        DrawingConfig instance

    Raises:
        ConfigurationError: If ``config`` is not a recognised configuration object
    """
    if config is None:
        return DrawingConfig()
    if isinstance(config, DrawingConfig):
        return config
    if isinstance(config, DeckDrawSettings):
        return config.drawing
    raise ConfigurationError("drawing", f"expected DrawingConfig, got {type(config).__name__}")


def resolve_geometry_config(config: "GeometryConfig | DeckDrawSettings | None") -> GeometryConfig:
    """Return the geometry configuration carried by ``config``.

    Raises:
        ConfigurationError: If ``config`` is not a recognised configuration object
    """
    if config is None:
        return GeometryConfig()
    if isinstance(config, GeometryConfig):
        return config
    if isinstance(config, DeckDrawSettings):
        return config.geometry
    raise ConfigurationError("geometry", f"expected GeometryConfig, got {type(config).__name__}")
