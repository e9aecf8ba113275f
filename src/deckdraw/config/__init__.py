"""Configuration management for deckdraw.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- DrawingConfig: Units, grid, snapping and model bounds
- GeometryConfig: Simplification and validation tolerances
- LoggingConfig: Logging settings
- DeckDrawSettings: Main application settings
"""

from deckdraw.config.settings import (
    DEFAULT_ALLOWED_ANGLES,
    DeckDrawSettings,
    DrawingConfig,
    GeometryConfig,
    LoggingConfig,
    get_default_settings,
    resolve_drawing_config,
    resolve_geometry_config,
)

__all__ = [
    "DEFAULT_ALLOWED_ANGLES",
    "DeckDrawSettings",
    "DrawingConfig",
    "GeometryConfig",
    "LoggingConfig",
    "get_default_settings",
    "resolve_drawing_config",
    "resolve_geometry_config",
]
