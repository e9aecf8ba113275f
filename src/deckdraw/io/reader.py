"""Readers for shape files and click scripts.

Shape files hold an outline::

    {"points": [{"x": 0, "y": 0}, {"x": 288, "y": 0}, ...]}

Click scripts hold raw clicks to replay through a drawing session::

    {"viewport_scale": 1.0, "clicks": [{"x": 3, "y": 2}, ...], "ledger": [0]}

Both are parsed with pydantic models so malformed files fail with a
precise message.
"""

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from deckdraw.domain import Point
from deckdraw.exceptions import ShapeLoadError


class PointRecord(BaseModel):
    """A point as stored on disk."""

    x: float
    y: float
    is_manual_dimension: bool = False
    display_dimension: str | None = None
    exact_pixels: float | None = None

    def to_point(self) -> Point:
        return Point(
            x=self.x,
            y=self.y,
            is_manual_dimension=self.is_manual_dimension,
            display_dimension=self.display_dimension,
            exact_pixels=self.exact_pixels,
        )


class ShapeFile(BaseModel):
    """Schema of a shape file."""

    points: list[PointRecord] = Field(default_factory=list)
    ledger: list[int] = Field(default_factory=list, description="Ledger wall indices")


class ClickScript(BaseModel):
    """Schema of a click script."""

    viewport_scale: float = Field(default=1.0, gt=0.0)
    clicks: list[PointRecord] = Field(default_factory=list)
    ledger: list[int] = Field(default_factory=list, description="Ledger wall indices")


def _read_text(path: Path) -> str:
    if not path.exists():
        raise ShapeLoadError(str(path), "file not found")
    if not path.is_file():
        raise ShapeLoadError(str(path), "not a file")
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ShapeLoadError(str(path), str(e)) from e


def _first_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "document"
    return f"{location}: {first['msg']}"


class ShapeReader:
    """Loads an outline from a JSON shape file.

    Example:
        reader = ShapeReader(Path("deck.json"))
        reader.load()
        points = reader.points
    """

    def __init__(self, shape_path: Path) -> None:
        """Initialize the shape reader.

        Args:
            shape_path: Path to the JSON shape file
        """
        self._shape_path = shape_path
        self._shape: ShapeFile | None = None

    def load(self) -> None:
        """Load and parse the shape file.

        Raises:
            ShapeLoadError: If the file is missing or malformed
        """
        text = _read_text(self._shape_path)
        try:
            self._shape = ShapeFile.model_validate_json(text)
        except ValidationError as e:
            raise ShapeLoadError(str(self._shape_path), _first_error(e)) from e

    def _require(self) -> ShapeFile:
        if self._shape is None:
            raise RuntimeError("Shape not loaded. Call load() first.")
        return self._shape

    @property
    def points(self) -> list[Point]:
        """Outline points in file order.

        Raises:
            RuntimeError: If the shape has not been loaded yet
        """
        return [record.to_point() for record in self._require().points]

    @property
    def ledger(self) -> list[int]:
        """Ledger wall indices stored with the shape, possibly empty."""
        return list(self._require().ledger)

    @property
    def point_count(self) -> int:
        return len(self._require().points)


class ClickScriptReader:
    """Loads raw clicks to replay through a drawing session."""

    def __init__(self, script_path: Path) -> None:
        self._script_path = script_path
        self._script: ClickScript | None = None

    def load(self) -> None:
        """Load and parse the click script.

        Raises:
            ShapeLoadError: If the file is missing or malformed
        """
        text = _read_text(self._script_path)
        try:
            self._script = ClickScript.model_validate_json(text)
        except ValidationError as e:
            raise ShapeLoadError(str(self._script_path), _first_error(e)) from e

    def _require(self) -> ClickScript:
        if self._script is None:
            raise RuntimeError("Click script not loaded. Call load() first.")
        return self._script

    @property
    def clicks(self) -> list[Point]:
        return [record.to_point() for record in self._require().clicks]

    @property
    def viewport_scale(self) -> float:
        return self._require().viewport_scale

    @property
    def ledger(self) -> list[int]:
        return list(self._require().ledger)
