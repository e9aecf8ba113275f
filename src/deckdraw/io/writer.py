"""Writer for closing and decomposition results.

Results are written as JSON documents with a generation timestamp so a
downstream structural engine can pick them up.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from deckdraw import __version__
from deckdraw.domain import CloseResult, Point, Rectangle, points_to_dicts
from deckdraw.exceptions import ShapeSaveError


def build_decomposition_document(
    points: list[Point],
    ledger: list[int],
    rectangles: list[Rectangle],
    pixels_per_foot: float,
) -> dict[str, Any]:
    """Assemble the JSON document describing a decomposition.

    Args:
        points: Closed outline that was decomposed
        ledger: Ledger wall indices used
        rectangles: Decomposition output
        pixels_per_foot: Scale used to report dimensions in feet

    Returns:
        Dictionary ready for ``json.dumps``
    """
    sections = []
    for rect in rectangles:
        data = rect.to_dict()
        dims = rect.dimensions(pixels_per_foot)
        data["width_feet"] = dims.width_feet
        data["height_feet"] = dims.height_feet
        sections.append(data)

    return {
        "generator": f"deckdraw {__version__}",
        "generated_at": datetime.now().strftime("%Y-%m-%dT%H:%M:%S"),
        "points": points_to_dicts(points),
        "ledger": list(ledger),
        "rectangles": sections,
    }


class ResultWriter:
    """Writes result documents as JSON.

    Example:
        writer = ResultWriter(Path("deck-sections.json"))
        writer.write_close_result(result)
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the result writer.

        Args:
            output_path: Path where the document will be saved
        """
        self._output_path = output_path

    @property
    def output_path(self) -> Path:
        return self._output_path

    def write(self, document: dict[str, Any]) -> None:
        """Write a document to the output path.

        Raises:
            ShapeSaveError: If the file cannot be written
        """
        try:
            self._output_path.parent.mkdir(parents=True, exist_ok=True)
            self._output_path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            raise ShapeSaveError(str(self._output_path), str(e)) from e

    def write_close_result(self, result: CloseResult) -> None:
        """Write the outcome of a close attempt."""
        self.write(result.to_dict())

    def write_decomposition(
        self,
        points: list[Point],
        ledger: list[int],
        rectangles: list[Rectangle],
        pixels_per_foot: float,
    ) -> None:
        """Write a decomposition document."""
        self.write(build_decomposition_document(points, ledger, rectangles, pixels_per_foot))

    @staticmethod
    def get_sections_path(input_path: Path) -> Path:
        """Generate the default output path for a decomposition.

        Converts: deck.json -> deck-sections.json

        Args:
            input_path: Shape file path

        Returns:
            Path with -sections suffix before extension
        """
        return input_path.parent / f"{input_path.stem}-sections{input_path.suffix or '.json'}"
