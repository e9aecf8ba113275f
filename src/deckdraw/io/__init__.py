"""Shape file I/O layer for deckdraw.

This module handles reading outlines and click scripts from JSON files and
writing closing and decomposition results.

Key responsibilities:
- Parse shape files and click scripts into domain models
- Report malformed files as ShapeLoadError
- Write result documents with a predictable naming convention

Key classes:
- ShapeReader: Load an outline
- ClickScriptReader: Load raw clicks for replay
- ResultWriter: Save results
"""

from deckdraw.io.reader import ClickScript, ClickScriptReader, ShapeFile, ShapeReader
from deckdraw.io.writer import ResultWriter, build_decomposition_document

__all__ = [
    "ClickScript",
    "ClickScriptReader",
    "ResultWriter",
    "ShapeFile",
    "ShapeReader",
    "build_decomposition_document",
]
