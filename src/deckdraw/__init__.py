"""deckdraw - Trace rectilinear deck outlines and split them into rectangles.

deckdraw turns raw pointer clicks on a 2D canvas into a validated, closed
rectilinear polygon and decomposes that polygon into non-overlapping
axis-aligned rectangles oriented by a chosen ledger wall.

Example:
    $ deckdraw decompose deck.json --ledger 0

This prints the rectangular sections that a structural engine would lay
joists, beams and posts into.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
