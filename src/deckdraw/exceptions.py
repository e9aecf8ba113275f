"""Exception hierarchy for deckdraw.

Expected drawing outcomes (a failed close, an out-of-bounds click, an empty
decomposition) are reported through return values. The exceptions below cover
programming errors and file I/O at the edges of the system.
"""


class DeckDrawError(Exception):
    """Base exception for all deckdraw errors."""

    pass


class ConfigurationError(DeckDrawError):
    """Configuration is missing a required value or is inconsistent."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid configuration for '{field}': {reason}")


class ShapeFileError(DeckDrawError):
    """Errors related to reading or writing shape files."""

    pass


class ShapeLoadError(ShapeFileError):
    """Error loading a shape or click-script file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load shape '{path}': {reason}")


class ShapeSaveError(ShapeFileError):
    """Error saving a shape or decomposition result."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save shape '{path}': {reason}")


class SessionError(DeckDrawError):
    """Errors raised by a drawing session."""

    pass


class InvalidActionError(SessionError):
    """An action cannot be applied to the current session state."""

    def __init__(self, action_type: str, reason: str) -> None:
        self.action_type = action_type
        self.reason = reason
        super().__init__(f"Cannot apply {action_type}: {reason}")


class DecompositionError(SessionError):
    """Decomposition was requested before the shape was ready."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Decomposition not possible: {reason}")
