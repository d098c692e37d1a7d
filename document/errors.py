"""Errors raised while reading, parsing, or rendering a notebook."""
from pathlib import Path
from typing import Optional, Union


class ConversionError(Exception):
    """Base class for every failure of a notebook conversion."""


class NotebookReadError(ConversionError):
    """The notebook file could not be read."""

    def __init__(self, path: Union[str, Path], cause: OSError):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to read notebook file: {path}: {cause}")


class NotebookParseError(ConversionError):
    """The notebook text is not valid JSON or does not have the notebook shape."""

    def __init__(self, message: str, location: Optional[str] = None):
        self.location = location
        if location:
            message = f"{location}: {message}"
        super().__init__(f"Failed to parse notebook: {message}")


class InvalidCellTypeError(ConversionError):
    """A cell carries a ``cell_type`` the renderer does not know."""

    def __init__(self, cell_type: str):
        self.cell_type = cell_type
        super().__init__(f"Notebook cell has invalid type: {cell_type}")
