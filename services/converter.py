"""
Notebook Converter - Entry point for turning notebooks into LLM-ready text.

Wraps parsing and rendering behind one object holding an immutable
ConverterConfig. Converters share no state between calls, so a single
instance can be used from several threads.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from document.notebook import Notebook
from document.serialization import parse_notebook, read_notebook_bytes

from .converter_config import ConverterConfig
from .renderer import render_notebook

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotebookConverter:
    """
    Converts notebooks to flattened text.

    Usage:
        converter = NotebookConverter().with_outputs(True)
        text = converter.convert_file("analysis.ipynb")
    """
    config: ConverterConfig = field(default_factory=ConverterConfig)

    @property
    def include_outputs(self) -> bool:
        return self.config.include_outputs

    @property
    def include_metadata(self) -> bool:
        return self.config.include_metadata

    def with_outputs(self, include: bool = True) -> "NotebookConverter":
        """Return a converter with outputs switched on or off."""
        return NotebookConverter(self.config.with_outputs(include))

    def with_metadata(self, include: bool = True) -> "NotebookConverter":
        """Return a converter with the metadata block switched on or off."""
        return NotebookConverter(self.config.with_metadata(include))

    def convert(self, source: Union[str, bytes, Notebook]) -> str:
        """
        Convert raw notebook text or an already parsed Notebook.

        Raises:
            NotebookParseError: raw text is not a well-formed notebook
            InvalidCellTypeError: a cell has an unknown type
        """
        if isinstance(source, Notebook):
            return self.convert_notebook(source)
        return self.convert_str(source)

    def convert_str(self, content: Union[str, bytes]) -> str:
        """Parse and render notebook JSON text."""
        return self.convert_notebook(parse_notebook(content))

    def convert_notebook(self, notebook: Notebook) -> str:
        """Render a parsed Notebook."""
        return render_notebook(notebook, self.config)

    def convert_file(self, path: Union[str, Path]) -> str:
        """
        Read, parse and render a notebook file.

        Raises:
            NotebookReadError: the file cannot be read
        """
        logger.debug(f"Converting notebook file {path}")
        return self.convert_str(read_notebook_bytes(path))


def convert(source: Union[str, bytes, Notebook],
            config: Optional[ConverterConfig] = None) -> str:
    """Convert with a one-off converter."""
    return NotebookConverter(config or ConverterConfig()).convert(source)
