"""Services layer - Rendering, conversion, and configuration."""

from .converter_config import ConverterConfig, load_config, CONFIG_FILENAME

from .renderer import (
    render_notebook,
    format_metadata,
    format_cell,
    format_output,
)

from .converter import NotebookConverter, convert

__all__ = [
    # converter_config
    "ConverterConfig",
    "load_config",
    "CONFIG_FILENAME",
    # renderer
    "render_notebook",
    "format_metadata",
    "format_cell",
    "format_output",
    # converter
    "NotebookConverter",
    "convert",
]
