"""Document layer - Data models and parsing for notebooks."""
from .cell import Cell, CellType, Output, OutputType
from .notebook import Notebook
from .errors import (
    ConversionError, NotebookReadError, NotebookParseError, InvalidCellTypeError
)
from .serialization import (
    parse_notebook, notebook_from_dict, load_notebook, read_notebook_bytes
)

__all__ = [
    'Cell', 'CellType', 'Output', 'OutputType',
    'Notebook',
    'ConversionError', 'NotebookReadError', 'NotebookParseError', 'InvalidCellTypeError',
    'parse_notebook', 'notebook_from_dict', 'load_notebook', 'read_notebook_bytes'
]
