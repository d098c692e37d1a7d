"""Cell and output data models."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Any, Dict, Tuple


class CellType(str, Enum):
    """Cell types the renderer knows how to format."""
    MARKDOWN = "markdown"
    CODE = "code"
    RAW = "raw"


class OutputType(str, Enum):
    """Output types with a dedicated rendering."""
    STREAM = "stream"
    EXECUTE_RESULT = "execute_result"
    DISPLAY_DATA = "display_data"
    ERROR = "error"


@dataclass(frozen=True)
class Output:
    """
    A single output item produced by executing a code cell.

    ``output_type`` is kept as the raw string from the document so that
    unrecognised types survive parsing and can be named when rendered.
    """
    output_type: str  # 'stream', 'execute_result', 'display_data', 'error', ...
    text: Optional[Tuple[str, ...]] = None
    data: Optional[Dict[str, Any]] = None
    execution_count: Optional[int] = None

    # Stream-specific
    name: Optional[str] = None  # 'stdout' or 'stderr'

    # Error-specific
    ename: Optional[str] = None
    evalue: Optional[str] = None
    traceback: Optional[Any] = None

    @property
    def known_type(self) -> Optional[OutputType]:
        """The matching OutputType, or None for an unrecognised type."""
        try:
            return OutputType(self.output_type)
        except ValueError:
            return None


@dataclass(frozen=True)
class Cell:
    """
    A single cell of a notebook.

    Parsing is permissive: ``cell_type`` may hold any string and is only
    checked when the cell is rendered.
    """
    cell_type: str
    source: Tuple[str, ...] = ()
    metadata: Dict[str, Any] = field(default_factory=dict)
    outputs: Optional[Tuple[Output, ...]] = None
    execution_count: Optional[int] = None

    @property
    def known_type(self) -> Optional[CellType]:
        """The matching CellType, or None for an unrecognised type."""
        try:
            return CellType(self.cell_type)
        except ValueError:
            return None

    @property
    def has_outputs(self) -> bool:
        """True when outputs are present and non-empty."""
        return bool(self.outputs)
