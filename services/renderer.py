"""
Notebook Renderer - Flattens a Notebook into Markdown-flavoured text.

Output layout (stable, relied on by golden tests):

    # Jupyter Notebook                  <- only with include_metadata
    **Kernel: python3**
    ...
    **Total Cells: 2**

    ## Cell 1: Markdown
    ```markdown
    ...
    ```

    ## Cell 2: Code
    *Execution Count: 1*
    ```python
    ...
    ```
    ### Outputs                         <- only with include_outputs
    **Stream Output**:
    ```
    ...
    ```

Every section is followed by a blank line. An unknown cell type aborts the
whole rendering; an unknown output type is named and skipped over.
"""
import logging
from typing import Any, Iterable, List, Optional

from document.cell import Cell, CellType, Output, OutputType
from document.errors import InvalidCellTypeError
from document.notebook import Notebook

from .converter_config import ConverterConfig

logger = logging.getLogger(__name__)

FENCE = "```"
SECTION_SEPARATOR = "\n\n"
METADATA_TITLE = "# Jupyter Notebook"

# ============================================================================
# Fenced blocks
# ============================================================================

def _fenced(lines: Iterable[str], tag: str = "") -> str:
    """Fence ``lines``, appending one newline to each line as-is."""
    parts = [f"{FENCE}{tag}\n"]
    for line in lines:
        parts.append(line)
        parts.append("\n")
    parts.append(f"{FENCE}\n")
    return "".join(parts)


def _string_items(value: List[Any]) -> List[str]:
    """String elements of a JSON array; other elements are skipped."""
    return [item for item in value if isinstance(item, str)]


# ============================================================================
# Metadata block
# ============================================================================

def format_metadata(notebook: Notebook) -> str:
    """
    Render the document-level metadata block.

    Kernel and language lines are emitted only for string values; the
    format version and cell count are always present.
    """
    lines = [METADATA_TITLE, ""]

    labelled = (
        ("Kernel", notebook.kernel_name),
        ("Display Name", notebook.kernel_display_name),
        ("Language", notebook.language_name),
        ("Version", notebook.language_version),
    )
    for label, value in labelled:
        if value is not None:
            lines.append(f"**{label}: {value}**")

    lines.append(f"**Format: nbformat {notebook.format_version}**")
    lines.append(f"**Total Cells: {notebook.cell_count}**")
    return "\n".join(lines) + "\n"


# ============================================================================
# Outputs
# ============================================================================

def _format_stream(output: Output) -> str:
    if output.text is None:
        return ""
    return "**Stream Output**:\n" + _fenced(output.text)


def _format_result(output: Output) -> str:
    """execute_result and display_data: render the text/plain entry."""
    if not output.data or "text/plain" not in output.data:
        return ""
    text_plain = output.data["text/plain"]
    if isinstance(text_plain, str):
        return "**Result**:\n" + _fenced([text_plain])
    if isinstance(text_plain, list):
        return "**Result**:\n" + _fenced(_string_items(text_plain))
    return ""


def _format_error(output: Output) -> str:
    # Real notebooks keep the traceback at the top level of the output;
    # a traceback entry inside data takes precedence.
    if output.data and "traceback" in output.data:
        traceback = output.data["traceback"]
    elif output.traceback is not None:
        traceback = output.traceback
    else:
        return ""
    lines = _string_items(traceback) if isinstance(traceback, list) else []
    return "**Error**:\n" + _fenced(lines)


def format_output(output: Output) -> str:
    """
    Render one output of a code cell.

    Never fails: an unrecognised output type renders a line naming it.
    """
    output_type = output.known_type
    if output_type == OutputType.STREAM:
        return _format_stream(output)
    if output_type in (OutputType.EXECUTE_RESULT, OutputType.DISPLAY_DATA):
        return _format_result(output)
    if output_type == OutputType.ERROR:
        return _format_error(output)
    return f"**Output Type: {output.output_type}**\n"


# ============================================================================
# Cells
# ============================================================================

def format_cell(cell: Cell, cell_number: int, config: Optional[ConverterConfig] = None,
                language: str = "python") -> str:
    """
    Render one cell with its 1-based number.

    Args:
        cell: Cell to render
        cell_number: Position in the notebook, starting at 1
        config: Rendering switches (defaults: everything off)
        language: Tag for the code fence

    Returns:
        The cell section, without the trailing separator

    Raises:
        InvalidCellTypeError: cell_type is not markdown, code or raw
    """
    config = config or ConverterConfig()
    cell_type = cell.known_type

    if cell_type == CellType.MARKDOWN:
        return f"## Cell {cell_number}: Markdown\n" + _fenced(cell.source, "markdown")

    if cell_type == CellType.CODE:
        parts = [f"## Cell {cell_number}: Code\n"]
        if cell.execution_count is not None:
            parts.append(f"*Execution Count: {cell.execution_count}*\n")
        parts.append(_fenced(cell.source, language))
        if config.include_outputs and cell.has_outputs:
            parts.append("### Outputs\n")
            parts.extend(format_output(output) for output in cell.outputs)
        return "".join(parts)

    if cell_type == CellType.RAW:
        return f"## Cell {cell_number}: Raw\n" + _fenced(cell.source)

    raise InvalidCellTypeError(cell.cell_type)


# ============================================================================
# Notebook
# ============================================================================

def render_notebook(notebook: Notebook, config: Optional[ConverterConfig] = None) -> str:
    """
    Render a whole notebook to text.

    Cells are numbered from 1 in document order. The first invalid cell
    type raises InvalidCellTypeError and nothing is returned.
    """
    config = config or ConverterConfig()
    language = notebook.code_language
    sections = []

    if config.include_metadata:
        sections.append(format_metadata(notebook))
        sections.append(SECTION_SEPARATOR)

    for cell_number, cell in enumerate(notebook.cells, start=1):
        sections.append(format_cell(cell, cell_number, config, language))
        sections.append(SECTION_SEPARATOR)

    logger.debug(f"Rendered {notebook.cell_count} cells "
                 f"(outputs={config.include_outputs}, metadata={config.include_metadata})")
    return "".join(sections)
