"""
Notebook deserialization from the .ipynb JSON format.

Parsing is structural only: it checks that every required field has the
right JSON type, but never checks ``cell_type`` or ``output_type`` against
the known sets. That check belongs to rendering.
"""
from pathlib import Path
from typing import Optional, List, Dict, Any, Tuple, Union
import json
import logging

from .cell import Cell, Output
from .errors import NotebookParseError, NotebookReadError
from .notebook import Notebook

logger = logging.getLogger(__name__)


def _field(obj: Dict[str, Any], key: str, where: str, required: bool = False) -> Any:
    """Fetch ``obj[key]``; None for an absent optional field."""
    if key not in obj:
        if required:
            raise NotebookParseError(f"missing field '{key}'", where)
        return None
    return obj[key]


def _expect_object(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise NotebookParseError(f"expected object, got {_json_type(value)}", where)
    return value


def _expect_array(value: Any, where: str) -> List[Any]:
    if not isinstance(value, list):
        raise NotebookParseError(f"expected array, got {_json_type(value)}", where)
    return value


def _expect_string(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise NotebookParseError(f"expected string, got {_json_type(value)}", where)
    return value


def _expect_count(value: Any, where: str) -> int:
    # bool is an int subclass but a distinct JSON type
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise NotebookParseError(
            f"expected non-negative integer, got {_json_type(value)}", where
        )
    return value


def _optional_count(value: Any, where: str) -> Optional[int]:
    return None if value is None else _expect_count(value, where)


def _lines(value: Any, where: str) -> Tuple[str, ...]:
    """Read an array of lines; each line keeps whatever terminator it was authored with."""
    items = _expect_array(value, where)
    return tuple(_expect_string(item, f"{where}[{i}]") for i, item in enumerate(items))


def _optional_string(value: Any) -> Optional[str]:
    # Fields outside the rendered shape never fail a parse; odd values are dropped
    return value if isinstance(value, str) else None


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _jupyter_to_output(jout: Any, where: str) -> Output:
    """Convert a Jupyter output object to an Output."""
    jout = _expect_object(jout, where)

    text = _field(jout, 'text', where)
    data = _field(jout, 'data', where)
    name = _field(jout, 'name', where)
    ename = _field(jout, 'ename', where)
    evalue = _field(jout, 'evalue', where)

    return Output(
        output_type=_expect_string(_field(jout, 'output_type', where, required=True),
                                   f"{where}.output_type"),
        text=None if text is None else _lines(text, f"{where}.text"),
        data=None if data is None else _expect_object(data, f"{where}.data"),
        execution_count=_optional_count(_field(jout, 'execution_count', where),
                                        f"{where}.execution_count"),
        name=_optional_string(name),
        ename=_optional_string(ename),
        evalue=_optional_string(evalue),
        traceback=_field(jout, 'traceback', where),
    )


def _jupyter_to_cell(jcell: Any, index: int = 0) -> Cell:
    """
    Convert a Jupyter cell object to a Cell.

    ``outputs`` is read for every cell type; the renderer decides whether
    it matters.
    """
    where = f"cells[{index}]"
    jcell = _expect_object(jcell, where)

    outputs = _field(jcell, 'outputs', where)
    if outputs is not None:
        outputs = tuple(
            _jupyter_to_output(jout, f"{where}.outputs[{i}]")
            for i, jout in enumerate(_expect_array(outputs, f"{where}.outputs"))
        )

    return Cell(
        cell_type=_expect_string(_field(jcell, 'cell_type', where, required=True),
                                 f"{where}.cell_type"),
        source=_lines(_field(jcell, 'source', where, required=True), f"{where}.source"),
        metadata=_expect_object(_field(jcell, 'metadata', where, required=True),
                                f"{where}.metadata"),
        outputs=outputs,
        execution_count=_optional_count(_field(jcell, 'execution_count', where),
                                        f"{where}.execution_count"),
    )


def notebook_from_dict(nb_data: Any) -> Notebook:
    """Build a Notebook from already-decoded JSON."""
    nb_data = _expect_object(nb_data, "notebook")

    jcells = _expect_array(_field(nb_data, 'cells', "notebook", required=True), "cells")
    cells = tuple(_jupyter_to_cell(jcell, i) for i, jcell in enumerate(jcells))

    return Notebook(
        cells=cells,
        metadata=_expect_object(_field(nb_data, 'metadata', "notebook", required=True),
                                "metadata"),
        nbformat=_expect_count(_field(nb_data, 'nbformat', "notebook", required=True),
                               "nbformat"),
        nbformat_minor=_expect_count(
            _field(nb_data, 'nbformat_minor', "notebook", required=True), "nbformat_minor"
        ),
    )


def parse_notebook(raw: Union[str, bytes]) -> Notebook:
    """
    Parse notebook JSON text into a Notebook.

    Raises NotebookParseError on malformed JSON or a field of the wrong type.
    """
    try:
        nb_data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise NotebookParseError(str(e)) from e

    notebook = notebook_from_dict(nb_data)
    logger.debug(f"Parsed notebook with {notebook.cell_count} cells "
                 f"(nbformat {notebook.format_version})")
    return notebook


def read_notebook_bytes(path: Union[str, Path]) -> bytes:
    """Read raw notebook bytes from disk; decoding is left to the JSON parser."""
    path = Path(path)
    try:
        return path.read_bytes()
    except OSError as e:
        raise NotebookReadError(path, e) from e


def load_notebook(path: Union[str, Path]) -> Notebook:
    """Load a .ipynb file into a Notebook."""
    logger.debug(f"Loading notebook from {path}")
    return parse_notebook(read_notebook_bytes(path))
