"""Notebook data model."""
import re
from dataclasses import dataclass, field
from typing import Optional, Any, Dict, List, Tuple

from .cell import Cell, CellType

DEFAULT_CODE_LANGUAGE = "python"
_FENCE_TAG = re.compile(r"[\w+#.-]+")


def _lookup_str(metadata: Dict[str, Any], section: str, key: str) -> Optional[str]:
    """Best-effort ``metadata[section][key]``; None unless it is a string."""
    block = metadata.get(section)
    if not isinstance(block, dict):
        return None
    value = block.get(key)
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class Notebook:
    """
    A notebook document: ordered cells plus document-level metadata.

    Immutable once parsed. Only the ``kernelspec`` and ``language_info``
    entries of ``metadata`` are ever inspected.
    """
    cells: Tuple[Cell, ...] = ()
    metadata: Dict[str, Any] = field(default_factory=dict)
    nbformat: int = 4
    nbformat_minor: int = 5

    @property
    def cell_count(self) -> int:
        return len(self.cells)

    @property
    def format_version(self) -> str:
        """Schema version as ``<major>.<minor>``."""
        return f"{self.nbformat}.{self.nbformat_minor}"

    def code_cells(self) -> List[Cell]:
        """Get all code cells."""
        return [c for c in self.cells if c.cell_type == CellType.CODE.value]

    @property
    def kernel_name(self) -> Optional[str]:
        return _lookup_str(self.metadata, 'kernelspec', 'name')

    @property
    def kernel_display_name(self) -> Optional[str]:
        return _lookup_str(self.metadata, 'kernelspec', 'display_name')

    @property
    def language_name(self) -> Optional[str]:
        return _lookup_str(self.metadata, 'language_info', 'name')

    @property
    def language_version(self) -> Optional[str]:
        return _lookup_str(self.metadata, 'language_info', 'version')

    @property
    def code_language(self) -> str:
        """
        Language tag for code fences.

        Falls back from ``language_info.name`` to ``kernelspec.language``
        and finally to Python. Names that could break the fence line
        (whitespace, backticks) are skipped.
        """
        for candidate in (self.language_name,
                          _lookup_str(self.metadata, 'kernelspec', 'language')):
            if candidate and _FENCE_TAG.fullmatch(candidate):
                return candidate
        return DEFAULT_CODE_LANGUAGE
