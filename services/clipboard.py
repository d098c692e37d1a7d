"""Clipboard hand-off for converted text."""
import logging

import pyperclip

logger = logging.getLogger(__name__)


def copy_to_clipboard(text: str) -> bool:
    """
    Copy ``text`` to the system clipboard.

    Returns False when no clipboard mechanism is available on this platform.
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.warning(f"Clipboard copy failed: {e}")
        return False
    logger.debug(f"Copied {len(text)} characters to clipboard")
    return True
