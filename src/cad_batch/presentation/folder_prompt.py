"""Interactive folder selection."""

from typing import Optional

from cad_batch.shared.logging import get_logger

try:
    import tkinter as tk
    from tkinter import filedialog
    TK_AVAILABLE = True
except ImportError:
    TK_AVAILABLE = False

logger = get_logger(__name__)


def _ask_with_dialog(title: str) -> Optional[str]:
    root = tk.Tk()
    try:
        root.withdraw()
        path = filedialog.askdirectory(title=title, mustexist=True)
        root.update()
    finally:
        root.destroy()
    return path or None


def _ask_on_console(title: str) -> Optional[str]:
    print(title)
    try:
        path = input("> ").strip().strip('"')
    except EOFError:
        return None
    return path or None


def select_folder(title: str) -> Optional[str]:
    """
    Folder picker; falls back to console input.

    Returns None when the operator cancels the dialog or enters nothing.
    """
    if TK_AVAILABLE:
        try:
            return _ask_with_dialog(title)
        except tk.TclError as e:
            # No display available (e.g. SSH session)
            logger.debug(f"Folder dialog unavailable: {e}")
    return _ask_on_console(title)
