from typing import Optional, Sequence, Tuple

from .errors import PickerUnavailable

EXEC_FILTERS: Tuple[Tuple[str, str], ...] = (
    ("Executables", "*.exe *.app *.sh *.bat *.lnk"),
    ("All files", "*.*"),
)


def choose_file(title: str = "Select Game Executable",
                filetypes: Sequence[Tuple[str, str]] = EXEC_FILTERS) -> Optional[str]:
    """Native single-file dialog on the host. None when cancelled."""
    try:
        import tkinter as tk
        from tkinter import filedialog
    except ImportError as e:
        raise PickerUnavailable("No file dialog available (tkinter missing)") from e

    try:
        root = tk.Tk()
    except tk.TclError as e:
        raise PickerUnavailable(f"No file dialog available: {e}") from e
    root.withdraw()
    root.attributes("-topmost", True)
    try:
        path = filedialog.askopenfilename(title=title, filetypes=list(filetypes))
    finally:
        root.destroy()
    return path or None
