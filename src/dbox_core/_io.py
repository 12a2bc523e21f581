"""Shared I/O helpers."""

from pathlib import Path
from typing import Optional

from .errors import MissingInputError


def read_text(file_path: str, encoding: str = "utf-8") -> str:
    """Read a whole text file (e.g. a saved ``*.dbox``) into a string."""
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")
    return path.read_text(encoding=encoding)


def load_input(
    text: Optional[str] = None,
    file_path: str = "",
    encoding: str = "utf-8",
) -> str:
    """Return the input text, reading ``file_path`` when no text is given.

    Raises:
        MissingInputError: If neither text nor a file path was supplied.
    """
    if text is not None:
        return text
    if not file_path:
        raise MissingInputError(
            "Needs either an input data file name or a multiline string"
        )
    return read_text(str(file_path), encoding)
