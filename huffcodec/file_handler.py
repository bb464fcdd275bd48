#file_handler.py
import os

from .errors import IOFailureError
from .validators import validate_not_blank


def read_all(file_path: str) -> bytes:
    """Read the whole file as bytes."""
    validate_not_blank(file_path, "File path")
    try:
        with open(file_path, 'rb') as file:
            return file.read()
    except OSError as e:
        raise IOFailureError(f"Can't read {file_path}: {e}") from e


def write_all(file_path: str, data: bytes) -> None:
    """Write data to the file, creating missing parent folders."""
    validate_not_blank(file_path, "File path")
    try:
        folder = os.path.dirname(file_path)
        if folder and not os.path.exists(folder):
            os.makedirs(folder)
        with open(file_path, 'wb') as file:
            file.write(data)
    except OSError as e:
        raise IOFailureError(f"Can't write {file_path}: {e}") from e
