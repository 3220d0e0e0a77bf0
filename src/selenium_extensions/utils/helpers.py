import logging
import os
import secrets
import shutil
import stat
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


def to_int(text: Optional[str]) -> int:
    """Parses an integer, treating None and empty strings as 0."""
    if not text:
        return 0
    return int(text.strip())


def random_string(length: int = 11) -> str:
    """Returns a random lowercase alphanumeric token safe for file names."""
    return secrets.token_hex(length)[:length]


def url_contains(source: str, target: str) -> bool:
    return str(target) in str(source)


def xpath_literal(value: str) -> str:
    """
    Quotes a value as an XPath 1.0 string literal.

    XPath has no escape sequences, so a value holding both quote characters
    is split into pieces and joined with concat().
    """
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    parts = value.split('"')
    pieces = ", '\"', ".join(f'"{part}"' for part in parts)
    return f"concat({pieces})"


def _reset_attributes(path: str) -> None:
    mode = os.stat(path).st_mode
    os.chmod(path, mode | stat.S_IWRITE | stat.S_IREAD)


def force_delete(path: Union[str, Path]) -> None:
    """
    Deletes a directory tree, clearing read-only bits first.

    Does nothing when the directory does not exist.
    """
    if not path:
        raise ValueError("path must not be empty.")
    base_folder = Path(path)
    if not base_folder.is_dir():
        logger.debug(f"Nothing to delete at {base_folder}")
        return

    for root, dirs, files in os.walk(base_folder):
        for name in dirs + files:
            _reset_attributes(os.path.join(root, name))

    shutil.rmtree(base_folder)
    logger.info(f"Deleted directory {base_folder}")
