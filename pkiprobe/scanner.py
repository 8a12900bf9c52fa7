import fnmatch
import logging
import os
import pathlib
from typing import Iterator

from .errors import ScanError
from .path_utils import resolve_path

log = logging.getLogger(__name__)

DEFAULT_PATTERN = "*.crt"


def _walk(root: pathlib.Path, pattern: str) -> Iterator[pathlib.Path]:
    def _skip(err: OSError) -> None:
        log.warning("skipping unreadable directory %s: %s", err.filename, err.strerror,
                    extra={"cert_path": err.filename})

    for dirpath, dirnames, filenames in os.walk(root, onerror=_skip):
        # ordre de parcours stable d'un run à l'autre
        dirnames.sort()
        for name in sorted(filenames):
            if fnmatch.fnmatchcase(name, pattern):
                yield pathlib.Path(dirpath) / name


def scan_certificates(base_dir: str | os.PathLike[str], pattern: str = DEFAULT_PATTERN) -> Iterator[pathlib.Path]:
    """Lazily yield certificate files found anywhere below ``base_dir``.

    The base directory is checked before anything is yielded: a missing,
    non-directory or unreadable base raises :class:`ScanError` right away.
    Subdirectories that cannot be listed are skipped with a warning.
    """
    root = resolve_path(base_dir)
    if not root.exists():
        raise ScanError(str(root), "no such directory")
    if not root.is_dir():
        raise ScanError(str(root), "not a directory")
    if not os.access(root, os.R_OK | os.X_OK):
        raise ScanError(str(root), "permission denied")
    return _walk(root, pattern)
