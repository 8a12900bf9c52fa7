import os
import pathlib
from urllib.parse import urlparse, unquote


def _norm(p: pathlib.Path) -> pathlib.Path:
    return p.expanduser().resolve(strict=False)


def parse_file_uri(uri_or_path: str) -> pathlib.Path:
    if uri_or_path.startswith("file://"):
        parsed = urlparse(uri_or_path)
        return pathlib.Path(unquote(parsed.path or ""))
    return pathlib.Path(uri_or_path)


def resolve_path(path_like: str | os.PathLike[str]) -> pathlib.Path:
    return _norm(parse_file_uri(str(path_like)))


def pki_root(base_dir: str | os.PathLike[str]) -> pathlib.Path:
    """Return the ``pki`` tree of an EasyRSA-style base directory."""
    return resolve_path(base_dir) / "pki"
