from __future__ import annotations

import hashlib
from pathlib import Path, PurePosixPath, PureWindowsPath


class DataAccessError(Exception):
    pass


def resolve_under_data_root(*, data_root: Path, relpath: str) -> Path:
    """
    Map `relpath` to a file inside `data_root`, or raise `DataAccessError`.
    """

    if PurePosixPath(relpath).is_absolute() or PureWindowsPath(relpath).anchor:
        raise DataAccessError(f"PDF path must be relative to the data root: {relpath!r}")

    root = data_root.expanduser().resolve()
    target = root.joinpath(relpath).resolve()
    if not target.is_relative_to(root):
        raise DataAccessError(f"PDF path points outside the data root: {relpath!r}")
    return target


def sha256_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()
