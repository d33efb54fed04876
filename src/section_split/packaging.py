from __future__ import annotations

import io
import logging
import re
import zipfile
from collections.abc import Sequence

from .contracts import Archive, ArchiveCompression, ExtractedArtifact, SplitError, SplitErrorCode

logger = logging.getLogger(__name__)

# Characters that are invalid in file names on at least one common filesystem.
# zipfile also truncates entry names at NUL, so control characters go too.
_UNSAFE_CHARS_RE = re.compile(r'[/\\?%*:|"<>\x00-\x1f]')

# Fixed entry timestamp: identical inputs must yield identical entries.
_ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)

_COMPRESSION = {
    ArchiveCompression.DEFLATED: zipfile.ZIP_DEFLATED,
    ArchiveCompression.STORED: zipfile.ZIP_STORED,
}


class PackagingError(Exception):
    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Failed to build archive: {cause!r}")
        self.cause = cause

    def to_error(self) -> SplitError:
        return SplitError(
            code=SplitErrorCode.PACKAGING_FAILED.value,
            message="Failed to build archive",
            detail={"error": repr(self.cause)},
        )


def sanitize_file_name(name: str) -> str:
    return _UNSAFE_CHARS_RE.sub("-", name)


def entry_file_name(*, folder_name: str, section_name: str) -> str:
    return sanitize_file_name(f"{folder_name}-{section_name}") + ".pdf"


def resolve_entry_names(*, section_names: Sequence[str], folder_name: str) -> list[str]:
    """
    Archive entry names for `section_names`, in order.

    The first occurrence of a name is kept as-is; later collisions get "-2",
    "-3", ... appended to the stem, skipping candidates already taken.
    """

    taken: set[str] = set()
    counts: dict[str, int] = {}
    out: list[str] = []
    for section_name in section_names:
        base = entry_file_name(folder_name=folder_name, section_name=section_name)
        name = base
        if name in taken:
            stem = base[: -len(".pdf")]
            n = counts.get(base, 1)
            while name in taken:
                n += 1
                name = f"{stem}-{n}.pdf"
            counts[base] = n
        taken.add(name)
        out.append(name)
    return out


def archive_file_name(folder_name: str) -> str:
    return sanitize_file_name(folder_name) + ".zip"


def package_artifacts(
    *,
    artifacts: Sequence[tuple[str, bytes]],
    folder_name: str,
    compression: ArchiveCompression = ArchiveCompression.DEFLATED,
) -> Archive:
    """
    Bundle `(section_name, pdf_bytes)` pairs into one in-memory ZIP archive.

    Entry order follows `artifacts`. Raises `PackagingError` if serialization
    fails; no partially written archive is returned.
    """

    names = resolve_entry_names(section_names=[name for name, _ in artifacts], folder_name=folder_name)
    entries = tuple(
        ExtractedArtifact(file_name=file_name, payload=bytes(payload))
        for file_name, (_, payload) in zip(names, artifacts)
    )

    buf = io.BytesIO()
    try:
        with zipfile.ZipFile(buf, mode="w", compression=_COMPRESSION[compression]) as zf:
            for entry in entries:
                info = zipfile.ZipInfo(filename=entry.file_name, date_time=_ZIP_DATE_TIME)
                info.compress_type = _COMPRESSION[compression]
                info.external_attr = 0o644 << 16
                zf.writestr(info, entry.payload)
    except (OSError, ValueError, zipfile.LargeZipFile) as e:
        raise PackagingError(e) from e

    data = buf.getvalue()
    logger.info("Packaged %d entries into %s (%d bytes)", len(entries), archive_file_name(folder_name), len(data))
    return Archive(file_name=archive_file_name(folder_name), entries=entries, data=data)
