"""ZIP archive streaming for a FilePlan."""
import io
import logging
import zipfile
from typing import Callable, Iterator, Optional

from initializr.core.errors import ClientDisconnected
from initializr.generators.types import FilePlan

log = logging.getLogger(__name__)

# Fixed entry timestamp so equal plans produce byte-identical archives
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)
FILE_MODE = 0o644 << 16


class _ChunkBuffer(io.RawIOBase):
    """Write-only sink that hands out whatever was written since the last drain."""

    def __init__(self):
        self._chunks = []

    def writable(self) -> bool:
        return True

    def write(self, data) -> int:
        self._chunks.append(bytes(data))
        return len(data)

    def drain(self) -> bytes:
        data = b"".join(self._chunks)
        self._chunks.clear()
        return data


def _entry_info(path: str) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(path, date_time=ZIP_EPOCH)
    info.compress_type = zipfile.ZIP_DEFLATED
    info.external_attr = FILE_MODE
    info.create_system = 3
    return info


def iter_archive(plan: FilePlan, is_cancelled: Optional[Callable[[], bool]] = None) -> Iterator[bytes]:
    """Yield the ZIP bytes for ``plan`` one entry at a time, in sorted path order.

    ``is_cancelled`` is polled between entries; when it returns True the
    stream stops with ClientDisconnected and no central directory is written.
    """
    buffer = _ChunkBuffer()
    extra = {"project": plan.project_name, "step": "archive"}
    with zipfile.ZipFile(buffer, mode="w", compression=zipfile.ZIP_DEFLATED) as archive:
        for path, content in plan.items():
            if is_cancelled is not None and is_cancelled():
                log.info("Client went away before %s, stopping archive", path, extra=extra)
                raise ClientDisconnected(path)
            archive.writestr(_entry_info(path), content)
            chunk = buffer.drain()
            if chunk:
                yield chunk
    tail = buffer.drain()
    if tail:
        yield tail
    log.info("Streamed archive with %d entries", len(plan), extra=extra)


def build_archive(plan: FilePlan) -> bytes:
    """Whole archive as bytes."""
    return b"".join(iter_archive(plan))
