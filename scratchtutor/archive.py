"""Read-only access to .sb3 project archives held in memory."""

import asyncio
import io
import json
import zipfile
import zlib
from typing import Any, Iterable, List, Optional, Tuple

from .errors import ArchiveCorruptError, ManifestMissingError, ManifestParseError

MANIFEST_NAME = "project.json"


class Archive:
    """A zip container opened over an immutable byte buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        try:
            with zipfile.ZipFile(io.BytesIO(self._data), "r") as archive:
                self._names = tuple(info.filename for info in archive.infolist() if not info.is_dir())
        except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError, EOFError) as exc:
            raise ArchiveCorruptError("Not a valid project archive", str(exc)) from exc

    @property
    def data(self) -> bytes:
        return self._data

    def names(self) -> List[str]:
        return list(self._names)

    def has_entry(self, name: str) -> bool:
        return name in self._names

    def read_entry(self, name: str) -> Optional[bytes]:
        """Return the bytes stored under ``name`` or None when absent."""
        if name not in self._names:
            return None
        try:
            with zipfile.ZipFile(io.BytesIO(self._data), "r") as archive:
                return archive.read(name)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, OSError, EOFError) as exc:
            # Central directory was readable but the member payload is damaged.
            raise ArchiveCorruptError(f"Could not read archive entry {name}", str(exc)) from exc

    def read_json_entry(self, name: str = MANIFEST_NAME) -> Any:
        raw = self.read_entry(name)
        if raw is None:
            raise ManifestMissingError(f"{name} not found in the archive")
        try:
            return json.loads(raw.decode("utf-8-sig"))
        except UnicodeDecodeError as exc:
            raise ManifestParseError(f"{name} is not UTF-8 text", str(exc)) from exc
        except json.JSONDecodeError as exc:
            raise ManifestParseError(f"{name} is not valid JSON", str(exc)) from exc


def open_archive(data: bytes) -> Archive:
    return Archive(data)


async def open_archive_async(data: bytes) -> Archive:
    """Open an archive without blocking the running event loop."""
    return await asyncio.to_thread(Archive, data)


def build_archive(entries: Iterable[Tuple[str, bytes]]) -> bytes:
    """Write ``(name, payload)`` pairs into a new deflated zip and return its bytes."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, payload in entries:
            archive.writestr(name, payload)
    return buffer.getvalue()
