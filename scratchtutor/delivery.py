"""Extract cataloged assets from the original archive.

Single-asset extraction is strict and raises when the archive does not hold
the entry. Bulk extraction is best effort: unresolved entries are recorded as
warnings and left out of the package.
"""

from typing import Iterable, List, Optional, Set, Tuple

from .archive import Archive, build_archive
from .catalog import AssetCatalogEntry
from .diagnostics import DiagnosticContext
from .errors import ArchiveCorruptError, AssetMissingInArchiveError
from .utils import safe_name, unique_filename


def asset_filename(entry: AssetCatalogEntry) -> str:
    """Display filename for an asset; the content hash stands in for blank names."""
    # A name equal to md5ext is the catalog's stand-in for a blank name.
    name = "" if entry.name == entry.md5ext else entry.name
    base = safe_name(name, fallback=entry.asset_id or "asset")
    return f"{base}.{entry.data_format}" if entry.data_format else base


def extract_one(archive: Archive, entry: AssetCatalogEntry) -> bytes:
    payload = archive.read_entry(entry.md5ext)
    if payload is None:
        raise AssetMissingInArchiveError(entry.md5ext)
    return payload


def extract_all(
    archive: Archive,
    entries: Iterable[AssetCatalogEntry],
    diagnostics: Optional[DiagnosticContext] = None,
) -> bytes:
    """Package every resolvable asset into a new zip under its display name."""
    packaged: List[Tuple[str, bytes]] = []
    used: Set[str] = set()
    for entry in entries:
        try:
            payload = archive.read_entry(entry.md5ext)
        except ArchiveCorruptError as exc:
            if diagnostics is not None:
                diagnostics.warning(f"{entry.type.capitalize()} asset {entry.md5ext} is unreadable", str(exc))
            continue
        if payload is None:
            if diagnostics is not None:
                diagnostics.warning(f"{entry.type.capitalize()} asset {entry.md5ext} not found in archive", entry.name)
            continue
        packaged.append((unique_filename(asset_filename(entry), used), payload))

    if diagnostics is not None:
        diagnostics.info(f"Packaged {len(packaged)} asset{'s' if len(packaged) != 1 else ''}")
    return build_archive(packaged)
