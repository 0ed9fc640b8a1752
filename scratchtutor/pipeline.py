"""Per-invocation orchestration of the tutorial pipeline.

A ``ProjectSession`` holds everything derived from one archive. It is built
once and never mutated, so a failed synthesis can be retried against the same
session without re-reading the archive.
"""

import asyncio
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .archive import Archive, open_archive_async
from .catalog import AssetCatalogEntry, catalog_from_manifest, find_entry
from .delivery import extract_all, extract_one
from .diagnostics import DiagnosticContext
from .errors import AssetNotCatalogedError
from .model import ProjectModel
from .project import build_project
from .synthesizer import TutorialSynthesizer
from .validator import Tutorial, validate_tutorial


@dataclass(frozen=True)
class ProjectSession:
    archive: Archive
    project: ProjectModel
    catalog: Tuple[AssetCatalogEntry, ...]

    @property
    def data(self) -> bytes:
        return self.archive.data


async def load_session(data: bytes, diagnostics: Optional[DiagnosticContext] = None) -> ProjectSession:
    archive = await open_archive_async(data)
    manifest = await asyncio.to_thread(archive.read_json_entry)
    project, catalog = await asyncio.gather(
        asyncio.to_thread(build_project, manifest, diagnostics),
        asyncio.to_thread(catalog_from_manifest, manifest),
    )
    return ProjectSession(archive=archive, project=project, catalog=tuple(catalog))


async def generate_tutorial(session: ProjectSession, synthesizer: TutorialSynthesizer) -> Tutorial:
    """Synthesize and validate a tutorial; errors leave the session untouched."""
    text = await synthesizer.synthesize(session.project)
    return validate_tutorial(text)


def extract_asset(session: ProjectSession, md5ext: str) -> bytes:
    entry = find_entry(session.catalog, md5ext)
    if entry is None:
        raise AssetNotCatalogedError(md5ext)
    return extract_one(session.archive, entry)


def package_assets(
    session: ProjectSession,
    entries: Optional[List[AssetCatalogEntry]] = None,
    diagnostics: Optional[DiagnosticContext] = None,
) -> bytes:
    return extract_all(session.archive, session.catalog if entries is None else entries, diagnostics)
