"""Flat, deduplicated catalog of every costume and sound in a project."""

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Set, Union

from .model import AssetRef, ProjectModel, Target
from .project import asset_targets

IMAGE = "image"
SOUND = "sound"


@dataclass(frozen=True)
class AssetCatalogEntry:
    name: str
    md5ext: str
    data_format: str
    type: str
    asset_id: str = ""

    def __post_init__(self) -> None:
        if not self.asset_id:
            stem = self.md5ext.rsplit(".", 1)[0] if "." in self.md5ext else self.md5ext
            object.__setattr__(self, "asset_id", stem)


def _entry(ref: AssetRef, asset_type: str) -> AssetCatalogEntry:
    data_format = ref.data_format
    if not data_format and "." in ref.md5ext:
        data_format = ref.md5ext.rsplit(".", 1)[1]
    return AssetCatalogEntry(
        name=ref.name or ref.md5ext,
        md5ext=ref.md5ext,
        data_format=data_format,
        type=asset_type,
        asset_id=ref.asset_id,
    )


def build_catalog(targets: Union[ProjectModel, Iterable[Target]]) -> List[AssetCatalogEntry]:
    """Union of all asset references keyed by md5ext; the first reference wins.

    Targets are visited Stage first, then sprites in archive order. Within a
    target costumes come before sounds.
    """
    if isinstance(targets, ProjectModel):
        ordered = list(targets.targets)
    else:
        ordered = list(targets)
        ordered.sort(key=lambda t: not t.is_stage)

    catalog: List[AssetCatalogEntry] = []
    seen: Set[str] = set()
    for target in ordered:
        for refs, asset_type in ((target.costumes, IMAGE), (target.sounds, SOUND)):
            for ref in refs:
                if ref.md5ext in seen:
                    continue
                seen.add(ref.md5ext)
                catalog.append(_entry(ref, asset_type))
    return catalog


def find_entry(catalog: Iterable[AssetCatalogEntry], md5ext: str) -> Optional[AssetCatalogEntry]:
    for entry in catalog:
        if entry.md5ext == md5ext:
            return entry
    return None


def catalog_from_manifest(manifest: Any) -> List[AssetCatalogEntry]:
    """Catalog a parsed project.json without rendering any scripts."""
    return build_catalog(asset_targets(manifest))
