"""Build the typed project model from a parsed project.json manifest."""

from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from .archive import Archive, open_archive
from .diagnostics import DiagnosticContext
from .errors import ManifestParseError
from .model import AssetRef, Costume, ProjectModel, Sound, Target, empty_stage
from .opcodes import extension_for_opcode
from .renderer import render_target_scripts

AssetT = TypeVar("AssetT", bound=AssetRef)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def build_asset_refs(entries: Any, asset_cls: Type[AssetT]) -> Tuple[AssetT, ...]:
    """Map costume or sound dicts to records; entries without md5ext are dropped."""
    if not isinstance(entries, list):
        return ()
    refs: List[AssetT] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        md5ext = entry.get("md5ext")
        if not isinstance(md5ext, str) or not md5ext:
            continue
        refs.append(
            asset_cls(
                name=_text(entry.get("name")),
                data_format=_text(entry.get("dataFormat")),
                asset_id=_text(entry.get("assetId")),
                md5ext=md5ext,
            )
        )
    return tuple(refs)


def collect_extensions(manifest_extensions: Any, targets: List[Dict[str, Any]]) -> Tuple[str, ...]:
    """Declared extensions in manifest order, then any implied by opcode prefixes."""
    extensions: List[str] = []
    if isinstance(manifest_extensions, list):
        for ext in manifest_extensions:
            if isinstance(ext, str) and ext and ext not in extensions:
                extensions.append(ext)
    for target in targets:
        blocks = target.get("blocks")
        if not isinstance(blocks, dict):
            continue
        for block in blocks.values():
            if not isinstance(block, dict):
                continue
            opcode = block.get("opcode")
            ext = extension_for_opcode(opcode) if isinstance(opcode, str) else ""
            if ext and ext not in extensions:
                extensions.append(ext)
    return tuple(extensions)


def build_target(
    raw: Dict[str, Any],
    diagnostics: Optional[DiagnosticContext] = None,
    render: bool = True,
) -> Target:
    """Map one manifest target to a record; ``render=False`` skips the scripts."""
    is_stage = raw.get("isStage") is True
    name = _text(raw.get("name")) or ("Stage" if is_stage else "Sprite")
    costumes = build_asset_refs(raw.get("costumes"), Costume)
    sounds = build_asset_refs(raw.get("sounds"), Sound)
    if not render:
        return Target(name=name, is_stage=is_stage, costumes=costumes, sounds=sounds)

    blocks = raw.get("blocks")
    if not isinstance(blocks, dict):
        blocks = {}
    target_diag = diagnostics.child(f"{'Stage' if is_stage else 'Sprite'} '{name}'") if diagnostics is not None else None
    opcodes = tuple(
        block["opcode"]
        for block in blocks.values()
        if isinstance(block, dict) and isinstance(block.get("opcode"), str)
    )
    variables = raw.get("variables")
    lists = raw.get("lists")

    return Target(
        name=name,
        is_stage=is_stage,
        costumes=costumes,
        sounds=sounds,
        blocks=tuple(render_target_scripts(blocks, target_diag)),
        block_count=len(blocks),
        opcodes=opcodes,
        variable_count=len(variables) if isinstance(variables, dict) else 0,
        list_count=len(lists) if isinstance(lists, dict) else 0,
    )


def _raw_targets(manifest: Any) -> List[Dict[str, Any]]:
    if not isinstance(manifest, dict):
        raise ManifestParseError("project.json must contain a JSON object")
    raw_targets = manifest.get("targets")
    if not isinstance(raw_targets, list):
        return []
    return [t for t in raw_targets if isinstance(t, dict)]


def _split_stage(
    targets: List[Target],
    diagnostics: Optional[DiagnosticContext] = None,
) -> Tuple[Target, Tuple[Target, ...]]:
    """First stage target wins; later ones are demoted to sprites."""
    stage: Optional[Target] = None
    sprites: List[Target] = []
    for target in targets:
        if target.is_stage and stage is None:
            stage = target
        elif target.is_stage:
            if diagnostics is not None:
                diagnostics.warning(f"Extra stage target '{target.name}' treated as a sprite")
            sprites.append(replace(target, is_stage=False))
        else:
            sprites.append(target)
    return stage or empty_stage(), tuple(sprites)


def asset_targets(manifest: Any) -> List[Target]:
    """Targets carrying only costumes and sounds, stage first."""
    stage, sprites = _split_stage([build_target(raw, render=False) for raw in _raw_targets(manifest)])
    return [stage, *sprites]


def build_project(manifest: Any, diagnostics: Optional[DiagnosticContext] = None) -> ProjectModel:
    """Reconstruct targets from a manifest; the stage is always a named field."""
    raw_targets = _raw_targets(manifest)
    stage, sprites = _split_stage([build_target(raw, diagnostics) for raw in raw_targets], diagnostics)
    return ProjectModel(
        stage=stage,
        sprites=sprites,
        extensions=collect_extensions(manifest.get("extensions"), raw_targets),
    )


def load_project(data: bytes, diagnostics: Optional[DiagnosticContext] = None) -> Tuple[Archive, ProjectModel]:
    """Open an .sb3 buffer and build its model; fails before any model exists."""
    archive = open_archive(data)
    manifest = archive.read_json_entry()
    return archive, build_project(manifest, diagnostics)
