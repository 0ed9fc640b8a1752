"""Typed project model reconstructed from project.json."""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class AssetRef:
    """A costume or sound reference; ``md5ext`` is the archive entry name."""
    name: str
    data_format: str
    asset_id: str
    md5ext: str


@dataclass(frozen=True)
class Costume(AssetRef):
    pass


@dataclass(frozen=True)
class Sound(AssetRef):
    pass


@dataclass(frozen=True)
class Target:
    """The Stage or a Sprite, with its scripts already rendered to text."""
    name: str
    is_stage: bool
    costumes: Tuple[Costume, ...] = ()
    sounds: Tuple[Sound, ...] = ()
    blocks: Tuple[str, ...] = ()
    # Lossy counters kept for the tutorial summary.
    block_count: int = 0
    opcodes: Tuple[str, ...] = ()
    variable_count: int = 0
    list_count: int = 0


def empty_stage() -> Target:
    return Target(name="Stage", is_stage=True)


@dataclass(frozen=True)
class ProjectModel:
    stage: Target = field(default_factory=empty_stage)
    sprites: Tuple[Target, ...] = ()
    extensions: Tuple[str, ...] = ()

    @property
    def targets(self) -> Tuple[Target, ...]:
        """Stage first, then sprites in archive order."""
        return (self.stage,) + self.sprites

    def find_target(self, name: str) -> Optional[Target]:
        for target in self.targets:
            if target.name == name:
                return target
        return None

    @property
    def script_count(self) -> int:
        return sum(len(target.blocks) for target in self.targets)
