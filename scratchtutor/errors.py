"""Exception types raised by the tutorial pipeline."""

from typing import List, Optional


class TutorError(Exception):
    """Base exception for pipeline failures."""

    def __init__(self, message: str, detail: str = ""):
        self.message = message
        self.detail = detail
        super().__init__(message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


class ArchiveCorruptError(TutorError):
    """The byte buffer is not a readable zip container."""


class ManifestMissingError(TutorError):
    """The archive has no project.json entry."""


class ManifestParseError(TutorError):
    """project.json exists but is not a usable JSON document."""


class AssetMissingInArchiveError(TutorError):
    """A cataloged asset has no matching entry in the archive."""

    def __init__(self, md5ext: str):
        super().__init__(f"Asset not found in archive: {md5ext}")
        self.md5ext = md5ext


class SynthesisUnavailableError(TutorError):
    """The generative capability failed, timed out or was cancelled."""


class SchemaViolationError(TutorError):
    """A synthesized tutorial could not be reconciled with the schema."""

    def __init__(self, violations: List[str], message: Optional[str] = None):
        self.violations = list(violations)
        count = len(self.violations)
        super().__init__(
            message or f"Tutorial failed schema validation with {count} violation{'s' if count != 1 else ''}",
            "; ".join(self.violations),
        )


class AssetNotCatalogedError(TutorError):
    """No costume or sound in the project refers to the requested md5ext."""

    def __init__(self, md5ext: str):
        super().__init__(f"No costume or sound in this project uses {md5ext}")
        self.md5ext = md5ext
