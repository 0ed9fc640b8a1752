"""Flat-text tutorial export."""

from typing import Dict, Iterable, List, Protocol

from .catalog import AssetCatalogEntry
from .delivery import asset_filename
from .validator import Tutorial

PLACEHOLDER_DOCUMENT_ID = "placeholder-document-id"


class DocumentExporter(Protocol):
    def export(self, text: str) -> Dict[str, str]:
        ...


class PlaceholderDocumentExporter:
    """Accepts the text and returns a fixed document id; nothing is uploaded."""

    def __init__(self) -> None:
        self.exported: List[str] = []

    def export(self, text: str) -> Dict[str, str]:
        self.exported.append(text)
        return {"documentId": PLACEHOLDER_DOCUMENT_ID}


def _indent(text: str, prefix: str) -> str:
    return "\n".join(prefix + line if line else line for line in text.splitlines())


def format_tutorial_text(
    tutorial: Tutorial,
    project_name: str,
    catalog: Iterable[AssetCatalogEntry] = (),
) -> str:
    lines = [f"Project Name: {project_name}", "", f"Description: {tutorial.description}", ""]

    if tutorial.sprites:
        lines.append("Sprites:")
        for sprite in tutorial.sprites:
            lines.append(f"- {sprite.name}: {sprite.description}")
        lines.append("")

    resources = list(catalog)
    if resources:
        lines.append("Resources:")
        for entry in resources:
            lines.append(f"- {asset_filename(entry)} ({entry.type})")
        lines.append("")

    lines.append("Tutorial Steps:")
    lines.append("")
    for index, step in enumerate(tutorial.steps, start=1):
        where = "Backdrop" if step.target.target_type == "backdrop" else "Sprite"
        lines.append(f"Step {index}: {step.title} [{where}: {step.target.target_name}]")
        lines.append(_indent(step.code, "    "))
        lines.append(f"  {step.explanation}")
        lines.append("")

    if tutorial.extensions:
        lines.append("Ideas to Try Next:")
        for idea in tutorial.extensions:
            lines.append(f"- {idea}")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"
