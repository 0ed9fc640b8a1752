"""Validate generated tutorials against the fixed Tutorial schema.

The generator is asked for JSON matching the schema but does not always
comply. Exactly one shape repair is applied before validation: a step whose
``target`` is a bare string is read as a sprite name. Every other deviation,
including unknown fields, is reported as a SchemaViolationError.
"""

import json
import re
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from .errors import SchemaViolationError

_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class StepTarget(_WireModel):
    target_type: Literal["sprite", "backdrop"] = Field(alias="targetType")
    target_name: StrictStr = Field(alias="targetName")


class Step(_WireModel):
    title: StrictStr
    target: StepTarget
    code: StrictStr
    explanation: StrictStr


class SpriteSummary(_WireModel):
    name: StrictStr
    description: StrictStr


class Tutorial(_WireModel):
    description: StrictStr
    sprites: Optional[Tuple[SpriteSummary, ...]] = None
    steps: Tuple[Step, ...] = Field(min_length=1)
    extensions: Optional[Tuple[StrictStr, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Wire form with camelCase keys; absent optional sections are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def parse_tutorial_text(text: Union[str, bytes]) -> Any:
    """Decode a generator response as JSON, unwrapping a Markdown code fence."""
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    stripped = text.strip()
    fenced = _FENCE.match(stripped)
    if fenced:
        stripped = fenced.group(1)
    try:
        return json.loads(stripped)
    except json.JSONDecodeError as exc:
        raise SchemaViolationError([f"<root>: response is not valid JSON ({exc.msg})"]) from exc


def _normalize_step(step: Any) -> Any:
    if isinstance(step, dict) and isinstance(step.get("target"), str):
        return {**step, "target": {"targetType": "sprite", "targetName": step["target"]}}
    return step


def normalize_tutorial(raw: Any) -> Any:
    """Return a copy of ``raw`` with string step targets expanded; input is not modified."""
    if not isinstance(raw, dict):
        return raw
    normalized = dict(raw)
    steps = raw.get("steps")
    if isinstance(steps, list):
        normalized["steps"] = [_normalize_step(step) for step in steps]
    return normalized


def _violations(exc: ValidationError) -> List[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
        messages.append(f"{location}: {error.get('msg', 'invalid value')}")
    return messages


def validate_tutorial(raw: Any) -> Tutorial:
    if isinstance(raw, (str, bytes)):
        raw = parse_tutorial_text(raw)
    try:
        return Tutorial.model_validate(normalize_tutorial(raw))
    except ValidationError as exc:
        raise SchemaViolationError(_violations(exc)) from exc
