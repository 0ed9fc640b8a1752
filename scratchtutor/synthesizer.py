"""Turn a project model into a tutorial request for the generative capability.

The summary sent to the model is deliberately lossy. It carries names, counts
and a short opcode sample per target so the prompt stays bounded no matter how
large the project is.
"""

import asyncio
import json
from typing import Any, Dict, List, Protocol, Tuple

from .errors import SynthesisUnavailableError
from .model import ProjectModel, Target
from .prompts import NOTATION_REFERENCE, SYSTEM_PROMPT, TUTORIAL_SCHEMA, USER_PROMPT_TEMPLATE

OPCODE_SAMPLE_SIZE = 10
MAX_SUMMARY_TARGETS = 30
MAX_SUMMARY_EXTENSIONS = 20
MAX_NAME_LENGTH = 80


class TextGenerator(Protocol):
    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        ...


def _clip(name: str) -> str:
    return name if len(name) <= MAX_NAME_LENGTH else name[: MAX_NAME_LENGTH - 3] + "..."


def opcode_sample(target: Target, limit: int = OPCODE_SAMPLE_SIZE) -> List[str]:
    """First ``limit`` distinct opcodes of a target, in manifest order."""
    sample: List[str] = []
    for opcode in target.opcodes:
        if len(sample) >= limit:
            break
        if opcode not in sample:
            sample.append(opcode)
    return sample


def summarize_target(target: Target) -> Dict[str, Any]:
    return {
        "name": _clip(target.name),
        "isStage": target.is_stage,
        "blockCount": target.block_count,
        "scriptCount": len(target.blocks),
        "variableCount": target.variable_count,
        "listCount": target.list_count,
        "costumes": len(target.costumes),
        "sounds": len(target.sounds),
        "opcodeSample": opcode_sample(target),
    }


def summarize_project(model: ProjectModel) -> Dict[str, Any]:
    targets = model.targets
    summary: Dict[str, Any] = {
        "targets": [summarize_target(t) for t in targets[:MAX_SUMMARY_TARGETS]],
        "extensions": list(model.extensions[:MAX_SUMMARY_EXTENSIONS]),
    }
    if len(targets) > MAX_SUMMARY_TARGETS:
        summary["omittedTargets"] = len(targets) - MAX_SUMMARY_TARGETS
    return summary


def build_prompts(model: ProjectModel) -> Tuple[str, str]:
    system_prompt = "\n".join(part.strip() for part in (SYSTEM_PROMPT, TUTORIAL_SCHEMA, NOTATION_REFERENCE))
    user_prompt = USER_PROMPT_TEMPLATE.format(summary=json.dumps(summarize_project(model), indent=2)).strip()
    return system_prompt, user_prompt


class TutorialSynthesizer:
    """Issues exactly one generation request per project; no retries."""

    def __init__(self, generator: TextGenerator, timeout: float = 60.0) -> None:
        self.generator = generator
        self.timeout = timeout

    async def synthesize(self, model: ProjectModel) -> str:
        system_prompt, user_prompt = build_prompts(model)
        try:
            text = await asyncio.wait_for(
                self.generator.generate(system_prompt, user_prompt),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            raise SynthesisUnavailableError("Tutorial generation timed out", f"no response after {self.timeout:g}s") from exc
        except Exception as exc:
            raise SynthesisUnavailableError("Tutorial generation failed", str(exc)) from exc
        return text if isinstance(text, str) else str(text)
