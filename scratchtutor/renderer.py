"""Render Scratch 3 block graphs as scratchblocks text.

A script starts at a hat block and follows ``next`` links to the end of the
stack. C-shaped blocks recurse into each of their substacks before the walk
continues, so nested loops and conditionals come out indented with a closing
``end`` line. Reporters plugged into inputs are rendered inline.

Rendering never raises for malformed blocks: unknown opcodes fall back to the
raw opcode token and missing operands render as empty slots.
"""

import json
import re
import string
from typing import Any, Dict, List, Mapping, Optional, Set

from .diagnostics import DiagnosticContext
from .opcodes import BOOLEAN_INPUT_NAMES, C_BLOCK_BRANCHES, C_BLOCK_END, HAT_OPCODES, OPCODE_MAP

INDENT = "    "

_PROCCODE_SPLIT = re.compile(r"(%[sbn])")
_formatter = string.Formatter()


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, dict) else {}


def _input_block_id(input_data: Any) -> Optional[str]:
    """Return the block id an input points at, preferring the non-shadow block."""
    if not isinstance(input_data, list) or len(input_data) < 2:
        return None
    value = input_data[1]
    if isinstance(value, str):
        return value
    if value is None and len(input_data) > 2 and isinstance(input_data[2], str):
        return input_data[2]
    return None


def _parse_json_list(raw: Any) -> List[Any]:
    if isinstance(raw, list):
        return raw
    if not isinstance(raw, str):
        return []
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        return []
    return parsed if isinstance(parsed, list) else []


def render_primitive(primitive: List[Any]) -> str:
    """Render an inline literal such as ``[4, "10"]`` in scratchblocks notation."""
    if not primitive:
        return ""
    kind = primitive[0]
    value = primitive[1] if len(primitive) > 1 else ""
    text = "" if value is None else str(value)

    if kind in (4, 5, 6, 7, 8):
        return f"({text})"
    if kind in (9, 10):
        return f"[{text}]"
    if kind == 11:
        return f"({text} v)"
    if kind == 12:
        return f"({text})"
    if kind == 13:
        return f"({text} :: list)"
    return text


def parse_field(field_data: Any) -> str:
    if not isinstance(field_data, list) or not field_data:
        return ""
    value = field_data[0]
    return "" if value is None else str(value)


def _missing_placeholder(fmt: str, name: str) -> str:
    if name in BOOLEAN_INPUT_NAMES:
        return "<>"
    if "[{" + name + "}" in fmt or "({" + name + "}" in fmt:
        return ""
    return "[]"


class _ScriptWalker:
    """Traversal state for rendering one script; discarded afterwards."""

    def __init__(self, blocks: Mapping[str, Any], diagnostics: Optional[DiagnosticContext]) -> None:
        self.blocks = blocks
        self.diagnostics = diagnostics
        self.visited: Set[str] = set()
        self.unknown: Set[str] = set()

    def _claim(self, block_id: Optional[str]) -> Optional[Dict[str, Any]]:
        if not block_id or block_id in self.visited:
            return None
        block = self.blocks.get(block_id)
        if not isinstance(block, dict):
            return None
        self.visited.add(block_id)
        return block

    def stack(self, start_id: Optional[str], depth: int) -> List[str]:
        lines: List[str] = []
        block_id = start_id
        while block_id:
            block = self._claim(block_id)
            if block is None:
                break
            lines.extend(self.block_lines(block, depth))
            next_id = block.get("next")
            block_id = next_id if isinstance(next_id, str) else None
        return lines

    def block_lines(self, block: Dict[str, Any], depth: int) -> List[str]:
        indent = INDENT * depth
        lines = [f"{indent}{self.label(block)}"]

        opcode = block.get("opcode")
        branches = C_BLOCK_BRANCHES.get(opcode) if isinstance(opcode, str) else None
        if branches:
            inputs = _mapping(block.get("inputs"))
            for input_name, divider in branches:
                if divider:
                    lines.append(f"{indent}{divider}")
                branch = inputs.get(input_name) or inputs.get(input_name.lower())
                lines.extend(self.stack(_input_block_id(branch), depth + 1))
            lines.append(f"{indent}{C_BLOCK_END}")
        return lines

    def render_input(self, input_data: Any) -> str:
        if not isinstance(input_data, list) or len(input_data) < 2:
            return ""
        value = input_data[1]
        if isinstance(value, list):
            return render_primitive(value)
        block_id = _input_block_id(input_data)
        if block_id is not None:
            block = self._claim(block_id)
            return self.label(block) if block is not None else ""
        return ""

    def label(self, block: Dict[str, Any]) -> str:
        opcode = block.get("opcode")
        if not isinstance(opcode, str) or not opcode:
            opcode = "unknown"

        if opcode == "procedures_definition":
            return self.definition_label(block)
        if opcode == "procedures_call":
            return self.call_label(block)

        inputs = _mapping(block.get("inputs"))
        fields = _mapping(block.get("fields"))
        branch_names = {name for name, _ in C_BLOCK_BRANCHES.get(opcode, [])}

        args: Dict[str, str] = {}
        for input_name, input_val in inputs.items():
            if input_name.upper() in branch_names:
                continue
            args[input_name] = self.render_input(input_val)
        for field_name, field_val in fields.items():
            args.setdefault(field_name, parse_field(field_val))

        fmt = OPCODE_MAP.get(opcode)
        if fmt is None:
            return self.fallback_label(opcode, args)

        for _, name, _, _ in _formatter.parse(fmt):
            if name and not args.get(name):
                args[name] = _missing_placeholder(fmt, name)
        try:
            return fmt.format(**args)
        except (KeyError, IndexError, ValueError) as exc:
            if self.diagnostics is not None:
                self.diagnostics.warning(f"Could not render block {opcode}", str(exc))
            return opcode

    def fallback_label(self, opcode: str, args: Dict[str, str]) -> str:
        if self.diagnostics is not None and opcode not in self.unknown:
            self.diagnostics.warning(f"Unknown opcode '{opcode}' rendered as raw label")
        self.unknown.add(opcode)
        operands = [value for value in args.values() if value]
        return " ".join([opcode] + operands)

    def definition_label(self, block: Dict[str, Any]) -> str:
        inputs = _mapping(block.get("inputs"))
        prototype = self._claim(_input_block_id(inputs.get("custom_block")))
        if prototype is None:
            return "define unknown"

        mutation = _mapping(prototype.get("mutation"))
        proccode = mutation.get("proccode")
        if not isinstance(proccode, str):
            proccode = ""
        argument_names = _parse_json_list(mutation.get("argumentnames"))

        parts: List[str] = []
        arg_index = 0
        for piece in _PROCCODE_SPLIT.split(proccode):
            if piece in ("%s", "%n", "%b"):
                name = str(argument_names[arg_index]) if arg_index < len(argument_names) else ""
                parts.append(f"<{name}>" if piece == "%b" else f"({name})")
                arg_index += 1
            else:
                parts.append(piece)

        label = "define " + "".join(parts).strip()
        if str(mutation.get("warp", "false")).lower() == "true":
            label += " #norefresh"
        return label

    def call_label(self, block: Dict[str, Any]) -> str:
        inputs = _mapping(block.get("inputs"))
        mutation = _mapping(block.get("mutation"))
        proccode = mutation.get("proccode")
        if not isinstance(proccode, str):
            proccode = ""
        argument_ids = _parse_json_list(mutation.get("argumentids"))

        parts: List[str] = []
        arg_index = 0
        for piece in _PROCCODE_SPLIT.split(proccode):
            if piece in ("%s", "%n", "%b"):
                arg_id = argument_ids[arg_index] if arg_index < len(argument_ids) else None
                rendered = self.render_input(inputs.get(arg_id)) if isinstance(arg_id, str) else ""
                if not rendered:
                    rendered = "<>" if piece == "%b" else "[]"
                parts.append(rendered)
                arg_index += 1
            else:
                parts.append(piece)
        return "".join(parts).strip() or "procedures_call"


def is_hat_block(block: Any) -> bool:
    """A hat starts a script only when it is top level and has a body."""
    return (
        isinstance(block, dict)
        and isinstance(block.get("opcode"), str)
        and block["opcode"] in HAT_OPCODES
        and bool(block.get("topLevel"))
        and bool(block.get("next"))
    )


def find_hat_blocks(blocks: Mapping[str, Any]) -> List[str]:
    return [block_id for block_id, block in blocks.items() if is_hat_block(block)]


def render_script(
    hat_id: str,
    blocks: Mapping[str, Any],
    diagnostics: Optional[DiagnosticContext] = None,
) -> str:
    """Render the stack that starts at ``hat_id``."""
    walker = _ScriptWalker(blocks, diagnostics)
    return "\n".join(walker.stack(hat_id, 0))


def render_target_scripts(
    blocks: Mapping[str, Any],
    diagnostics: Optional[DiagnosticContext] = None,
) -> List[str]:
    """Render every hat-rooted script of one target, in block dictionary order."""
    if not isinstance(blocks, dict):
        return []
    return [render_script(hat_id, blocks, diagnostics) for hat_id in find_hat_blocks(blocks)]
