#!/usr/bin/env python3
"""
ScratchTutor command line

Reads a Scratch 3 project (.sb3) and prints its scripts, lists or extracts its
assets, or asks Gemini for a step-by-step tutorial.

Usage:
    python tutor.py scripts Game.sb3
    python tutor.py assets Game.sb3
    python tutor.py assets Game.sb3 --extract 83a9787d4cb6f3b7632b4ddfebf74367.wav -o pop.wav
    python tutor.py assets Game.sb3 --all -o assets.zip
    python tutor.py tutorial Game.sb3 --json
"""

import argparse
import asyncio
import json
import os
import sys
from typing import List, Optional

from scratchtutor.config import load_settings
from scratchtutor.delivery import asset_filename
from scratchtutor.diagnostics import DiagnosticContext
from scratchtutor.errors import TutorError
from scratchtutor.export import PlaceholderDocumentExporter, format_tutorial_text
from scratchtutor.llm import GeminiTextGenerator
from scratchtutor.pipeline import ProjectSession, extract_asset, generate_tutorial, load_session, package_assets
from scratchtutor.synthesizer import TutorialSynthesizer

verbose_mode = False


def error(msg: str, detail: str = "") -> None:
    """Print an error message and exit."""
    print(f"Error: {msg}", file=sys.stderr)
    if verbose_mode and detail:
        print(f"  Detail: {detail}", file=sys.stderr)
    sys.exit(1)


def read_project(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def open_session(path: str, diagnostics: DiagnosticContext) -> ProjectSession:
    return asyncio.run(load_session(read_project(path), diagnostics))


def write_output(path: str, payload: bytes) -> None:
    with open(path, "wb") as f:
        f.write(payload)


def report(diagnostics: DiagnosticContext) -> None:
    if diagnostics.diagnostics:
        diagnostics.print_all()
        print(diagnostics.summary(), file=sys.stderr)


def cmd_scripts(args: argparse.Namespace, diagnostics: DiagnosticContext) -> None:
    session = open_session(args.project, diagnostics)
    for target in session.project.targets:
        kind = "Stage" if target.is_stage else "Sprite"
        print(f"=== {kind}: {target.name} ({len(target.blocks)} scripts) ===")
        for script in target.blocks:
            print(script)
            print()


def cmd_assets(args: argparse.Namespace, diagnostics: DiagnosticContext) -> None:
    session = open_session(args.project, diagnostics)

    if args.extract:
        payload = extract_asset(session, args.extract)
        output = args.output or args.extract
        write_output(output, payload)
        print(f"Extracted {args.extract} -> {output} ({len(payload)} bytes)")
        return

    if args.all:
        output = args.output or "assets.zip"
        write_output(output, package_assets(session, diagnostics=diagnostics))
        print(f"Wrote {output}")
        return

    if not session.catalog:
        print("No assets found.")
        return
    print(f"{'Type':<7} {'File':<30} {'md5ext':<40}")
    print("-" * 77)
    for entry in session.catalog:
        print(f"{entry.type:<7} {asset_filename(entry):<30} {entry.md5ext:<40}")


def cmd_tutorial(args: argparse.Namespace, diagnostics: DiagnosticContext) -> None:
    settings = load_settings(args.env_file)
    if not settings.api_key:
        error("GOOGLE_API_KEY is not set", "Set it in the environment or in a .env file")
    session = open_session(args.project, diagnostics)

    synthesizer = TutorialSynthesizer(
        GeminiTextGenerator(settings),
        timeout=args.timeout if args.timeout is not None else settings.timeout,
    )
    tutorial = asyncio.run(generate_tutorial(session, synthesizer))

    if args.json:
        print(json.dumps(tutorial.to_dict(), indent=2, ensure_ascii=False))
        return
    project_name = os.path.splitext(os.path.basename(args.project))[0]
    text = format_tutorial_text(tutorial, project_name, session.catalog)
    print(text)
    if args.export:
        result = PlaceholderDocumentExporter().export(text)
        print(f"Exported document: {result['documentId']}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tutor.py",
        description="Inspect Scratch 3 projects and generate tutorials for them.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python tutor.py scripts Game.sb3
  python tutor.py assets Game.sb3 --all -o assets.zip
  python tutor.py tutorial Game.sb3 --json
""",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show detailed error messages")

    subparsers = parser.add_subparsers(dest="command", help="Command")

    p_scripts = subparsers.add_parser("scripts", help="Print every script as scratchblocks text")
    p_scripts.add_argument("project", help="Path to the .sb3 file")
    p_scripts.set_defaults(func=cmd_scripts)

    p_assets = subparsers.add_parser("assets", help="List, extract or package costumes and sounds")
    p_assets.add_argument("project", help="Path to the .sb3 file")
    group = p_assets.add_mutually_exclusive_group()
    group.add_argument("--extract", metavar="MD5EXT", help="Extract a single asset by its archive name")
    group.add_argument("--all", action="store_true", help="Package every asset into a zip")
    p_assets.add_argument("--output", "-o", help="Output file")
    p_assets.set_defaults(func=cmd_assets)

    p_tutorial = subparsers.add_parser("tutorial", help="Generate a tutorial with Gemini")
    p_tutorial.add_argument("project", help="Path to the .sb3 file")
    p_tutorial.add_argument("--json", action="store_true", help="Print the tutorial as JSON")
    p_tutorial.add_argument("--export", action="store_true", help="Send the text form to the document exporter")
    p_tutorial.add_argument("--timeout", type=float, help="Seconds to wait for the model")
    p_tutorial.add_argument("--env-file", help="Path to a .env file")
    p_tutorial.set_defaults(func=cmd_tutorial)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    global verbose_mode
    verbose_mode = args.verbose

    if not args.command:
        parser.print_help()
        sys.exit(0)

    diagnostics = DiagnosticContext()
    try:
        args.func(args, diagnostics)
    except TutorError as e:
        report(diagnostics)
        error(e.message, e.detail)
    except OSError as e:
        error(str(e))
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)
    report(diagnostics)


if __name__ == "__main__":
    main()
