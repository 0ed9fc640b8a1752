"""Pytest fixtures for the scratchtutor tests."""

import asyncio
import copy
import json

import pytest

from scratchtutor.archive import build_archive

STAGE_SVG = b"<svg xmlns='http://www.w3.org/2000/svg'><rect width='480' height='360'/></svg>"
CAT_SVG = b"<svg xmlns='http://www.w3.org/2000/svg'><circle r='20'/></svg>"
MEOW_WAV = b"RIFF\x24\x00\x00\x00WAVEfmt " + bytes(range(32))


class FakeGenerator:
    """Stands in for Gemini; records every prompt pair it receives."""

    def __init__(self, response="", error=None, delay=0.0):
        self.response = response
        self.error = error
        self.delay = delay
        self.calls = []

    async def generate(self, system_prompt, user_prompt):
        self.calls.append((system_prompt, user_prompt))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def cat_manifest():
    """Stage plus one sprite with a single green flag script.

    The stage backdrop and the cat's first costume share ``abc123.svg``.
    """
    return {
        "targets": [
            {
                "isStage": True,
                "name": "Stage",
                "variables": {"v1": ["score", 0]},
                "lists": {},
                "blocks": {},
                "costumes": [
                    {"name": "backdrop1", "dataFormat": "svg", "assetId": "abc123", "md5ext": "abc123.svg"},
                ],
                "sounds": [],
            },
            {
                "isStage": False,
                "name": "Cat",
                "variables": {},
                "lists": {},
                "blocks": {
                    "a": {
                        "opcode": "event_whenflagclicked",
                        "next": "b",
                        "parent": None,
                        "inputs": {},
                        "fields": {},
                        "topLevel": True,
                    },
                    "b": {
                        "opcode": "motion_movesteps",
                        "next": None,
                        "parent": "a",
                        "inputs": {"STEPS": [1, [4, "10"]]},
                        "fields": {},
                        "topLevel": False,
                    },
                },
                "costumes": [
                    {"name": "cat-a", "dataFormat": "svg", "assetId": "abc123", "md5ext": "abc123.svg"},
                    {"name": "cat-b", "dataFormat": "svg", "assetId": "def456", "md5ext": "def456.svg"},
                ],
                "sounds": [
                    {"name": "Meow", "dataFormat": "wav", "assetId": "987fed", "md5ext": "987fed.wav"},
                ],
            },
        ],
        "extensions": [],
        "meta": {"semver": "3.0.0"},
    }


@pytest.fixture
def cat_assets():
    return {
        "abc123.svg": STAGE_SVG,
        "def456.svg": CAT_SVG,
        "987fed.wav": MEOW_WAV,
    }


@pytest.fixture
def make_sb3():
    """Return a factory that packs a manifest and asset payloads into .sb3 bytes."""

    def _make(manifest=None, assets=None, raw_manifest=None):
        entries = []
        if raw_manifest is not None:
            entries.append(("project.json", raw_manifest))
        elif manifest is not None:
            entries.append(("project.json", json.dumps(manifest).encode("utf-8")))
        for name, payload in (assets or {}).items():
            entries.append((name, payload))
        return build_archive(entries)

    return _make


@pytest.fixture
def cat_sb3(make_sb3, cat_manifest, cat_assets):
    return make_sb3(cat_manifest, cat_assets)


@pytest.fixture
def valid_tutorial():
    return {
        "description": "A cat walks across the stage when the green flag is clicked.",
        "sprites": [{"name": "Cat", "description": "The main character."}],
        "steps": [
            {
                "title": "Make the cat move",
                "target": {"targetType": "sprite", "targetName": "Cat"},
                "code": "when flag clicked\nmove (10) steps",
                "explanation": "When you click the green flag the cat takes ten steps.",
            }
        ],
        "extensions": ["Add a forever loop so the cat keeps walking."],
    }


@pytest.fixture
def tutorial_copy(valid_tutorial):
    """Return a factory of deep copies so tests can edit freely."""
    return lambda: copy.deepcopy(valid_tutorial)


@pytest.fixture
def fake_generator():
    return FakeGenerator
