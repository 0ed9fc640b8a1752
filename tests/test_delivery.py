"""Tests for single and bulk asset extraction."""

import pytest

from scratchtutor.archive import build_archive, open_archive
from scratchtutor.catalog import IMAGE, SOUND, AssetCatalogEntry, build_catalog, find_entry
from scratchtutor.delivery import asset_filename, extract_all, extract_one
from scratchtutor.diagnostics import DiagnosticContext
from scratchtutor.errors import AssetMissingInArchiveError
from scratchtutor.model import Costume, Target
from scratchtutor.project import load_project


class TestExtractOne:

    def test_returns_stored_bytes(self, cat_sb3, cat_assets):
        archive, project = load_project(cat_sb3)
        entry = find_entry(build_catalog(project), "def456.svg")
        assert extract_one(archive, entry) == cat_assets["def456.svg"]

    def test_reinserted_bytes_are_identical(self, cat_sb3):
        archive, project = load_project(cat_sb3)
        entry = find_entry(build_catalog(project), "987fed.wav")
        first = extract_one(archive, entry)
        repacked = open_archive(build_archive([(entry.md5ext, first)]))
        assert extract_one(repacked, entry) == first

    def test_missing_entry(self, make_sb3, cat_manifest):
        archive, project = load_project(make_sb3(cat_manifest, {"abc123.svg": b"<svg/>"}))
        entry = find_entry(build_catalog(project), "987fed.wav")
        with pytest.raises(AssetMissingInArchiveError) as excinfo:
            extract_one(archive, entry)
        assert excinfo.value.md5ext == "987fed.wav"


class TestExtractAll:

    def test_packages_every_asset_by_display_name(self, cat_sb3, cat_assets):
        archive, project = load_project(cat_sb3)
        package = open_archive(extract_all(archive, build_catalog(project)))
        assert sorted(package.names()) == ["Meow.wav", "backdrop1.svg", "cat-b.svg"]
        assert package.read_entry("Meow.wav") == cat_assets["987fed.wav"]

    def test_missing_assets_are_warned_and_skipped(self, make_sb3, cat_manifest):
        archive, project = load_project(make_sb3(cat_manifest, {"abc123.svg": b"<svg/>"}))
        diag = DiagnosticContext()
        package = open_archive(extract_all(archive, build_catalog(project), diag))
        assert package.names() == ["backdrop1.svg"]
        assert len(diag.get_warnings()) == 2
        assert any("987fed.wav" in w.message for w in diag.get_warnings())

    def test_duplicate_names_are_disambiguated(self):
        archive = open_archive(build_archive([("a.png", b"A"), ("b.png", b"B"), ("c.png", b"C")]))
        entries = [
            AssetCatalogEntry(name="pic", md5ext="a.png", data_format="png", type=IMAGE),
            AssetCatalogEntry(name="pic", md5ext="b.png", data_format="png", type=IMAGE),
            AssetCatalogEntry(name="PIC", md5ext="c.png", data_format="png", type=IMAGE),
        ]
        package = open_archive(extract_all(archive, entries))
        assert package.names() == ["pic.png", "pic_2.png", "PIC_3.png"]
        assert package.read_entry("pic_2.png") == b"B"

    def test_empty_catalog(self):
        assert open_archive(extract_all(open_archive(build_archive([])), [])).names() == []


class TestAssetFilename:

    def test_unsafe_characters_replaced(self):
        entry = AssetCatalogEntry(name="my/cat?", md5ext="a1.svg", data_format="svg", type=IMAGE)
        assert asset_filename(entry) == "my_cat.svg"

    def test_blank_name_uses_asset_id(self):
        entry = AssetCatalogEntry(name="???", md5ext="f00d.wav", data_format="wav", type=SOUND)
        assert asset_filename(entry) == "f00d.wav"

    def test_empty_name_from_catalog_uses_content_hash(self):
        costume = Costume(name="", data_format="svg", asset_id="abc123", md5ext="abc123.svg")
        (entry,) = build_catalog([Target(name="Cat", is_stage=False, costumes=(costume,))])
        assert entry.name == "abc123.svg"
        assert asset_filename(entry) == "abc123.svg"

    def test_empty_name_packaged_under_content_hash(self):
        archive = open_archive(build_archive([("abc123.svg", b"<svg/>")]))
        costume = Costume(name="", data_format="svg", asset_id="abc123", md5ext="abc123.svg")
        entries = build_catalog([Target(name="Cat", is_stage=False, costumes=(costume,))])
        assert open_archive(extract_all(archive, entries)).names() == ["abc123.svg"]
