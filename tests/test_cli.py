"""Tests for the tutor.py command line."""

import json

import pytest

import tutor
from scratchtutor.archive import open_archive


@pytest.fixture
def project_file(tmp_path, cat_sb3):
    path = tmp_path / "CatWalk.sb3"
    path.write_bytes(cat_sb3)
    return path


class TestScriptsCommand:

    def test_prints_scripts(self, project_file, capsys):
        tutor.main(["scripts", str(project_file)])
        out = capsys.readouterr().out
        assert "=== Stage: Stage (0 scripts) ===" in out
        assert "=== Sprite: Cat (1 scripts) ===" in out
        assert "when flag clicked\nmove (10) steps" in out

    def test_corrupt_file_exits(self, tmp_path, capsys):
        path = tmp_path / "broken.sb3"
        path.write_bytes(b"nope")
        with pytest.raises(SystemExit) as excinfo:
            tutor.main(["scripts", str(path)])
        assert excinfo.value.code == 1
        assert capsys.readouterr().err.startswith("Error: Not a valid project archive")

    def test_missing_file_exits(self, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            tutor.main(["scripts", str(tmp_path / "nowhere.sb3")])
        assert excinfo.value.code == 1


class TestAssetsCommand:

    def test_lists_catalog(self, project_file, capsys):
        tutor.main(["assets", str(project_file)])
        out = capsys.readouterr().out
        assert "backdrop1.svg" in out
        assert out.count("abc123.svg") == 1

    def test_extract_one(self, project_file, tmp_path, cat_assets):
        output = tmp_path / "meow.wav"
        tutor.main(["assets", str(project_file), "--extract", "987fed.wav", "-o", str(output)])
        assert output.read_bytes() == cat_assets["987fed.wav"]

    def test_extract_unknown(self, project_file, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            tutor.main(["assets", str(project_file), "--extract", "zzz.png", "-o", str(tmp_path / "z.png")])
        assert excinfo.value.code == 1

    def test_package_all(self, project_file, tmp_path):
        output = tmp_path / "assets.zip"
        tutor.main(["assets", str(project_file), "--all", "-o", str(output)])
        assert sorted(open_archive(output.read_bytes()).names()) == ["Meow.wav", "backdrop1.svg", "cat-b.svg"]


class TestTutorialCommand:

    @pytest.fixture
    def fake_gemini(self, monkeypatch, fake_generator, valid_tutorial):
        monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
        generator = fake_generator(response=json.dumps(valid_tutorial))
        monkeypatch.setattr(tutor, "GeminiTextGenerator", lambda settings: generator)
        return generator

    def test_json_output(self, project_file, fake_gemini, valid_tutorial, capsys):
        tutor.main(["tutorial", str(project_file), "--json"])
        assert json.loads(capsys.readouterr().out) == valid_tutorial
        assert len(fake_gemini.calls) == 1

    def test_text_output_and_export(self, project_file, fake_gemini, capsys):
        tutor.main(["tutorial", str(project_file), "--export"])
        out = capsys.readouterr().out
        assert out.startswith("Project Name: CatWalk")
        assert "Exported document: " in out

    def test_missing_api_key(self, project_file, monkeypatch, tmp_path, capsys):
        for name in ("GOOGLE_API_KEY", "GEMINI_API_KEY"):
            monkeypatch.delenv(name, raising=False)
        with pytest.raises(SystemExit) as excinfo:
            tutor.main(["tutorial", str(project_file), "--env-file", str(tmp_path / "none.env")])
        assert excinfo.value.code == 1
        assert "GOOGLE_API_KEY" in capsys.readouterr().err
