"""Tests for environment-based settings."""

from scratchtutor.config import DEFAULT_MODEL, DEFAULT_TEMPERATURE, DEFAULT_TIMEOUT, load_settings

ENV_VARS = (
    "GOOGLE_API_KEY",
    "GEMINI_API_KEY",
    "SCRATCHTUTOR_MODEL",
    "SCRATCHTUTOR_TEMPERATURE",
    "SCRATCHTUTOR_TIMEOUT",
)


def clear_env(monkeypatch):
    """Unset every setting; monkeypatch restores the originals, including values load_dotenv adds."""
    for name in ENV_VARS:
        monkeypatch.setenv(name, "unset")
        monkeypatch.delenv(name)


class TestLoadSettings:

    def test_defaults(self, monkeypatch, tmp_path):
        clear_env(monkeypatch)
        settings = load_settings(str(tmp_path / "missing.env"))
        assert settings.api_key is None
        assert settings.model == DEFAULT_MODEL
        assert settings.temperature == DEFAULT_TEMPERATURE
        assert settings.timeout == DEFAULT_TIMEOUT

    def test_environment_overrides(self, monkeypatch, tmp_path):
        clear_env(monkeypatch)
        monkeypatch.setenv("GEMINI_API_KEY", "gem-key")
        monkeypatch.setenv("SCRATCHTUTOR_MODEL", "gemini-1.5-pro")
        monkeypatch.setenv("SCRATCHTUTOR_TIMEOUT", "12.5")
        settings = load_settings(str(tmp_path / "missing.env"))
        assert settings.api_key == "gem-key"
        assert settings.model == "gemini-1.5-pro"
        assert settings.timeout == 12.5

    def test_bad_number_falls_back(self, monkeypatch, tmp_path):
        clear_env(monkeypatch)
        monkeypatch.setenv("SCRATCHTUTOR_TEMPERATURE", "warm")
        assert load_settings(str(tmp_path / "missing.env")).temperature == DEFAULT_TEMPERATURE

    def test_env_file(self, monkeypatch, tmp_path):
        clear_env(monkeypatch)
        env_file = tmp_path / ".env"
        env_file.write_text("GOOGLE_API_KEY=from-file\n")
        settings = load_settings(str(env_file))
        assert settings.api_key == "from-file"
