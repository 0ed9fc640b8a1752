import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TIMEOUT = 60.0


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str]
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    timeout: float = DEFAULT_TIMEOUT


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Read settings from the environment after loading a .env file if present."""
    load_dotenv(env_file)
    return Settings(
        api_key=os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY"),
        model=os.getenv("SCRATCHTUTOR_MODEL") or DEFAULT_MODEL,
        temperature=_float_env("SCRATCHTUTOR_TEMPERATURE", DEFAULT_TEMPERATURE),
        timeout=_float_env("SCRATCHTUTOR_TIMEOUT", DEFAULT_TIMEOUT),
    )
