"""Runtime settings read from the environment (and ``.env`` when present)."""

import os
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_JURISDICTION = "India"


def _load_env() -> None:
    """Load .env file if python-dotenv is available."""
    try:
        from dotenv import load_dotenv
        load_dotenv()
    except ImportError:
        pass


def _int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    return int(raw) if raw else default


def _float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    return float(raw) if raw else default


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration.

    Every value has a usable default so the pipeline runs without a
    ``.env`` file; only the model credential is needed for a real
    narrative (without it the analyzer degrades, see ``analyzer.py``).
    """

    anthropic_api_key: str = ""
    model: str = DEFAULT_MODEL
    max_tokens: int = 4096
    temperature: float = 0.2
    model_timeout: float = 120.0
    default_jurisdiction: str = DEFAULT_JURISDICTION
    max_workers: int = 4
    api_key: Optional[str] = None
    rate_limit: int = 100
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        _load_env()
        origins = [
            o.strip()
            for o in os.environ.get("ALLOWED_ORIGINS", "*").split(",")
            if o.strip()
        ]
        return cls(
            anthropic_api_key=os.environ.get("ANTHROPIC_API_KEY", ""),
            model=os.environ.get("NYAAYBOT_MODEL", DEFAULT_MODEL),
            max_tokens=_int("NYAAYBOT_MAX_TOKENS", 4096),
            temperature=_float("NYAAYBOT_TEMPERATURE", 0.2),
            model_timeout=_float("NYAAYBOT_MODEL_TIMEOUT", 120.0),
            default_jurisdiction=(
                os.environ.get("NYAAYBOT_DEFAULT_JURISDICTION", "").strip()
                or DEFAULT_JURISDICTION
            ),
            max_workers=max(1, _int("NYAAYBOT_MAX_WORKERS", 4)),
            api_key=os.environ.get("NYAAYBOT_API_KEY") or None,
            rate_limit=_int("NYAAYBOT_RATE_LIMIT", 100),
            allowed_origins=origins or ["*"],
        )
