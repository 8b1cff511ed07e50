"""Centralized config loading: read once at import time."""

import os
from dataclasses import dataclass
from pathlib import Path

import yaml
from dotenv import load_dotenv

from lla.errors import ConfigurationFault

# Load .env from project root (parent of lla/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

CONFIG_PATH = Path(__file__).resolve().parent / "config.yaml"

_config = yaml.safe_load(CONFIG_PATH.read_text())

# Environment variable -> config key
ENV_OVERRIDES = {
    "OLLAMA_URL": "ollama_url",
    "ORCHESTRATOR": "orchestrator_model",
    "CONVERSATIONALIST": "conversationalist_model",
    "LABELER": "labeler_model",
    "LLA_MAX_ITERATIONS": "max_iterations",
    "LLA_HISTORY_DIR": "history_dir",
    "LLA_USERNAME": "username",
}

REQUIRED_KEYS = ("ollama_url", "orchestrator_model", "conversationalist_model", "labeler_model")


@dataclass(frozen=True)
class Settings:
    ollama_url: str
    orchestrator_model: str
    conversationalist_model: str
    labeler_model: str
    max_iterations: int = 5
    history_dir: str = "./message_history"
    username: str | None = None
    request_timeout: float | None = None


def get_config() -> dict:
    """Return the loaded config dictionary."""
    return _config


def load_settings(environ=None) -> Settings:
    """Resolve Settings from config.yaml plus environment overrides.

    Raises ConfigurationFault listing every missing or invalid key.
    """
    environ = os.environ if environ is None else environ
    merged = dict(get_config() or {})
    for env_name, key in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value:
            merged[key] = value

    problems = [f"{key} is not set" for key in REQUIRED_KEYS if not merged.get(key)]

    raw_iterations = merged.get("max_iterations", 5)
    try:
        max_iterations = int(raw_iterations)
    except (TypeError, ValueError):
        max_iterations = -1
    if max_iterations < 0:
        problems.append(f"max_iterations must be a non-negative integer (got {raw_iterations!r})")

    timeout = merged.get("request_timeout")
    if timeout is not None:
        try:
            timeout = float(timeout)
        except (TypeError, ValueError):
            problems.append(f"request_timeout must be a number (got {timeout!r})")

    if problems:
        raise ConfigurationFault("Invalid configuration: " + "; ".join(problems))

    return Settings(
        ollama_url=str(merged["ollama_url"]),
        orchestrator_model=str(merged["orchestrator_model"]),
        conversationalist_model=str(merged["conversationalist_model"]),
        labeler_model=str(merged["labeler_model"]),
        max_iterations=max_iterations,
        history_dir=str(merged.get("history_dir") or "./message_history"),
        username=merged.get("username") or None,
        request_timeout=timeout,
    )
