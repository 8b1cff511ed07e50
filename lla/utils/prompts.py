"""Persona prompt loading from lla/prompts/."""

from pathlib import Path

PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"

USERNAME_PLACEHOLDER = "{username}"


def load_prompt(name: str, username: str | None = None, prompts_dir: Path | None = None) -> str:
    """Read ``<name>.txt`` and substitute the username placeholder.

    The placeholder is replaced literally so other braces in the prompt are left alone.
    Raises FileNotFoundError if the prompt file does not exist.
    """
    path = (prompts_dir or PROMPTS_DIR) / f"{name}.txt"
    text = path.read_text(encoding="utf-8").strip()
    return text.replace(USERNAME_PLACEHOLDER, username or "the user")
