"""Archivist: JSON file store for conversations, one file per title."""

import json
import re
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lla.conversation import Conversation

DEFAULT_STORAGE_PATH = "./message_history"

# Well under the 255-byte filename limit of common filesystems.
MAX_STEM_BYTES = 100

_WHITESPACE_RE = re.compile(r"\s+")


def _cap_stem(stem: str) -> str:
    """Shorten ``stem`` to MAX_STEM_BYTES of UTF-8, cutting at a ``_`` when one is near the end."""
    if len(stem.encode("utf-8")) <= MAX_STEM_BYTES:
        return stem
    while len(stem.encode("utf-8")) > MAX_STEM_BYTES:
        stem = stem[:-1]
    cut = stem.rfind("_")
    if cut >= len(stem) // 2:
        stem = stem[:cut]
    return stem.rstrip("_")


def filename_for(title: str) -> str:
    """Derive the storage filename for a conversation title."""
    stem = _WHITESPACE_RE.sub("_", title.strip())
    stem = _cap_stem(stem.replace("/", "-").replace("\\", "-"))
    return f"{stem or 'untitled'}.json"


class Archivist:
    def __init__(self, storage_path: str | Path | None = None):
        self.storage_path = Path(storage_path or DEFAULT_STORAGE_PATH)
        self.storage_path.mkdir(parents=True, exist_ok=True)

    def save(self, conversation: "Conversation") -> Path:
        path = self.storage_path / filename_for(conversation.title)
        path.write_text(json.dumps(conversation.to_dict(), indent=2), encoding="utf-8")
        return path

    def load(self, identifier: str) -> "Conversation":
        """Load a conversation by filename, with or without the .json suffix.

        Raises FileNotFoundError if it does not exist, ValueError if it is not a
        valid conversation document.
        """
        from lla.conversation import Conversation

        filename = identifier if identifier.endswith(".json") else f"{identifier}.json"
        path = self.storage_path / filename
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"{filename} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"{filename} does not contain a conversation object.")
        return Conversation.from_dict(data)

    def list(self) -> list[str]:
        return sorted(p.name for p in self.storage_path.glob("*.json") if p.is_file())
