"""Tests for lla.storage.archivist."""

import json

import pytest

from lla.conversation import Conversation
from lla.messages import create_message
from lla.storage.archivist import MAX_STEM_BYTES, Archivist, filename_for


class TestFilenameFor:
    def test_spaces_become_underscores(self):
        assert filename_for("Rust trait objects") == "Rust_trait_objects.json"

    def test_whitespace_runs_collapse(self):
        assert filename_for("  two   words\t") == "two_words.json"

    def test_path_separators_replaced(self):
        assert filename_for("a/b\\c") == "a-b-c.json"

    def test_empty_title(self):
        assert filename_for("   ") == "untitled.json"

    def test_long_title_is_capped_at_word_boundary(self):
        name = filename_for("A very long rambling title produced by a small model " * 6)

        assert len(name.encode("utf-8")) <= MAX_STEM_BYTES + len(".json")
        assert name.startswith("A_very_long_rambling_title")
        assert not name.endswith("_.json")
        assert name[: -len(".json")].split("_")[-1] in "A very long rambling title produced by a small model".split()

    def test_long_multibyte_title_is_capped_in_bytes(self):
        name = filename_for("é" * 300)
        assert len(name.encode("utf-8")) <= MAX_STEM_BYTES + len(".json")


class TestArchivist:
    def _conversation(self, title="Chat"):
        conversation = Conversation(title, create_message("system", "persona"))
        conversation.add_message(create_message("user", "hi"))
        conversation.add_message(create_message("assistant", "hello"))
        return conversation

    def test_creates_storage_dir(self, tmp_path):
        archivist = Archivist(tmp_path / "nested" / "history")
        assert archivist.storage_path.is_dir()

    def test_save_then_load(self, archivist):
        archivist.save(self._conversation("Weekend plans"))

        loaded = archivist.load("Weekend_plans.json")

        assert loaded.title == "Weekend plans"
        assert [m.role for m in loaded.messages] == ["system", "user", "assistant"]

    def test_load_without_suffix(self, archivist):
        archivist.save(self._conversation("Chat"))
        assert archivist.load("Chat").title == "Chat"

    def test_save_overwrites_same_title(self, archivist):
        conversation = self._conversation("Chat")
        archivist.save(conversation)
        conversation.add_message(create_message("user", "more"))
        archivist.save(conversation)

        assert archivist.list() == ["Chat.json"]
        assert len(archivist.load("Chat").messages) == 4

    def test_list_only_json_sorted(self, archivist):
        archivist.save(self._conversation("b"))
        archivist.save(self._conversation("a"))
        (archivist.storage_path / "notes.txt").write_text("ignore me")

        assert archivist.list() == ["a.json", "b.json"]

    def test_load_missing_raises(self, archivist):
        with pytest.raises(FileNotFoundError):
            archivist.load("nope.json")

    def test_load_invalid_json_raises(self, archivist):
        (archivist.storage_path / "broken.json").write_text("{not json")
        with pytest.raises(ValueError):
            archivist.load("broken.json")

    def test_load_non_object_raises(self, archivist):
        (archivist.storage_path / "list.json").write_text("[]")
        with pytest.raises(ValueError):
            archivist.load("list.json")

    def test_save_long_title(self, archivist):
        title = ("A very long rambling title produced by a small model " * 6).strip()
        archivist.save(self._conversation(title))

        [name] = archivist.list()
        assert archivist.load(name).title == title

    def _write(self, archivist, name, data):
        (archivist.storage_path / name).write_text(json.dumps(data))

    def test_load_non_list_messages_raises(self, archivist):
        self._write(archivist, "x.json", {"title": "x", "messages": 5})
        with pytest.raises(ValueError, match="messages must be a list"):
            archivist.load("x.json")

    def test_load_non_object_message_raises(self, archivist):
        self._write(archivist, "x.json", {"title": "x", "messages": [1]})
        with pytest.raises(ValueError, match="must be an object"):
            archivist.load("x.json")

    def test_load_non_string_title_raises(self, archivist):
        self._write(archivist, "x.json", {"title": 5, "messages": [{"role": "system", "content": "p"}]})
        with pytest.raises(ValueError, match="title must be a string"):
            archivist.load("x.json")

    def test_load_non_string_role_raises(self, archivist):
        self._write(archivist, "x.json", {"title": "x", "messages": [{"role": ["system"], "content": "p"}]})
        with pytest.raises(ValueError, match="role must be a string"):
            archivist.load("x.json")

    def test_load_missing_messages_raises(self, archivist):
        self._write(archivist, "x.json", {"title": "x"})
        with pytest.raises(ValueError):
            archivist.load("x.json")
