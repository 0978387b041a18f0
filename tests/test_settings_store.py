"""Tests for the settings store and keyword entry mode flag."""

import asyncio
import json

from chunkloom.settings_store import (
    PLAINTEXT_MODE_KEY,
    SettingsStore,
    is_plaintext_mode,
    toggle_plaintext_mode,
)


class TestSettingsStore:
    """Scoped get/set, persistence and debouncing."""

    def test_scopes_are_independent(self):
        store = SettingsStore()
        store.set("flag", True, extension="one")
        assert store.get("flag", extension="one") is True
        assert store.get("flag", default="unset", extension="two") == "unset"

    def test_flush_writes_and_reloads(self, tmp_path):
        path = tmp_path / "settings.json"
        store = SettingsStore(str(path))
        store.set("flag", True)
        store.flush()
        assert json.loads(path.read_text(encoding="utf-8")) == {"chunkloom": {"flag": True}}
        assert SettingsStore(str(path)).get("flag") is True

    def test_unreadable_file_is_ignored(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")
        assert SettingsStore(str(path)).get("flag") is None

    def test_save_without_loop_is_immediate(self, tmp_path):
        store = SettingsStore(str(tmp_path / "s.json"))
        store.save_debounced()
        assert store.save_count == 1
        assert not store.has_pending_save

    def test_debounced_saves_coalesce(self, tmp_path):
        store = SettingsStore(str(tmp_path / "s.json"), debounce_seconds=0.01)

        async def burst():
            for _ in range(5):
                store.save_debounced()
            assert store.has_pending_save
            await asyncio.sleep(0.05)

        asyncio.run(burst())
        assert store.save_count == 1
        assert (tmp_path / "s.json").exists()


class TestPlaintextMode:
    """The keyword_input_plaintext flag defaults to False and toggles."""

    def test_default_is_structured_mode(self):
        store = SettingsStore()
        assert is_plaintext_mode(store) is False
        assert store.get(PLAINTEXT_MODE_KEY) is False

    def test_toggle_persists(self, tmp_path):
        path = tmp_path / "settings.json"
        store = SettingsStore(str(path))
        assert toggle_plaintext_mode(store) is True
        assert SettingsStore(str(path)).get(PLAINTEXT_MODE_KEY) is True
        assert toggle_plaintext_mode(store) is False
